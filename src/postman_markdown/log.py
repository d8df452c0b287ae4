"""Logging setup for the command line."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the package logger.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("postman_markdown")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers = [handler]
