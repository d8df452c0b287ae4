"""Exceptions raised while loading, rendering or writing a collection."""


class PostmanMarkdownError(Exception):
    """Base class for all errors raised by postman-markdown."""


class MalformedDocument(PostmanMarkdownError):
    """Required collection structure is missing or has the wrong shape."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class DocumentWriteError(PostmanMarkdownError):
    """The rendered document could not be persisted."""
