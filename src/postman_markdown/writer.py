"""Persist rendered Markdown to disk."""

import logging
from pathlib import Path

from postman_markdown.errors import DocumentWriteError

logger = logging.getLogger(__name__)


def write_markdown(content: str, file_name: str, directory: Path | None = None) -> Path:
    """Write `content` to `<directory>/<file_name>.md` and return the path.

    Writes to the current directory when no directory is given.
    """
    file_path = Path(f"{file_name}.md") if directory is None else directory / f"{file_name}.md"

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise DocumentWriteError(f"cannot write {file_path}: {e}") from e

    logger.debug("Wrote %d characters to %s", len(content), file_path)
    return file_path
