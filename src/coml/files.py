"""Reading and writing coml files."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import ParserConfig
from .document import Document
from .errors import ComlIOError
from .reader import parse
from .writer import dumps

logger = logging.getLogger(__name__)


def load(path: str | Path, config: ParserConfig | None = None) -> Document:
    """Read *path* and parse it.

    Raises ComlIOError if the file cannot be read, or a ParseError.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ComlIOError(f"cannot read {path}: {exc}") from exc
    logger.debug("loaded %s (%d bytes)", path, len(text))
    return parse(text, config)


def save(doc: Document, path: str | Path) -> bool:
    """Serialize *doc* to *path*, truncating any existing file.

    Returns False if the file could not be written.
    """
    if not str(path):
        logger.error("cannot save: empty path")
        return False

    path = Path(path)
    text = dumps(doc)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        logger.error("cannot write %s: %s", path, exc)
        return False
    return True
