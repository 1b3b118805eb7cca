from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def write_if_changed(path: Path, content: str, *, errors: str = "strict") -> bool:
    """Write `content` unless the file already holds exactly that text."""
    if path.is_file() and path.read_text(encoding="utf-8", errors=errors) == content:
        logger.debug("unchanged %s", path)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", errors=errors)
    logger.debug("wrote %s", path)
    return True


def write_if_missing(path: Path, content: str) -> bool:
    """Write `content` only when nothing exists at `path` yet."""
    if path.exists():
        logger.debug("keeping existing %s", path)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug("created %s", path)
    return True


def delete_if_exists(path: Path) -> None:
    if path.is_file():
        path.unlink()
        logger.debug("deleted %s", path)
