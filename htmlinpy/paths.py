"""Filesystem helpers for materializing, finding, and removing paths."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def is_dir(path: str | Path) -> bool:
    """Return True when ``path`` names a directory (False on any stat error).

    A trailing separator marks a directory even if it does not exist yet.
    """
    text = os.fspath(path)
    if text.endswith(("/", os.sep)):
        return True
    try:
        return Path(text).is_dir()
    except OSError:
        return False


def ensure_exists(directory: str | Path) -> None:
    """Create every missing segment of ``directory``, shallowest first.

    Segments that already exist are left alone; any other failure to create a
    segment propagates.
    """
    normalized = os.path.normpath(os.fspath(directory))
    if is_dir(normalized):
        return

    # Path.parts drops a leading "." and keeps the root of absolute paths.
    parts = Path(normalized).parts
    current = Path()
    for part in parts:
        current = current / part
        try:
            current.mkdir()
        except FileExistsError:
            continue
        logger.debug("Created directory %s", current)


def find_all(root: str | Path, extension: str | None = None) -> list[Path]:
    """Recursively list files under ``root``, optionally filtered by extension."""
    suffix = extension
    if suffix and not suffix.startswith("."):
        suffix = f".{suffix}"

    found: list[Path] = []
    with os.scandir(root) as entries:
        for entry in sorted(entries, key=lambda item: item.name):
            path = Path(root) / entry.name
            if entry.is_dir(follow_symlinks=False):
                found.extend(find_all(path, suffix))
            elif entry.is_file():
                if not suffix or entry.name.endswith(suffix):
                    found.append(path)
    return found


def remove_path(path: str | Path) -> bool:
    """Delete a file or directory tree; a missing path is not an error.

    Returns True when something was removed.
    """
    target = Path(path)
    if not target.exists() and not target.is_symlink():
        return False

    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    else:
        target.unlink(missing_ok=True)
    logger.debug("Removed %s", target)
    return True
