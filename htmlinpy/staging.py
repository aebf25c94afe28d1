"""Mirror asset files into the output tree, skipping copies that are current."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from .paths import ensure_exists, is_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileSyncRecord:
    """Size and newest timestamp of a file, read fresh from the filesystem."""

    size: int
    newest_ns: int

    @classmethod
    def read(cls, path: str | Path) -> "FileSyncRecord":
        info = os.lstat(path)
        return cls(size=info.st_size, newest_ns=max(info.st_mtime_ns, info.st_ctime_ns))


def is_up_to_date(source: str | Path, destination: str | Path) -> bool:
    """Return True when ``destination`` can stand in for a copy of ``source``.

    Sizes must match and the destination's newest of mtime/ctime must not be
    older than the source's. Any stat failure counts as stale.
    """
    try:
        dst = FileSyncRecord.read(destination)
        src = FileSyncRecord.read(source)
    except OSError:
        return False

    if dst.size != src.size:
        return False
    return dst.newest_ns >= src.newest_ns


def resolve_destination(source: str | Path, destination: str | Path) -> Path:
    """Treat a directory destination as ``destination / source.name``."""
    if is_dir(destination):
        return Path(destination) / Path(source).name
    return Path(destination)


def copy_file(source: str | Path, destination: str | Path) -> bool:
    """Copy ``source`` to ``destination`` unless an up-to-date copy is there.

    Returns True when bytes were written.
    """
    target = resolve_destination(source, destination)
    if is_up_to_date(source, target):
        logger.debug("Skipping %s; %s is up to date", source, target)
        return False

    ensure_exists(target.parent)
    shutil.copyfile(source, target)
    logger.info("Copied %s -> %s", source, target)
    return True
