"""Read source text and persist generated pages atomically."""

from __future__ import annotations

import errno
import logging
import os
import tempfile
from pathlib import Path

from .paths import ensure_exists

logger = logging.getLogger(__name__)

WIP_SUFFIX = "~wip"


def read_text(path: str | Path) -> str:
    """Read a UTF-8 file into a string."""
    return Path(path).read_text(encoding="utf-8")


def save(content: str, destination: str | Path) -> Path:
    """Write ``content`` to ``destination`` without exposing a partial file.

    The text goes to a uniquely named ``<name>.XXXX~wip`` file in the temp
    directory and is renamed over the destination. If the temp directory is
    on another filesystem the work file is staged beside the destination
    instead so the rename stays atomic.
    """
    target = Path(destination)
    ensure_exists(target.parent)

    staging = _write_work_file(Path(tempfile.gettempdir()), f"{target.name}.", content)
    try:
        os.replace(staging, target)
    except OSError as exc:
        staging.unlink(missing_ok=True)
        if exc.errno != errno.EXDEV:
            raise
        local = _write_work_file(target.parent, f".{target.name}.", content)
        try:
            os.replace(local, target)
        except OSError:
            local.unlink(missing_ok=True)
            raise

    logger.info("Wrote %s", target)
    return target


def _write_work_file(directory: Path, prefix: str, content: str) -> Path:
    # Created with O_EXCL, so a planted file or symlink is never followed.
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="",
        dir=directory,
        prefix=prefix,
        suffix=WIP_SUFFIX,
        delete=False,
    ) as handle:
        path = Path(handle.name)
        try:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        except OSError:
            handle.close()
            path.unlink(missing_ok=True)
            raise
    try:
        os.chmod(path, _default_mode())
    except OSError:
        path.unlink(missing_ok=True)
        raise
    return path


def _default_mode() -> int:
    # Temp files start as 0600; published pages get the usual umask-based mode.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
