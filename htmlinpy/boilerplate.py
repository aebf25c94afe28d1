"""Locate the HTML boilerplate template and mirror the assets it references.

The boilerplate is an external template tree (by default the ``dist`` folder
of the html5-boilerplate npm package). It is found by walking up from an
anchor directory, the same way ``node_modules`` lookups work.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .staging import copy_file
from .writer import read_text

logger = logging.getLogger(__name__)

DEFAULT_MODULE_PATH = "node_modules/html5-boilerplate/dist"
TEMPLATE_FILENAME = "index.html"
PACKAGE_DIR = Path(__file__).resolve().parent

REFERENCE_PATTERN = re.compile(r'(?:href|src)="([^"]*)"')


class BoilerplateNotFoundError(FileNotFoundError):
    """Raised when no boilerplate directory exists above the anchor."""


def find_references(html: str) -> list[str]:
    """Return local ``href``/``src`` values in document order.

    Values starting with ``http`` are treated as remote and skipped.
    Duplicates are kept.
    """
    return [
        match.group(1)
        for match in REFERENCE_PATTERN.finditer(html)
        if not match.group(1).startswith("http")
    ]


def locate_boilerplate(
    module_path: str = DEFAULT_MODULE_PATH,
    anchor: str | Path | None = None,
) -> Path | None:
    """Search ``anchor`` and each of its parents for ``module_path``."""
    current = Path(anchor).resolve() if anchor is not None else PACKAGE_DIR
    previous: Path | None = None
    while previous != current:
        candidate = current / module_path
        previous = current
        current = current.parent
        if candidate.is_dir():
            return candidate
    return None


def mirror_references(html: str, template_root: Path, output_root: Path) -> list[Path]:
    """Copy each referenced asset into ``output_root`` at the same relative path.

    Destinations that already exist are left untouched. A reference whose
    source is missing from the template raises ``FileNotFoundError``.
    Returns the paths that were written.
    """
    written: list[Path] = []
    for reference in find_references(html):
        parts = [part for part in reference.split("/") if part]
        if not parts:
            continue
        source = template_root.joinpath(*parts)
        destination = output_root.joinpath(*parts)
        if destination.exists():
            logger.debug("Asset %s already present at %s", reference, destination)
            continue
        if copy_file(source, destination):
            written.append(destination)
    return written


def load_boilerplate(
    output_root: str | Path | None = None,
    *,
    module_path: str = DEFAULT_MODULE_PATH,
    anchor: str | Path | None = None,
) -> str:
    """Return the boilerplate ``index.html`` and mirror its assets.

    Assets are only mirrored when ``output_root`` is given.
    """
    location = locate_boilerplate(module_path, anchor)
    if location is None:
        start = anchor if anchor is not None else PACKAGE_DIR
        raise BoilerplateNotFoundError(f"Failed to find boilerplate '{module_path}' above {start}")

    html = read_text(location / TEMPLATE_FILENAME)
    if output_root is not None:
        mirror_references(html, location, Path(output_root))
    return html
