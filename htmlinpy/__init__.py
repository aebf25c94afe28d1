"""Helpers for generating HTML pages from markdown and an HTML boilerplate."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as load_pkg_version
from pathlib import Path
import tomllib

from .boilerplate import BoilerplateNotFoundError, find_references, load_boilerplate, locate_boilerplate
from .edit import DELETE, PASS, Delete, PassThrough, Replace, edit, lines
from .markdown import render_markdown
from .pages import generate_site
from .paths import ensure_exists, find_all, remove_path
from .staging import copy_file, is_up_to_date
from .writer import read_text, save

__all__ = [
    "__version__",
    "BoilerplateNotFoundError",
    "DELETE",
    "Delete",
    "PASS",
    "PassThrough",
    "Replace",
    "copy_file",
    "edit",
    "ensure_exists",
    "find_all",
    "find_references",
    "generate_site",
    "is_up_to_date",
    "lines",
    "load_boilerplate",
    "locate_boilerplate",
    "read_text",
    "remove_path",
    "render_markdown",
    "save",
]


def _read_local_project_version() -> str:
    """Read the project version from pyproject.toml when the package is uninstalled."""
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return "0.0.0"
    return data.get("project", {}).get("version", "0.0.0")


try:
    __version__ = load_pkg_version("htmlinpy")
except PackageNotFoundError:
    __version__ = _read_local_project_version()
