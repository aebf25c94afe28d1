"""Render page sources and the index intro from markdown to HTML."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import cast

from markdown_it import MarkdownIt
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .writer import read_text


@lru_cache(maxsize=1)
def _renderer() -> MarkdownIt:
    """Configure and cache a renderer with raw HTML and typographic replacements."""
    md = MarkdownIt("commonmark", {"html": True, "linkify": True, "typographer": True})
    md.enable(["linkify", "replacements", "smartquotes"])
    md.enable("table").enable("strikethrough")
    md.use(deflist_plugin)
    md.use(footnote_plugin)
    md.use(tasklists_plugin, label=True)
    return md


def render_markdown(text: str) -> str:
    """Render markdown text; whitespace-only input yields an empty string."""
    if not text.strip():
        return ""
    return cast(str, _renderer().render(text))


def render_file(path: str | Path) -> str:
    """Read a UTF-8 markdown file and render it."""
    return render_markdown(read_text(path))
