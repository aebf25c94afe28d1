"""Build the index and per-page HTML from markdown sources and the boilerplate."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from html import escape
from pathlib import Path
from typing import Callable, Sequence, Union

from .boilerplate import load_boilerplate
from .config import Config
from .edit import edit, lines
from .markdown import render_markdown
from .paths import find_all
from .writer import read_text, save

logger = logging.getLogger(__name__)

TITLE_ELEMENT = re.compile(r"<title>.*?</title>")
AUTHOR_DELIMITERS = " \t*_~-–—()[]<>\"'`"

Content = Union[str, Callable[[], str]]


@dataclass(frozen=True, slots=True)
class PageInfo:
    """Metadata pulled from the first and last lines of a page source."""

    title: str
    author: str


@dataclass(frozen=True, slots=True)
class Page:
    """A markdown source rendered to HTML."""

    name: str
    html: str
    info: PageInfo

    @property
    def filename(self) -> str:
        return f"{self.name}.html"


@dataclass(slots=True)
class SiteResult:
    """Files produced by :func:`generate_site`."""

    index: Path
    pages: list[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.pages) + 1


def parse_meta(text: str) -> PageInfo:
    """Title from the first line (minus ``# ``), author from the last line."""
    content = [line for line in lines(text) if line.strip()]
    if not content:
        return PageInfo(title="", author="")
    title = content[0].strip().removeprefix("# ").strip()
    author = content[-1].strip().strip(AUTHOR_DELIMITERS)
    return PageInfo(title=title, author=author)


def parse_page(path: Path) -> Page:
    text = read_text(path)
    return Page(name=path.stem, html=render_markdown(text), info=parse_meta(text))


def load_pages(pages_dir: Path) -> list[Page]:
    """Parse every ``.md`` file under ``pages_dir``."""
    if not pages_dir.is_dir():
        logger.warning("Pages directory %s not found; no pages to render.", pages_dir)
        return []
    return [parse_page(path) for path in find_all(pages_dir, "md")]


def set_title(html: str, title: str, marker: str = "<title>") -> str:
    """Put ``title`` into the ``<title>`` element on every line with ``marker``."""
    element = f"<title>{escape(title, quote=False)}</title>"

    def _transform(line: str) -> str | None:
        if marker not in line:
            return None
        if TITLE_ELEMENT.search(line):
            return TITLE_ELEMENT.sub(lambda _match: element, line, count=1)
        return element

    return edit(html, _transform)


def set_content(html: str, content: Content, marker: str = "Hello world") -> str:
    """Replace the template placeholder with a ``<div id=content>`` block.

    The innermost element holding the placeholder text is replaced; when the
    placeholder is not wrapped in its own element only the text is replaced.
    ``content`` may be a callable, evaluated for each matching line.
    """
    wrapper = re.compile(
        r"<(?P<tag>[A-Za-z][\w-]*)(?:\s[^>]*)?>[^<]*" + re.escape(marker) + r"[^<]*</(?P=tag)>"
    )

    def _transform(line: str) -> list[str] | None:
        if marker not in line:
            return None
        body = content() if callable(content) else content
        block = f"<div id=content>\n{body}\n</div>"
        match = wrapper.search(line)
        if match:
            rewritten = line[: match.start()] + block + line[match.end() :]
        else:
            rewritten = line.replace(marker, block, 1)
        return lines(rewritten)

    return edit(html, _transform)


def render_index_body(pages: Sequence[Page], main_html: str, heading: str) -> str:
    items = "".join(
        f'<li><a href="{escape(page.filename)}">{escape(page.info.title, quote=False)}</a></li>'
        for page in pages
    )
    return f"{main_html}<h2>{escape(heading, quote=False)}</h2>\n<ul>\n{items}\n</ul>"


def write_index(config: Config, template: str, pages: Sequence[Page]) -> Path:
    """Render ``index.html`` listing every page."""
    site = config.site
    main_html = ""
    if config.main_page is not None:
        if config.main_page.is_file():
            main_html = render_markdown(read_text(config.main_page))
        else:
            logger.debug("Main page %s not found; index has no intro.", config.main_page)

    html = set_title(template, site.title, site.title_marker)
    html = set_content(html, lambda: render_index_body(pages, main_html, site.index_heading), site.content_marker)
    return save(html, config.output_dir / "index.html")


def write_pages(config: Config, template: str, pages: Sequence[Page]) -> list[Path]:
    """Render one HTML file per page into the output directory."""
    site = config.site
    written: list[Path] = []
    for page in pages:
        html = set_title(template, page.info.title, site.title_marker)
        html = set_content(html, f"<div id={site.content_wrapper_id}>{page.html}</div>", site.content_marker)
        written.append(save(html, config.output_dir / page.filename))
    return written


def generate_site(config: Config) -> SiteResult:
    """Load the boilerplate once, mirror its assets, and write every page."""
    template = load_boilerplate(
        config.output_dir,
        module_path=config.boilerplate.module_path,
        anchor=config.boilerplate.anchor,
    )
    pages = load_pages(config.pages_dir)
    index = write_index(config, template, pages)
    written = write_pages(config, template, pages)
    logger.info("Generated %d page(s) into %s", len(written) + 1, config.output_dir)
    return SiteResult(index=index, pages=written)
