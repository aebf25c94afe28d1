from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .boilerplate import DEFAULT_MODULE_PATH

CONFIG_FILENAME = "htmlinpy.yml"


class BoilerplateConfig(BaseModel):
    """Where to look for the HTML boilerplate template tree."""

    module_path: str = Field(
        default=DEFAULT_MODULE_PATH,
        description="Template directory, relative to the anchor or one of its parents.",
    )
    anchor: Path | None = Field(
        default=None,
        description="Directory the upward search starts from (defaults to the package directory).",
    )

    @field_validator("module_path")
    def _strip_module_path(cls, value: str) -> str:
        text = value.strip().strip("/")
        if not text:
            raise ValueError("Boilerplate module_path must not be empty.")
        return text

    @field_validator("anchor", mode="before")
    def _ensure_path(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        return Path(value)


class SiteConfig(BaseModel):
    """Text and markers used when injecting pages into the template."""

    title: str = Field(default="Example site for HTML-in-JS", description="Title of the index page.")
    index_heading: str = Field(default="Nice Poems", description="Heading above the page list.")
    title_marker: str = Field(default="<title>", description="Lines containing this get the page title.")
    content_marker: str = Field(
        default="Hello world",
        description="Placeholder text in the template replaced by page content.",
    )
    content_wrapper_id: str = Field(default="poem", description="id of the div wrapping each page body.")

    @field_validator("title_marker", "content_marker")
    def _require_marker(cls, value: str) -> str:
        if not value:
            raise ValueError("Template markers must not be empty.")
        return value


class Config(BaseModel):
    project_name: str = Field(default="htmlinpy site")
    pages_dir: Path = Field(default=Path("src"))
    main_page: Path | None = Field(default=Path("main.md"))
    output_dir: Path = Field(default=Path("site"))
    boilerplate: BoilerplateConfig = Field(default_factory=BoilerplateConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)

    @field_validator("pages_dir", "output_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("main_page", mode="before")
    def _ensure_optional_path(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        return Path(value)


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    ``path`` may point to a file (e.g. ``/site/htmlinpy.yml``) or a directory
    containing that file. A directory without one yields the defaults. All
    relative paths, including the boilerplate anchor, are interpreted relative
    to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            with config_file.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        with candidate.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        base_dir = candidate.parent.resolve()

    if not isinstance(data, dict):
        raise ValueError(f"Configuration {candidate} must define a mapping at the top level.")

    cfg = Config(**data)

    def _abs(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.pages_dir = _abs(cfg.pages_dir)
    cfg.output_dir = _abs(cfg.output_dir)
    if cfg.main_page is not None:
        cfg.main_page = _abs(cfg.main_page)

    # Search for the boilerplate from the project, not from the installed package.
    bp = cfg.boilerplate
    bp.anchor = _abs(bp.anchor) if bp.anchor is not None else base_dir

    return cfg
