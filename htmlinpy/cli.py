"""CLI entrypoints for htmlinpy site generation."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from .boilerplate import BoilerplateNotFoundError
from .config import CONFIG_FILENAME, Config, load_config
from .markdown import render_file
from .pages import SiteResult, generate_site
from .paths import remove_path

console = Console()
app = typer.Typer(help="Render a static site from markdown and an HTML boilerplate.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file or project directory."),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every copy, skip, and write."),
    ] = False,
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def build(
    config_path: ConfigPathOption = CONFIG_FILENAME,
    clean_first: Annotated[
        bool,
        typer.Option("--clean", help="Remove the output directory before generating."),
    ] = False,
) -> None:
    """Generate the index and every page into the output directory."""
    config: Config = _load(config_path)

    if clean_first and remove_path(config.output_dir):
        console.print(f"[bold yellow]Cleaned[/]: {_display_path(config.output_dir)}")

    try:
        result = generate_site(config)
    except BoilerplateNotFoundError as exc:
        console.print(f"[bold red]Boilerplate missing[/]: {exc}")
        raise typer.Exit(code=1) from exc

    _print_build_summary(config, result)


@app.command()
def clean(config_path: ConfigPathOption = CONFIG_FILENAME) -> None:
    """Remove the generated output directory."""
    config: Config = _load(config_path)
    if remove_path(config.output_dir):
        console.print(f"[bold green]Removed[/]: {_display_path(config.output_dir)}")
    else:
        console.print(f"[bold yellow]Skipping[/]: {_display_path(config.output_dir)} not found")


@app.command()
def render(
    source: Annotated[
        Path,
        typer.Argument(..., exists=True, dir_okay=False, help="Markdown file to render."),
    ],
) -> None:
    """Print the HTML rendering of a markdown file."""
    typer.echo(render_file(source), nl=False)


def _print_build_summary(config: Config, result: SiteResult) -> None:
    console.print(
        f"[bold green]Site[/]: wrote {result.total} file(s); index at {_display_path(result.index)}"
    )
    if result.pages:
        console.print(
            "[bold green]Pages[/]: "
            f"rendered {len(result.pages)} page(s) into {_display_path(config.output_dir)}"
        )
    else:
        console.print(f"[bold yellow]Pages[/]: no markdown found in {_display_path(config.pages_dir)}")


def _display_path(path: Path) -> str:
    try:
        return path.relative_to(Path.cwd()).as_posix()
    except ValueError:
        return path.as_posix()


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
