"""CLI application entry point for hoardview.

This module provides the main CLI interface using Typer.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import structlog
import typer

from hoardview import __version__
from hoardview.cli.output import (
    console,
    create_progress,
    print_error,
    print_gallery_summary,
    print_groups,
    print_header,
    print_preview,
    print_saved,
    print_step,
)
from hoardview.config import CacheConfig, LoggingConfig, ViewerSettings
from hoardview.config.settings import CACHE_DIR_ENV
from hoardview.core import build_collection, open_orchestrator, reveal_all, stem
from hoardview.domain import FontPreview, OutputFormat
from hoardview.exceptions import HoardViewError, RemoteFetchError
from hoardview.utils import RevealStats, configure_logging
from hoardview.web import GalleryPage, ShowLink, download_buttons, download_bytes

# Create the Typer app
app = typer.Typer(
    name="hoardview",
    help="Browse, preview and convert the bitmap fonts in a GitHub font hoard.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Settings and logger shared by all commands of one invocation."""

    settings: ViewerSettings
    logger: structlog.stdlib.BoundLogger
    quiet: bool = False


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]hoardview[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    cache_dir: Annotated[
        Path | None,
        typer.Option(
            "--cache-dir",
            envvar=CACHE_DIR_ENV,
            help="Directory of the listing and preview cache",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Browse, preview and convert the bitmap fonts in a GitHub font hoard."""
    settings = ViewerSettings(
        cache=CacheConfig(cache_dir=cache_dir) if cache_dir is not None else CacheConfig(),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(settings=settings, logger=logger, quiet=quiet)


@app.command("list")
def list_fonts(ctx: typer.Context) -> None:
    """List the fonts in the collection, grouped by directory."""
    state: CliState = ctx.obj

    async def run() -> None:
        async with open_orchestrator(state.settings, state.logger) as orchestrator:
            tree = await orchestrator.get_directory_listing()
        print_groups(build_collection(tree, state.settings.collection.extensions))

    _run_command(run())


@app.command()
def show(
    ctx: typer.Context,
    font: Annotated[
        str,
        typer.Argument(help="Path of the font in the repository", show_default=False),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Where to write the preview (default: {stem}-preview.png)",
        ),
    ] = None,
) -> None:
    """Render a preview of one font and save it as PNG."""
    state: CliState = ctx.obj

    async def run() -> FontPreview:
        async with open_orchestrator(state.settings, state.logger) as orchestrator:
            return await orchestrator.render_preview(font)

    preview = _run_command(run())
    target = output if output is not None else Path(f"{stem(font)}-preview.png")
    target.write_bytes(preview.image)
    if not state.quiet:
        print_preview(preview.name, preview.path, preview.cached)
        print_saved(target, len(preview.image))


@app.command()
def convert(
    ctx: typer.Context,
    font: Annotated[
        str,
        typer.Argument(help="Path of the font in the repository", show_default=False),
    ],
    format_label: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format (png|otb|bdf|fon|bmfont|yaff)",
        ),
    ] = "yaff",
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-d",
            help="Directory to write the converted file to",
        ),
    ] = Path("."),
) -> None:
    """Convert one font to another format and save it."""
    state: CliState = ctx.obj

    try:
        fmt = state.settings.conversion.get_format(format_label)
    except HoardViewError as e:
        labels = ", ".join(f.label.lower() for f in state.settings.conversion.formats)
        print_error(str(e), details=f"Valid values: {labels}")
        raise typer.Exit(code=1)

    async def run():
        async with open_orchestrator(state.settings, state.logger) as orchestrator:
            return await orchestrator.convert_and_fetch(font, fmt.suffix, fmt.format)

    converted = _run_command(run())
    target = download_bytes(output_dir, converted.name, converted.data)
    if not state.quiet:
        print_saved(target, len(converted.data))


@app.command()
def fetch(
    ctx: typer.Context,
    font: Annotated[
        str,
        typer.Argument(help="Path of the font in the repository", show_default=False),
    ],
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-d",
            help="Directory to write the source file to",
        ),
    ] = Path("."),
) -> None:
    """Download the original source file of one font."""
    state: CliState = ctx.obj

    async def run():
        async with open_orchestrator(state.settings, state.logger) as orchestrator:
            return await orchestrator.fetch_source(font)

    source = _run_command(run())
    target = download_bytes(output_dir, source.name, source.data)
    if not state.quiet:
        print_saved(target, len(source.data))


@app.command()
def gallery(
    ctx: typer.Context,
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Directory to write index.html (and downloads) to",
        ),
    ] = Path("gallery"),
    downloads: Annotated[
        bool,
        typer.Option(
            "--downloads/--no-downloads",
            help="Convert every revealed font and add download buttons",
        ),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Reveal only the first N fonts",
            min=1,
        ),
    ] = None,
) -> None:
    """Build a static HTML gallery of the whole collection."""
    state: CliState = ctx.obj
    settings = state.settings

    if not state.quiet:
        print_header(__version__)
        print_step("Listing fonts")

    page = GalleryPage(source_url=settings.remote.raw_file_url)

    async def run() -> RevealStats:
        async with open_orchestrator(settings, state.logger) as orchestrator:
            tree = await orchestrator.get_directory_listing()
            groups = build_collection(tree, settings.collection.extensions)
            links = page.build_collection(groups)
            if limit is not None:
                links = links[:limit]

            async def on_reveal(link: ShowLink, preview: FontPreview) -> None:
                converted_formats: list[OutputFormat] = []
                if downloads:
                    for fmt in settings.conversion.formats:
                        try:
                            converted = await orchestrator.convert_and_fetch(
                                link.entry, fmt.suffix, fmt.format
                            )
                        except HoardViewError as e:
                            state.logger.warning(
                                "Conversion failed",
                                font=link.entry.path,
                                format=fmt.format,
                                error=str(e),
                            )
                            continue
                        download_bytes(
                            output_dir / "downloads" / link.entry.path,
                            converted.name,
                            converted.data,
                        )
                        converted_formats.append(fmt)
                page.reveal(link, preview, download_buttons(link.entry.path, converted_formats))

            if state.quiet:
                return await reveal_all(orchestrator, links, on_reveal, state.logger)

            print_step(f"Revealing {len(links)} fonts")
            with create_progress() as progress:
                task_id = progress.add_task("Revealing", total=len(links))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                return await reveal_all(
                    orchestrator, links, on_reveal, state.logger, update_progress
                )

    stats = _run_command(run())
    output_dir.mkdir(parents=True, exist_ok=True)
    page_path = output_dir / "index.html"
    page_path.write_text(page.render(), encoding="utf-8")
    if not state.quiet:
        print_gallery_summary(page_path, stats)


def _run_command(coro):
    """Run a command coroutine, turning hoardview errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except RemoteFetchError as e:
        print_error(f"Could not reach the font repository: {e.reason}", details=e.url)
        raise typer.Exit(code=1)
    except HoardViewError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
