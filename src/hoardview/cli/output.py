"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages.
"""

from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

from hoardview.domain import FontGroup
from hoardview.utils import RevealStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for revealing fonts.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]hoardview[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_groups(groups: list[FontGroup]) -> None:
    """Print the font collection grouped by directory.

    Args:
        groups: Font groups in listing order
    """
    total = sum(len(group) for group in groups)
    for group in groups:
        if group.heading is not None:
            console.print()
            console.print(Text(group.heading, style="bold"))
        for entry in group.entries:
            # Text keeps brackets in paths from being read as markup
            console.print(Text(f"  {entry.path}"))
    console.print(f"\n  [green]{total}[/green] fonts {SYM_DOT} {len(groups)} groups")


def print_preview(name: str, path: str, cached: bool) -> None:
    """Print the name of a rendered font."""
    line = Text("  ")
    line.append(name, style="bold")
    line.append(f" {SYM_DOT} {path}")
    if cached:
        line.append(f" {SYM_DOT} cached", style="dim")
    console.print(line)


def print_saved(path: Path, size: int) -> None:
    """Print the location and size of a written file."""
    line = Text(f"{SYM_OK} ", style="green")
    line.append(str(path), style="bold")
    line.append(f" ({_format_file_size(size)})")
    console.print(line)


def print_gallery_summary(page_path: Path, stats: RevealStats) -> None:
    """Print the result of a gallery build.

    Args:
        page_path: Path of the written page
        stats: Reveal statistics
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(stats.duration_seconds)}"
    )
    line = Text("  ")
    line.append(str(page_path), style="bold")
    console.print(line)

    error_style = "red" if stats.error_count > 0 else "green"
    console.print(
        f"  {stats.revealed_count} fonts {SYM_DOT} {stats.cached_count} cached {SYM_DOT} "
        f"[{error_style}]{stats.error_count} errors[/{error_style}]"
    )
    for path, reason in stats.errors[:10]:
        console.print(Text(f"  {SYM_ERR} {path}: {reason}", style="red"))
    if len(stats.errors) > 10:
        console.print(f"  ... +{len(stats.errors) - 10} more")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def _format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable form (e.g., "4 KB")."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
