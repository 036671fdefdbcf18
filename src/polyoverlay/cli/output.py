"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch processing.

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
    console.print(f"\n[bold]polyoverlay[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_geometry_info(path: str, polygon_count: int, ring_count: int) -> None:
    """Print input geometry information.

    Args:
        path: Path to the geometry file
        polygon_count: Number of polygons in the geometry
        ring_count: Number of rings, shells and holes together
    """
    line = Text("  ")
    line.append(path)
    console.print(line)
    console.print(f"  {polygon_count:,} polygons {SYM_DOT} {ring_count:,} rings")


def print_area(label: str, area: float) -> None:
    """Print a computed area."""
    console.print(f"\n[bold green]{SYM_OK}[/bold green] {label}: [bold]{area:.12g}[/bold]")


def print_overlay_summary(operation: str, ring_count: int, area: float, linked_area: float) -> None:
    """Print the summary of a full overlay.

    Args:
        operation: Overlay operation name
        ring_count: Number of linked result rings
        area: Area evaluated directly from the labelled edges
        linked_area: Area evaluated from the linked rings
    """
    console.print(f"\n[bold green]{SYM_OK} {operation}[/bold green]")
    console.print(f"  {ring_count} rings {SYM_DOT} area {area:.12g}")
    console.print(f"  linked ring area {linked_area:.12g}")


def print_batch_results(areas: dict[str, float], errors: list[tuple[str, str]]) -> None:
    """Print a table of batch areas and errors."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Pair")
    table.add_column("Area", justify="right")
    for name in sorted(areas):
        table.add_row(name, f"{areas[name]:.12g}")
    for name, error in errors:
        table.add_row(name, f"[red]{SYM_ERR} {error}[/red]")
    console.print(table)


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


def print_batch_summary(
    total_time_s: float,
    processed: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print batch completion summary.

    Args:
        total_time_s: Total processing time in seconds
        processed: Number of pairs processed
        errors: Number of pairs that failed
        avg_time_ms: Average processing time per pair in milliseconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} pairs {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )
    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} pairs completed {SYM_DOT} {cancelled} tasks cancelled")
