"""CLI application entry point for polyoverlay.

This module provides the main CLI interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from polyoverlay import __version__
from polyoverlay.cli.output import (
    console,
    create_progress,
    print_area,
    print_batch_results,
    print_batch_summary,
    print_cancellation_summary,
    print_error,
    print_geometry_info,
    print_header,
    print_overlay_summary,
    print_step,
)
from polyoverlay.config import (
    LoggingConfig,
    OverlayConfig,
    OverlayOp,
    OverlaySettings,
    ProcessingConfig,
)
from polyoverlay.core import AreaEvaluator, BatchProcessor, OverlayProcessor
from polyoverlay.domain import MultiPolygon
from polyoverlay.exceptions import (
    GeometryError,
    OverlayError,
    ProcessingCancelledError,
    TopologyError,
)
from polyoverlay.utils import OverlayLogger, configure_logging

TOPOLOGY_FAILURE = "Overlay failed due to invalid/degenerate input topology"

# Create the Typer app
app = typer.Typer(
    name="polyoverlay",
    help="Compute overlays and overlay areas of polygonal geometries.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]polyoverlay[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
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
    """Compute overlays and overlay areas of polygonal geometries."""


OpOption = Annotated[
    OverlayOp,
    typer.Option(
        "--op",
        help="Overlay operation",
        case_sensitive=False,
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def _load_geometry(path: Path) -> MultiPolygon:
    """Load a geometry from a JSON file.

    Raises:
        typer.Exit: If the file is missing or malformed
    """
    if not path.is_file():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)
    try:
        return MultiPolygon.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, GeometryError) as e:
        print_error(f"Could not read geometry from {path}", details=str(e))
        raise typer.Exit(code=1) from e


def _build_settings(
    op: OverlayOp,
    verify: bool,
    log_file: Path | None,
    log_level: str,
    quiet: bool,
    workers: int | None = None,
) -> OverlaySettings:
    return OverlaySettings(
        overlay=OverlayConfig(operation=op, verify_area=verify),
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )


def _make_logger(settings: OverlaySettings, quiet: bool) -> OverlayLogger:
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    return OverlayLogger(logger)


def _describe(path: Path, geometry: MultiPolygon, quiet: bool) -> None:
    if not quiet:
        print_geometry_info(
            path=str(path),
            polygon_count=len(geometry.polygons),
            ring_count=sum(1 for _ in geometry.rings()),
        )


@app.command()
def area(
    input_a: Annotated[Path, typer.Argument(help="First geometry (JSON)", show_default=False)],
    input_b: Annotated[
        Path | None,
        typer.Argument(help="Second geometry (JSON); omit for the area of A", show_default=False),
    ] = None,
    op: OpOption = OverlayOp.INTERSECTION,
    verify: Annotated[
        bool,
        typer.Option("--verify", help="Cross-check against the area of the linked result rings"),
    ] = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Compute the area of a geometry, or the overlay area of two geometries.

    The overlay area is evaluated directly from the labelled edges,
    without building the result rings.

    Example:
        polyoverlay area a.json b.json --op intersection
    """
    settings = _build_settings(op, verify, log_file, log_level, quiet)

    if not quiet:
        print_header(__version__)
        print_step("Loading geometry")

    geom_a = _load_geometry(input_a)
    _describe(input_a, geom_a, quiet)

    if input_b is None:
        value = AreaEvaluator().geometry_area(geom_a)
        if quiet:
            console.print(f"{value:.17g}")
        else:
            print_area("Area", value)
        return

    geom_b = _load_geometry(input_b)
    _describe(input_b, geom_b, quiet)

    processor = OverlayProcessor(settings, _make_logger(settings, quiet))
    try:
        if verify:
            value = processor.overlay(geom_a, geom_b).area
        else:
            value = processor.area(geom_a, geom_b)
    except TopologyError as e:
        print_error(TOPOLOGY_FAILURE, details=str(e))
        raise typer.Exit(code=1) from e

    if quiet:
        console.print(f"{value:.17g}")
    else:
        print_area(f"{op.value.capitalize()} area", value)


@app.command()
def overlay(
    input_a: Annotated[Path, typer.Argument(help="First geometry (JSON)", show_default=False)],
    input_b: Annotated[Path, typer.Argument(help="Second geometry (JSON)", show_default=False)],
    op: OpOption = OverlayOp.INTERSECTION,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write result rings as JSON to this file"),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Compute the overlay of two geometries as linked result rings.

    Shell rings come out clockwise and hole rings counter-clockwise.
    """
    settings = _build_settings(op, False, log_file, log_level, quiet)

    if not quiet:
        print_header(__version__)
        print_step("Loading geometry")

    geom_a = _load_geometry(input_a)
    geom_b = _load_geometry(input_b)
    _describe(input_a, geom_a, quiet)
    _describe(input_b, geom_b, quiet)

    if not quiet:
        print_step("Computing overlay")

    processor = OverlayProcessor(settings, _make_logger(settings, quiet))
    try:
        result = processor.overlay(geom_a, geom_b)
    except TopologyError as e:
        print_error(TOPOLOGY_FAILURE, details=str(e))
        raise typer.Exit(code=1) from e

    payload = json.dumps(result.to_dict())
    if output is not None:
        output.write_text(payload, encoding="utf-8")
    if quiet and output is None:
        console.print(payload, soft_wrap=True, markup=False, highlight=False)
    elif not quiet:
        print_overlay_summary(op.value, len(result.rings), result.area, result.linked_area)


def _load_pairs(path: Path) -> list[dict[str, Any]]:
    if not path.is_file():
        print_error(f"Input file not found: {path}")
        raise typer.Exit(code=1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print_error(f"Could not read pairs from {path}", details=str(e))
        raise typer.Exit(code=1) from e
    pairs = data.get("pairs") if isinstance(data, dict) else data
    if not isinstance(pairs, list):
        print_error(f"Could not read pairs from {path}", details="Expected a list of pairs")
        raise typer.Exit(code=1)
    return pairs


@app.command()
def batch(
    pairs_file: Annotated[
        Path,
        typer.Argument(help="JSON list of {name, a, b} geometry pairs", show_default=False),
    ],
    op: OpOption = OverlayOp.INTERSECTION,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-j", help="Number of parallel workers (default: auto)", min=1),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Compute overlay areas for many geometry pairs in parallel."""
    settings = _build_settings(op, False, log_file, log_level, quiet, workers)

    if not quiet:
        print_header(__version__)
        print_step("Loading pairs")

    pairs = _load_pairs(pairs_file)
    processor = BatchProcessor(settings, _make_logger(settings, quiet))

    try:
        if not quiet:
            print_step(f"Processing {len(pairs)} pairs")
            with create_progress() as progress:
                task_id = progress.add_task("pairs", total=len(pairs))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                areas, stats = processor.process(pairs, workers, update_progress)
        else:
            areas, stats = processor.process(pairs, workers)
    except ProcessingCancelledError as e:
        if not quiet:
            print_cancellation_summary(e.processed_count, e.pending_count)
        raise typer.Exit(code=130) from None
    except OverlayError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_batch_results(areas, stats.errors)
    if not quiet:
        print_batch_summary(
            total_time_s=stats.duration_seconds,
            processed=stats.processed_count,
            errors=stats.error_count,
            avg_time_ms=stats.avg_pair_time_ms,
        )
    if stats.error_count:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
