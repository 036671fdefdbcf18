"""Parallel batch evaluation of overlay areas.

This module evaluates the overlay area of many geometry pairs using
ProcessPoolExecutor. Each pair is independent, so pairs are the unit of
parallelism; a single overlay always runs in one process.

Key components:
- process_pair: Top-level picklable function for parallel execution
- BatchProcessor: Orchestrator collecting results and statistics
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

from polyoverlay.config import OverlayConfig, OverlaySettings
from polyoverlay.core.overlay import OverlayProcessor
from polyoverlay.domain import MultiPolygon
from polyoverlay.exceptions import ProcessingCancelledError
from polyoverlay.utils import OverlayLogger, OverlayStats


def process_pair(pair_dict: dict[str, Any], config_dict: dict[str, Any]) -> dict[str, Any]:
    """Compute the overlay area of one geometry pair.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        pair_dict: ``{"name": str, "a": geometry dict, "b": geometry dict}``
        config_dict: Serialized overlay configuration

    Returns:
        Dictionary containing either:
        - Success: {"name": str, "area": float, "duration_ms": float}
        - Error: {"name": str, "error": str, "error_type": str,
          "traceback": str, "duration_ms": float}
    """
    start_time = time.time()
    name = pair_dict.get("name", "unnamed")

    try:
        geom0 = MultiPolygon.from_dict(pair_dict["a"])
        geom1 = MultiPolygon.from_dict(pair_dict["b"])
        settings = OverlaySettings(overlay=OverlayConfig(**config_dict))
        processor = OverlayProcessor(settings)

        if settings.overlay.verify_area:
            area = processor.overlay(geom0, geom1).area
        else:
            area = processor.area(geom0, geom1)

        return {
            "name": name,
            "area": area,
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "name": name,
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


def _pair_names(pairs: list[dict[str, Any]]) -> list[str]:
    """Name every pair uniquely.

    Unnamed pairs become ``pair-{index}``; a repeated name gets ``#{index}``
    appended so that no pair's area is overwritten by another's.
    """
    names: list[str] = []
    seen: set[str] = set()
    for index, pair in enumerate(pairs):
        name = pair.get("name") or f"pair-{index}"
        while name in seen:
            name = f"{name}#{index}"
        seen.add(name)
        names.append(name)
    return names


class BatchProcessor:
    """Evaluates overlay areas for many geometry pairs in worker processes.

    Example:
        processor = BatchProcessor(OverlaySettings())
        areas, stats = processor.process(pairs, max_workers=4)
    """

    def __init__(self, config: OverlaySettings, overlay_logger: OverlayLogger | None = None) -> None:
        self.config = config
        self.overlay_logger = overlay_logger if overlay_logger is not None else OverlayLogger()

    def process(
        self,
        pairs: list[dict[str, Any]],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> tuple[dict[str, float], OverlayStats]:
        """Process geometry pairs in parallel.

        Args:
            pairs: Serialized pairs (see process_pair)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            Tuple of (areas by pair name, run statistics). Failed pairs
            are absent from the areas and recorded in the statistics.

        Raises:
            ProcessingCancelledError: If processing is interrupted by the user
        """
        stats = self.overlay_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        config_dict = self.config.overlay.model_dump()
        areas: dict[str, float] = {}
        total = len(pairs)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for name, pair in zip(_pair_names(pairs), pairs, strict=True):
                future = executor.submit(process_pair, {**pair, "name": name}, config_dict)
                pending_futures[future] = name

            try:
                for future in as_completed(pending_futures):
                    name = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()
                        if "error" in result:
                            self.overlay_logger.log_pair_error(
                                pair_name=name,
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            areas[name] = result["area"]
                            self.overlay_logger.log_pair_complete(
                                pair_name=name,
                                area=result["area"],
                                duration_ms=result.get("duration_ms", 0.0),
                            )
                    except Exception as e:
                        self.overlay_logger.log_pair_error(
                            pair_name=name,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, name, success)

            except KeyboardInterrupt:
                self.overlay_logger.log_cancelled(len(pending_futures))
                for f in pending_futures:
                    f.cancel()
                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)
                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(stats.processed_count, stats.cancelled_count) from None

        stats.end_time = time.time()
        return areas, stats
