"""Logging utilities for polyoverlay."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class OverlayStats:
    """Statistics from an overlay or batch run."""

    node_count: int = 0
    edge_count: int = 0
    result_edge_count: int = 0
    ring_count: int = 0
    processed_count: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    pair_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_pair_time_ms(self) -> float | None:
        """Average time per processed pair."""
        if not self.pair_timings_ms:
            return None
        return sum(self.pair_timings_ms) / len(self.pair_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("polyoverlay")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class OverlayLogger:
    """Logger for overlay pipeline stages and run statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("polyoverlay")
        self._stats = OverlayStats()

    def log_graph_built(self, node_count: int, edge_count: int) -> None:
        """Log half-edge graph construction."""
        self._logger.debug("Graph built", nodes=node_count, half_edges=edge_count)
        self._stats.node_count = node_count
        self._stats.edge_count = edge_count

    def log_labelling_complete(self, node_count: int, located_count: int) -> None:
        """Log completion of node label propagation."""
        self._logger.debug(
            "Labelling complete",
            nodes=node_count,
            located_edges=located_count,
        )

    def log_result_edges(self, operation: str, result_edge_count: int) -> None:
        """Log result edge marking."""
        self._logger.debug(
            "Result edges marked",
            operation=operation,
            result_edges=result_edge_count,
        )
        self._stats.result_edge_count = result_edge_count

    def log_rings_linked(self, ring_count: int) -> None:
        """Log result ring extraction."""
        self._logger.debug("Result rings linked", rings=ring_count)
        self._stats.ring_count = ring_count

    def log_area(self, operation: str, area: float, duration_ms: float) -> None:
        """Log a computed overlay area."""
        self._logger.info(
            "Overlay area computed",
            operation=operation,
            area=area,
            duration_ms=round(duration_ms, 2),
        )

    def log_pair_complete(self, pair_name: str, area: float, duration_ms: float) -> None:
        """Log successful processing of a batch pair."""
        self._logger.info(
            "Pair processed",
            pair=pair_name,
            area=area,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.pair_timings_ms.append(duration_ms)

    def log_pair_error(
        self,
        pair_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log batch pair processing error."""
        self._logger.error(
            "Pair processing failed",
            pair=pair_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((pair_name, str(error)))

    def log_cancelled(self, pending_count: int) -> None:
        """Log cancellation of a batch run."""
        self._logger.info("Cancellation requested by user", pending=pending_count)

    def log_topology_failure(self, error: Exception) -> None:
        """Log an overlay aborted by a topology error."""
        self._logger.error(
            "Overlay failed",
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> OverlayStats:
        """Get current run statistics."""
        return self._stats
