"""Exception hierarchy for polyoverlay."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from polyoverlay.domain.coordinate import Coordinate


class OverlayError(Exception):
    """Base exception for all polyoverlay errors."""

    pass


class GeometryError(OverlayError):
    """Errors related to input geometry."""

    pass


class InvalidGeometryError(GeometryError):
    """Malformed input ring or polygon."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class TopologyError(OverlayError):
    """Errors raised while processing the overlay graph.

    Any of these aborts the whole overlay: an inconsistent graph cannot
    yield a trustworthy result.
    """

    pass


class TopologyConflictError(TopologyError):
    """Edge labels or result links are inconsistent at a node."""

    def __init__(self, message: str, coordinate: Coordinate | None = None) -> None:
        self.message = message
        self.coordinate = coordinate
        if coordinate is not None:
            super().__init__(f"{message} at ({coordinate.x:g}, {coordinate.y:g})")
        else:
            super().__init__(message)


class OverlayAssertionError(TopologyError):
    """Internal defect: a structural precondition was violated."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AreaMismatchError(TopologyError):
    """Fast-path area and linked-ring area disagree."""

    def __init__(self, fast_area: float, linked_area: float) -> None:
        self.fast_area = fast_area
        self.linked_area = linked_area
        super().__init__(
            f"Area mismatch: direct evaluation {fast_area!r}, linked rings {linked_area!r}"
        )


class BatchError(OverlayError):
    """Errors related to batch processing."""

    pass


class ProcessingCancelledError(BatchError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
