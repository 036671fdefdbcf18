"""Overlay rules deciding which edges bound the result.

A region is in the result according to the boolean operation applied
to its interior-ness in each input. A half-edge bounds the result when
the region on its right is in the result and the region on its left is
not, so an edge and its sym are never both result edges.
"""

from polyoverlay.config import OverlayOp
from polyoverlay.domain import EdgeLabel, Location, Position


def is_result_location(op: OverlayOp, loc0: Location, loc1: Location) -> bool:
    """Check whether a region with the given input locations is in the result.

    Unknown and boundary locations count as not interior.
    """
    in0 = loc0 is Location.INTERIOR
    in1 = loc1 is Location.INTERIOR
    if op is OverlayOp.INTERSECTION:
        return in0 and in1
    if op is OverlayOp.UNION:
        return in0 or in1
    if op is OverlayOp.DIFFERENCE:
        return in0 and not in1
    if op is OverlayOp.SYM_DIFFERENCE:
        return in0 != in1
    raise ValueError(f"Unsupported overlay operation: {op}")


def is_result_side(label: EdgeLabel, position: Position, op: OverlayOp) -> bool:
    """Check whether one side of an edge lies in the result."""
    return is_result_location(op, label.location(0, position), label.location(1, position))


def is_result_edge(label: EdgeLabel, op: OverlayOp) -> bool:
    """Check whether an edge bounds the result with the result on its right."""
    return is_result_side(label, Position.RIGHT, op) and not is_result_side(
        label, Position.LEFT, op
    )
