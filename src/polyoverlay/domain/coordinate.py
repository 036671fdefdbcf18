"""Core value types for overlay computation.

This module defines the fundamental types shared by every layer:
- Coordinate: An immutable (x, y) pair
- Location: Topological location relative to an input geometry
- Position: Which part of a directed edge a location refers to
- WindingDirection: Enum for ring winding direction
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Location(Enum):
    """Topological location of a point or edge side relative to a geometry."""

    INTERIOR = auto()
    BOUNDARY = auto()
    EXTERIOR = auto()
    UNKNOWN = auto()

    @property
    def symbol(self) -> str:
        """Single-character symbol used in diagnostics."""
        return _LOCATION_SYMBOLS[self]


_LOCATION_SYMBOLS = {
    Location.INTERIOR: "i",
    Location.BOUNDARY: "b",
    Location.EXTERIOR: "e",
    Location.UNKNOWN: "-",
}


class Position(Enum):
    """Position relative to a directed edge.

    - ON: The edge line itself
    - LEFT: The side to the left of the direction of travel
    - RIGHT: The side to the right of the direction of travel
    """

    ON = 0
    LEFT = 1
    RIGHT = 2

    def opposite(self) -> "Position":
        """Return the position seen from the reversed edge."""
        if self is Position.LEFT:
            return Position.RIGHT
        if self is Position.RIGHT:
            return Position.LEFT
        return self


class WindingDirection(Enum):
    """Ring winding direction."""

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A point in the plane.

    Immutable and hashable, so coordinates can key the node table of
    the half-edge graph.

    Attributes:
        x: X ordinate
        y: Y ordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_list(self) -> list[float]:
        """Serialize to a JSON-friendly [x, y] pair."""
        return [self.x, self.y]

    @classmethod
    def from_sequence(cls, data: Any) -> "Coordinate":
        """Deserialize from an (x, y) sequence."""
        return cls(float(data[0]), float(data[1]))

    def __str__(self) -> str:
        return f"({self.x:g} {self.y:g})"
