"""Per-edge topology labels.

An EdgeLabel records, for each of the two input geometries, the location
of the edge line itself and of the regions on its left and right sides.
Labels start partially populated by noding and are completed in place by
node label propagation.
"""

from dataclasses import dataclass, field

from polyoverlay.domain.coordinate import Location, Position

GEOMETRY_COUNT = 2


def _unknown_locations() -> list[list[Location]]:
    return [[Location.UNKNOWN] * len(Position) for _ in range(GEOMETRY_COUNT)]


@dataclass
class EdgeLabel:
    """Side and line locations of a directed edge for both input geometries.

    Attributes:
        in_result: True if the edge bounds the output region with the
            output interior on its right. Set by the overlay rule evaluator.
    """

    _locations: list[list[Location]] = field(default_factory=_unknown_locations, repr=False)
    in_result: bool = False

    @classmethod
    def for_area(cls, geom_index: int, left: Location, right: Location) -> "EdgeLabel":
        """Create a label for an edge on the boundary of an area geometry."""
        label = cls()
        label.set_area_locations(geom_index, left, right)
        label.set_location(geom_index, Position.ON, Location.BOUNDARY)
        return label

    def location(self, geom_index: int, position: Position) -> Location:
        """Get the location for a geometry at a given position."""
        return self._locations[geom_index][position.value]

    def set_location(self, geom_index: int, position: Position, location: Location) -> None:
        """Set the location for a geometry at a given position."""
        self._locations[geom_index][position.value] = location

    def set_area_locations(self, geom_index: int, left: Location, right: Location) -> None:
        """Set the left and right side locations for a geometry."""
        self.set_location(geom_index, Position.LEFT, left)
        self.set_location(geom_index, Position.RIGHT, right)

    def set_locations_both(self, geom_index: int, location: Location) -> None:
        """Set the line and both sides to the same location.

        Used for edges lying wholly inside or outside a geometry.
        """
        for position in Position:
            self.set_location(geom_index, position, location)

    def has_location(self, geom_index: int) -> bool:
        """Check whether either side location is known for a geometry."""
        return (
            self.location(geom_index, Position.LEFT) is not Location.UNKNOWN
            or self.location(geom_index, Position.RIGHT) is not Location.UNKNOWN
        )

    def is_complete(self, geom_index: int) -> bool:
        """Check whether both side locations are known for a geometry."""
        return (
            self.location(geom_index, Position.LEFT) is not Location.UNKNOWN
            and self.location(geom_index, Position.RIGHT) is not Location.UNKNOWN
        )

    def is_boundary(self, geom_index: int) -> bool:
        """Check whether the edge lies on the boundary of a geometry."""
        return self.location(geom_index, Position.ON) is Location.BOUNDARY

    def copy(self) -> "EdgeLabel":
        """Return an independent copy of this label."""
        return EdgeLabel(
            _locations=[list(locs) for locs in self._locations],
            in_result=self.in_result,
        )

    def flipped(self) -> "EdgeLabel":
        """Return the label as seen from the reversed edge.

        Left and right sides swap, the line location is unchanged.
        The result flag is not carried over.
        """
        label = EdgeLabel()
        for geom_index in range(GEOMETRY_COUNT):
            for position in Position:
                label.set_location(
                    geom_index,
                    position.opposite(),
                    self.location(geom_index, position),
                )
        return label

    def merge(self, other: "EdgeLabel") -> None:
        """Fill unknown locations from another label of the same direction.

        Known locations are never overwritten.
        """
        for geom_index in range(GEOMETRY_COUNT):
            for position in Position:
                if self.location(geom_index, position) is Location.UNKNOWN:
                    self.set_location(geom_index, position, other.location(geom_index, position))

    def to_string(self, geom_index: int | None = None) -> str:
        """Format as compact location symbols, e.g. ``A:i/b/e B:-/-/-``.

        Each group is LEFT/ON/RIGHT.
        """
        indices = range(GEOMETRY_COUNT) if geom_index is None else [geom_index]
        parts = []
        for index in indices:
            symbols = "/".join(
                self.location(index, pos).symbol
                for pos in (Position.LEFT, Position.ON, Position.RIGHT)
            )
            parts.append(f"{'AB'[index]}:{symbols}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_string()
