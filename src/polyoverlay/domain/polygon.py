"""Polygonal input geometry.

This module defines the polygon models fed to the noder:
- Ring: A closed coordinate sequence
- Polygon: A shell ring with zero or more hole rings
- MultiPolygon: A possibly empty collection of polygons

All models serialize to plain dictionaries so they can cross process
boundaries during batch processing and be read from JSON files.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from polyoverlay.domain.coordinate import Coordinate, Location, WindingDirection
from polyoverlay.exceptions import InvalidGeometryError


@dataclass
class Ring:
    """A closed ring of coordinates.

    The closing coordinate is optional on input and is never stored.

    Attributes:
        coordinates: Ring vertices without the repeated closing vertex
    """

    coordinates: list[Coordinate]
    _cached_area: float | None = field(default=None, repr=False, init=False)

    def __post_init__(self) -> None:
        coords = list(self.coordinates)
        if len(coords) > 1 and coords[0] == coords[-1]:
            coords.pop()
        if len(set(coords)) < 3:
            raise InvalidGeometryError(
                f"Ring must have at least 3 distinct coordinates, got {len(set(coords))}"
            )
        self.coordinates = coords

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        Positive area means counter-clockwise winding, negative
        means clockwise. Result is cached.
        """
        if self._cached_area is None:
            from polyoverlay.core.geometry import signed_area

            self._cached_area = signed_area(self.coordinates)
        return self._cached_area

    @property
    def direction(self) -> WindingDirection:
        """Winding direction derived from the signed area."""
        if self.signed_area() > 0:
            return WindingDirection.COUNTER_CLOCKWISE
        return WindingDirection.CLOCKWISE

    def is_ccw(self) -> bool:
        """Check whether the ring winds counter-clockwise."""
        return self.direction == WindingDirection.COUNTER_CLOCKWISE

    def closed_coordinates(self) -> list[Coordinate]:
        """Return the coordinates with the closing vertex repeated."""
        return [*self.coordinates, self.coordinates[0]]

    def segments(self) -> Iterator[tuple[Coordinate, Coordinate]]:
        """Iterate over the ring's segments, including the closing one."""
        coords = self.coordinates
        n = len(coords)
        for i in range(n):
            yield coords[i], coords[(i + 1) % n]

    def reversed(self) -> "Ring":
        """Return the same ring with opposite winding."""
        return Ring(coordinates=list(reversed(self.coordinates)))

    def on_boundary(self, x: float, y: float) -> bool:
        """Check if a point lies exactly on one of the ring's segments."""
        for p0, p1 in self.segments():
            cross = (p1.x - p0.x) * (y - p0.y) - (p1.y - p0.y) * (x - p0.x)
            if cross != 0.0:
                continue
            if min(p0.x, p1.x) <= x <= max(p0.x, p1.x) and min(p0.y, p1.y) <= y <= max(p0.y, p1.y):
                return True
        return False

    def contains_point(self, x: float, y: float) -> bool:
        """Check if point is inside ring using ray casting algorithm.

        Points exactly on the boundary give an unspecified answer; use
        on_boundary() first where that matters.
        """
        from polyoverlay.core.geometry import point_in_ring

        return point_in_ring(Coordinate(x, y), self.coordinates)

    def to_list(self) -> list[list[float]]:
        """Serialize to a closed list of [x, y] pairs."""
        return [c.to_list() for c in self.closed_coordinates()]

    @classmethod
    def from_list(cls, data: list[Any]) -> "Ring":
        """Deserialize from a list of [x, y] pairs."""
        return cls(coordinates=[Coordinate.from_sequence(c) for c in data])


@dataclass
class Polygon:
    """A polygon with one shell and zero or more holes.

    Ring winding is not normalized; labelling reads each ring's actual
    orientation.

    Attributes:
        shell: Outer boundary ring
        holes: Inner boundary rings
    """

    shell: Ring
    holes: list[Ring] = field(default_factory=list)

    def rings(self) -> Iterator[tuple[Ring, bool]]:
        """Iterate over (ring, is_hole) pairs, shell first."""
        yield self.shell, False
        for hole in self.holes:
            yield hole, True

    def locate(self, coord: Coordinate) -> Location:
        """Locate a coordinate relative to this polygon."""
        x, y = coord.x, coord.y
        for ring, _ in self.rings():
            if ring.on_boundary(x, y):
                return Location.BOUNDARY
        if not self.shell.contains_point(x, y):
            return Location.EXTERIOR
        if any(hole.contains_point(x, y) for hole in self.holes):
            return Location.EXTERIOR
        return Location.INTERIOR

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "shell": self.shell.to_list(),
            "holes": [hole.to_list() for hole in self.holes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary."""
        return cls(
            shell=Ring.from_list(data["shell"]),
            holes=[Ring.from_list(h) for h in data.get("holes", [])],
        )


@dataclass
class MultiPolygon:
    """A polygonal geometry made of zero or more polygons.

    Attributes:
        polygons: Member polygons (assumed non-overlapping)
    """

    polygons: list[Polygon] = field(default_factory=list)

    @classmethod
    def from_coordinates(
        cls,
        shell: list[tuple[float, float]],
        holes: list[list[tuple[float, float]]] | None = None,
    ) -> "MultiPolygon":
        """Build a single-polygon geometry from plain coordinate tuples."""
        return cls(
            polygons=[
                Polygon(
                    shell=Ring([Coordinate(x, y) for x, y in shell]),
                    holes=[Ring([Coordinate(x, y) for x, y in h]) for h in holes or []],
                )
            ]
        )

    def is_empty(self) -> bool:
        """Check if the geometry has no polygons."""
        return len(self.polygons) == 0

    def rings(self) -> Iterator[tuple[Ring, bool]]:
        """Iterate over (ring, is_hole) pairs of every polygon."""
        for polygon in self.polygons:
            yield from polygon.rings()

    def locate(self, coord: Coordinate) -> Location:
        """Locate a coordinate relative to this geometry."""
        for polygon in self.polygons:
            location = polygon.locate(coord)
            if location is not Location.EXTERIOR:
                return location
        return Location.EXTERIOR

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"polygons": [p.to_dict() for p in self.polygons]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MultiPolygon":
        """Deserialize from dictionary.

        Accepts either ``{"polygons": [...]}`` or a single polygon
        dictionary with a ``shell`` key.

        Raises:
            InvalidGeometryError: If the dictionary has neither form
        """
        if "polygons" in data:
            return cls(polygons=[Polygon.from_dict(p) for p in data["polygons"]])
        if "shell" in data:
            return cls(polygons=[Polygon.from_dict(data)])
        raise InvalidGeometryError("Expected a 'polygons' or 'shell' key")
