"""Domain models for polyoverlay.

This module contains the value types and input models shared by the
overlay core. Models are:

- Immutable where identity does not matter (Coordinate)
- Serializable for inter-process communication (batch processing)
- Independent of the graph and noding implementation

Key classes:
- Coordinate: An (x, y) point
- Location, Position: Topological location vocabulary
- EdgeLabel: Per-edge side locations for both input geometries
- Ring, Polygon, MultiPolygon: Polygonal input geometry
"""

from polyoverlay.domain.coordinate import Coordinate, Location, Position, WindingDirection
from polyoverlay.domain.label import GEOMETRY_COUNT, EdgeLabel
from polyoverlay.domain.polygon import MultiPolygon, Polygon, Ring

__all__: list[str] = [
    # Enums
    "Location",
    "Position",
    "WindingDirection",
    # Core types
    "Coordinate",
    "EdgeLabel",
    "GEOMETRY_COUNT",
    "MultiPolygon",
    "Polygon",
    "Ring",
]
