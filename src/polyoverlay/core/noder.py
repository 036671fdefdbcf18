"""Reference noder for two polygonal geometries.

Splits every ring segment of both inputs at every point where it meets
another segment, so that the resulting edges only meet at their
endpoints. Coincident pieces from the two inputs are merged into one
edge carrying both geometries' labels.

The pairwise search is brute force; it is meant for moderate inputs and
for exercising the overlay core, not as a spatial-index noder.
"""

from dataclasses import dataclass

from polyoverlay.core.geometry import projection_factor, segment_intersections
from polyoverlay.core.graph import NodedEdge
from polyoverlay.domain import Coordinate, EdgeLabel, Location, MultiPolygon


@dataclass
class _Segment:
    p0: Coordinate
    p1: Coordinate
    label: EdgeLabel


def _ring_side_locations(is_ccw: bool, is_hole: bool) -> tuple[Location, Location]:
    """(left, right) locations of a ring's forward edges."""
    interior_on_left = is_ccw != is_hole
    if interior_on_left:
        return Location.INTERIOR, Location.EXTERIOR
    return Location.EXTERIOR, Location.INTERIOR


def _edge_key(a: Coordinate, b: Coordinate) -> tuple[Coordinate, Coordinate]:
    if a.to_tuple() <= b.to_tuple():
        return (a, b)
    return (b, a)


class SimpleNoder:
    """Nodes the boundaries of two polygonal geometries.

    Example:
        edges = SimpleNoder().node(a, b)
        graph = HalfEdgeGraph(edges)
    """

    def node(self, geom0: MultiPolygon, geom1: MultiPolygon) -> list[NodedEdge]:
        """Node both geometries into a single edge set.

        Args:
            geom0: Geometry with index 0
            geom1: Geometry with index 1

        Returns:
            Noded edges with labels for the geometries they bound
        """
        segments = self._extract_segments(geom0, 0) + self._extract_segments(geom1, 1)
        split_points: list[set[Coordinate]] = [{s.p0, s.p1} for s in segments]

        for i in range(len(segments)):
            si = segments[i]
            for j in range(i + 1, len(segments)):
                sj = segments[j]
                for point in segment_intersections(si.p0, si.p1, sj.p0, sj.p1):
                    split_points[i].add(point)
                    split_points[j].add(point)

        edges: dict[tuple[Coordinate, Coordinate], NodedEdge] = {}
        for segment, points in zip(segments, split_points):
            ordered = sorted(points, key=lambda p: projection_factor(p, segment.p0, segment.p1))
            for a, b in zip(ordered, ordered[1:]):
                if a != b:
                    self._add_edge(edges, a, b, segment.label)
        return list(edges.values())

    def _extract_segments(self, geometry: MultiPolygon, geom_index: int) -> list[_Segment]:
        segments = []
        for ring, is_hole in geometry.rings():
            left, right = _ring_side_locations(ring.is_ccw(), is_hole)
            label = EdgeLabel.for_area(geom_index, left, right)
            for p0, p1 in ring.segments():
                if p0 != p1:
                    segments.append(_Segment(p0, p1, label))
        return segments

    def _add_edge(
        self,
        edges: dict[tuple[Coordinate, Coordinate], NodedEdge],
        a: Coordinate,
        b: Coordinate,
        label: EdgeLabel,
    ) -> None:
        key = _edge_key(a, b)
        if key[0] != a:
            label = label.flipped()
        existing = edges.get(key)
        if existing is None:
            edges[key] = NodedEdge(key[0], key[1], label.copy())
        else:
            existing.label.merge(label)
