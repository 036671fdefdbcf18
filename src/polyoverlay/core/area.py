"""Direct area evaluation from oriented edges.

The area of a region is accumulated from independent per-edge terms,
so it can be summed over any set of directed edges that bounds the
region, whether or not those edges have been linked into rings.

For a directed segment p0 -> p1 with unit direction u and unit normal n
pointing into the region, the term at p0 is ``(p0 . u) * (p0 . n)``.
Evaluating the segment forward at p0 and backward at p1 (with the
orientation flag inverted, which keeps n pointing into the region) gives
the segment's contribution ``-(p . n) * length`` to twice the area,
where ``p . n`` is constant along the segment.
"""

from collections.abc import Sequence

from polyoverlay.config import OverlayOp
from polyoverlay.core.geometry import signed_area
from polyoverlay.core.graph import HalfEdgeGraph
from polyoverlay.core.rules import is_result_edge
from polyoverlay.domain import Coordinate, MultiPolygon, Polygon


def area_term(p0: Coordinate, p1: Coordinate, is_cw: bool) -> float:
    """Area term of the directed segment p0 -> p1 evaluated at p0.

    Args:
        p0: Segment start, where the term is evaluated
        p1: Segment end
        is_cw: True if the region lies to the right of p0 -> p1
            (a clockwise ring), False if it lies to the left

    Returns:
        The area term; 0.0 for a zero-length segment
    """
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    length_sq = dx * dx + dy * dy
    if length_sq <= 0.0:
        return 0.0

    along = p0.x * dx + p0.y * dy
    # normal to the right of the segment
    across = p0.x * dy - p0.y * dx
    if not is_cw:
        across = -across
    return along * across / length_sq


def edge_area2(p0: Coordinate, p1: Coordinate, is_cw: bool) -> float:
    """Contribution of segment p0 -> p1 to twice the region area."""
    return area_term(p0, p1, is_cw) + area_term(p1, p0, not is_cw)


def ring_area(coords: Sequence[Coordinate], is_cw: bool | None = None) -> float:
    """Area of a ring from its edge area terms.

    Args:
        coords: Ring vertices; the closing vertex may be repeated or omitted
        is_cw: Orientation of the ring. If None it is computed from the
            coordinates and the result is the (positive) area

    Returns:
        The area, positive when is_cw matches the ring's winding and
        negative when it does not
    """
    n = len(coords)
    if n < 3:
        return 0.0
    if is_cw is None:
        is_cw = signed_area(list(coords)) < 0

    area2 = 0.0
    for i in range(1, n):
        area2 += edge_area2(coords[i - 1], coords[i], is_cw)
    if coords[0] != coords[-1]:
        area2 += edge_area2(coords[-1], coords[0], is_cw)
    return area2 / 2


class AreaEvaluator:
    """Computes areas directly from oriented edges.

    Serves plain polygon area as well as overlay area straight from a
    labelled half-edge graph, without linking result rings.

    Example:
        graph = processor.build_graph(a, b)
        processor.label(graph, a, b)
        area = AreaEvaluator().intersection_area(graph)
    """

    def polygon_area(self, polygon: Polygon) -> float:
        """Area of a polygon: shell area minus hole areas."""
        area = ring_area(polygon.shell.coordinates)
        for hole in polygon.holes:
            area -= ring_area(hole.coordinates)
        return area

    def geometry_area(self, geometry: MultiPolygon) -> float:
        """Total area of a polygonal geometry."""
        return sum(self.polygon_area(polygon) for polygon in geometry.polygons)

    def overlay_area(self, graph: HalfEdgeGraph, op: OverlayOp) -> float:
        """Area of an overlay result from a fully labelled graph.

        Sums the area terms of every half-edge whose labels put the
        result interior on its right and the result exterior on its left.
        The graph's result flags and links are not consulted.
        """
        area2 = 0.0
        for e in graph.edges():
            if is_result_edge(graph.label(e), op):
                area2 += edge_area2(graph.origin(e), graph.destination(e), True)
        return area2 / 2

    def intersection_area(self, graph: HalfEdgeGraph) -> float:
        """Area of the intersection of the two inputs."""
        return self.overlay_area(graph, OverlayOp.INTERSECTION)

    def linked_ring_area(self, rings: Sequence[Sequence[Coordinate]]) -> float:
        """Area enclosed by linked result rings.

        Result rings keep their face on the right, so shells are clockwise
        and holes counter-clockwise; evaluating every ring as clockwise
        subtracts the holes.
        """
        return sum(ring_area(ring, is_cw=True) for ring in rings)
