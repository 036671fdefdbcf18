"""Geometric primitives for noding and graph construction.

This module provides core mathematical utilities for:
- Orientation of point triples
- Signed area calculation (shoelace formula)
- Point-in-ring testing (ray casting algorithm)
- Line segment intersection, including collinear overlaps
- Angular ordering of edge directions around a node

All functions are pure and stateless.
"""

from polyoverlay.domain import Coordinate

# Quadrants of a direction vector, numbered counter-clockwise from +X
NE, NW, SW, SE = 0, 1, 2, 3


def orientation_index(p: Coordinate, q: Coordinate, r: Coordinate) -> int:
    """Orientation of point r relative to the directed line p -> q.

    Returns:
        1 if r is to the left (counter-clockwise turn), -1 if to the
        right (clockwise turn), 0 if collinear
    """
    cross = (q.x - p.x) * (r.y - p.y) - (q.y - p.y) * (r.x - p.x)
    if cross > 0:
        return 1
    if cross < 0:
        return -1
    return 0


def signed_area(coords: list[Coordinate]) -> float:
    """Calculate signed area of a ring using the shoelace formula.

    Args:
        coords: Ring vertices, with or without the closing vertex

    Returns:
        Positive for counter-clockwise rings, negative for clockwise,
        0.0 for degenerate rings

    Examples:
        >>> square = [Coordinate(0, 0), Coordinate(1, 0), Coordinate(1, 1), Coordinate(0, 1)]
        >>> signed_area(square)
        1.0
    """
    n = len(coords)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += coords[i].x * coords[j].y
        area -= coords[j].x * coords[i].y

    return area / 2.0


def point_in_ring(point: Coordinate, ring: list[Coordinate]) -> bool:
    """Determine if a point is inside a ring using ray casting.

    Casts a horizontal ray from the point to the right and counts crossings
    with ring edges. Odd number of crossings = inside, even = outside.
    Points exactly on the boundary give an unspecified answer.
    """
    n = len(ring)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = ring[i].x, ring[i].y
        xj, yj = ring[j].x, ring[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def _in_envelope(p: Coordinate, a: Coordinate, b: Coordinate) -> bool:
    return min(a.x, b.x) <= p.x <= max(a.x, b.x) and min(a.y, b.y) <= p.y <= max(a.y, b.y)


def line_intersection(
    p1: Coordinate, p2: Coordinate, p3: Coordinate, p4: Coordinate
) -> Coordinate | None:
    """Find the crossing point of two non-parallel lines.

    Uses parametric line equations. Returns None if the lines are parallel.
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if denom == 0.0:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    return Coordinate(x1 + t * (x2 - x1), y1 + t * (y2 - y1))


def segment_intersections(
    p1: Coordinate, p2: Coordinate, q1: Coordinate, q2: Coordinate
) -> list[Coordinate]:
    """Find every point where segment p1-p2 meets segment q1-q2.

    A proper crossing yields the single computed crossing point. Otherwise
    the result holds each segment endpoint lying on the other segment,
    which covers shared vertices, vertex touches and collinear overlaps.

    Returns:
        Intersection coordinates (possibly with duplicates), empty if
        the segments are disjoint
    """
    o1 = orientation_index(p1, p2, q1)
    o2 = orientation_index(p1, p2, q2)
    o3 = orientation_index(q1, q2, p1)
    o4 = orientation_index(q1, q2, p2)

    if o1 * o2 < 0 and o3 * o4 < 0:
        crossing = line_intersection(p1, p2, q1, q2)
        return [crossing] if crossing is not None else []

    points: list[Coordinate] = []
    if o1 == 0 and _in_envelope(q1, p1, p2):
        points.append(q1)
    if o2 == 0 and _in_envelope(q2, p1, p2):
        points.append(q2)
    if o3 == 0 and _in_envelope(p1, q1, q2):
        points.append(p1)
    if o4 == 0 and _in_envelope(p2, q1, q2):
        points.append(p2)
    return points


def quadrant(dx: float, dy: float) -> int:
    """Quadrant of a direction vector.

    Raises:
        ValueError: For a zero vector
    """
    if dx == 0.0 and dy == 0.0:
        raise ValueError("Cannot compute the quadrant of a zero-length vector")
    if dx >= 0:
        return NE if dy >= 0 else SE
    return NW if dy >= 0 else SW


def compare_direction(origin: Coordinate, a: Coordinate, b: Coordinate) -> int:
    """Compare the directions origin -> a and origin -> b.

    Directions are ordered by angle counter-clockwise from the positive
    X axis, using quadrants and an orientation test rather than atan2.

    Returns:
        -1 if origin -> a comes first, 1 if origin -> b comes first,
        0 if the directions are identical
    """
    quad_a = quadrant(a.x - origin.x, a.y - origin.y)
    quad_b = quadrant(b.x - origin.x, b.y - origin.y)
    if quad_a < quad_b:
        return -1
    if quad_a > quad_b:
        return 1
    # same quadrant: b is later iff it turns left of a
    return -orientation_index(origin, a, b)


def midpoint(p0: Coordinate, p1: Coordinate) -> Coordinate:
    """Midpoint of a segment."""
    return Coordinate((p0.x + p1.x) / 2.0, (p0.y + p1.y) / 2.0)


def projection_factor(p: Coordinate, p0: Coordinate, p1: Coordinate) -> float:
    """Parameter of p projected onto the segment p0 -> p1 (0 at p0, 1 at p1)."""
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return 0.0
    return ((p.x - p0.x) * dx + (p.y - p0.y) * dy) / length_sq
