"""Half-edge graph of a noded overlay.

The graph is an arena of HalfEdge records addressed by integer index.
Half-edges are allocated in symmetric pairs, so the sym of edge ``i`` is
``i ^ 1``. Every half-edge belongs to exactly one node ring: the
counter-clockwise ordered set of half-edges sharing its origin.

Topology (sym pairing and node rings) is fixed at construction. Only
labels and result links change afterwards.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import cmp_to_key

from polyoverlay.core.geometry import compare_direction
from polyoverlay.domain import Coordinate, EdgeLabel
from polyoverlay.exceptions import InvalidGeometryError, TopologyConflictError


@dataclass
class NodedEdge:
    """A segment produced by noding, with its label for the orig -> dest direction.

    Attributes:
        orig: Start coordinate
        dest: End coordinate
        label: Label of the forward direction
    """

    orig: Coordinate
    dest: Coordinate
    label: EdgeLabel = field(default_factory=EdgeLabel)


@dataclass(slots=True)
class HalfEdge:
    """One directed traversal of a noded segment.

    Attributes:
        index: Position in the graph arena
        orig: Origin coordinate
        label: Locations of this direction's line and sides
        rot_next: Index of the next half-edge CCW around the origin
        result_next: Index of the half-edge continuing the result ring
    """

    index: int
    orig: Coordinate
    label: EdgeLabel
    rot_next: int = -1
    result_next: int | None = None


class HalfEdgeGraph:
    """Planar graph of half-edges meeting at nodes.

    Example:
        graph = HalfEdgeGraph([NodedEdge(Coordinate(0, 0), Coordinate(1, 0))])
        for node_edge in graph.nodes():
            for e in graph.node_edges(node_edge):
                print(graph.origin(e), graph.destination(e))
    """

    def __init__(self, edges: Iterable[NodedEdge]) -> None:
        """Build the graph from a noded edge set.

        Args:
            edges: Noded edges; no two may share both endpoints

        Raises:
            InvalidGeometryError: If an edge has zero length or an
                undirected edge occurs twice
        """
        self._edges: list[HalfEdge] = []
        self._node_rings: dict[Coordinate, list[int]] = {}

        seen: set[frozenset[Coordinate]] = set()
        for edge in edges:
            if edge.orig == edge.dest:
                raise InvalidGeometryError(f"Zero-length edge at {edge.orig}")
            key = frozenset((edge.orig, edge.dest))
            if key in seen:
                raise InvalidGeometryError(f"Duplicate edge {edge.orig} - {edge.dest}")
            seen.add(key)
            self._add_pair(edge)

        for origin, ring in self._node_rings.items():
            ring.sort(key=cmp_to_key(self._direction_comparator(origin)))
            for k, index in enumerate(ring):
                self._edges[index].rot_next = ring[(k + 1) % len(ring)]

    def _add_pair(self, edge: NodedEdge) -> None:
        forward = len(self._edges)
        self._edges.append(HalfEdge(forward, edge.orig, edge.label))
        self._edges.append(HalfEdge(forward + 1, edge.dest, edge.label.flipped()))
        self._node_rings.setdefault(edge.orig, []).append(forward)
        self._node_rings.setdefault(edge.dest, []).append(forward + 1)

    def _direction_comparator(self, origin: Coordinate):
        def compare(a: int, b: int) -> int:
            return compare_direction(origin, self.destination(a), self.destination(b))

        return compare

    # -- topology --------------------------------------------------------

    def __len__(self) -> int:
        return len(self._edges)

    def edge(self, e: int) -> HalfEdge:
        """Get the half-edge record at an index."""
        return self._edges[e]

    def edges(self) -> Iterator[int]:
        """Iterate over every half-edge index."""
        return iter(range(len(self._edges)))

    @staticmethod
    def sym(e: int) -> int:
        """The same segment traversed in the opposite direction."""
        return e ^ 1

    def origin(self, e: int) -> Coordinate:
        """Origin coordinate of a half-edge."""
        return self._edges[e].orig

    def destination(self, e: int) -> Coordinate:
        """Destination coordinate of a half-edge."""
        return self._edges[e ^ 1].orig

    def rot_next(self, e: int) -> int:
        """Next half-edge counter-clockwise around the origin node."""
        return self._edges[e].rot_next

    def degree(self, e: int) -> int:
        """Number of half-edges in the node ring of e."""
        return len(self._node_rings[self._edges[e].orig])

    def nodes(self) -> Iterator[int]:
        """Iterate over nodes, yielding one member half-edge of each."""
        for ring in self._node_rings.values():
            yield ring[0]

    def node_count(self) -> int:
        """Number of distinct origin coordinates."""
        return len(self._node_rings)

    def node_edge_at(self, coord: Coordinate) -> int | None:
        """A half-edge originating at a coordinate, if any."""
        ring = self._node_rings.get(coord)
        return ring[0] if ring else None

    def node_edges(self, node_edge: int) -> Iterator[int]:
        """Iterate CCW over a node ring, starting at node_edge."""
        e = node_edge
        while True:
            yield e
            e = self._edges[e].rot_next
            if e == node_edge:
                break

    # -- labels and result links -----------------------------------------

    def label(self, e: int) -> EdgeLabel:
        """Label of a half-edge."""
        return self._edges[e].label

    def is_in_result(self, e: int) -> bool:
        """Check whether a half-edge is marked as a result edge."""
        return self._edges[e].label.in_result

    def set_in_result(self, e: int, in_result: bool = True) -> None:
        """Mark or unmark a half-edge as a result edge."""
        self._edges[e].label.in_result = in_result

    def result_next(self, e: int) -> int | None:
        """The half-edge linked after e in its result ring."""
        return self._edges[e].result_next

    def set_result_next(self, e: int, next_edge: int) -> None:
        """Link e to the half-edge continuing its result ring."""
        self._edges[e].result_next = next_edge

    def is_result_linked(self, e: int) -> bool:
        """Check whether e already has a result link."""
        return self._edges[e].result_next is not None

    def result_edges(self) -> list[int]:
        """Indices of every half-edge marked in the result."""
        return [e.index for e in self._edges if e.label.in_result]

    def result_rings(self) -> list[list[Coordinate]]:
        """Follow result links into closed coordinate rings.

        Each ring starts at the origin of its lowest-index result edge
        and repeats that coordinate at the end.

        Raises:
            TopologyConflictError: If a result edge is not linked or a
                link chain fails to close
        """
        visited: set[int] = set()
        rings: list[list[Coordinate]] = []
        for start in self.result_edges():
            if start in visited:
                continue
            coords: list[Coordinate] = []
            e: int | None = start
            while True:
                if e is None or not self.is_in_result(e):
                    raise TopologyConflictError("Result ring is not closed", coords[-1])
                if e in visited:
                    raise TopologyConflictError("Result rings share an edge", self.origin(e))
                visited.add(e)
                coords.append(self.origin(e))
                e = self.result_next(e)
                if e == start:
                    break
            coords.append(coords[0])
            rings.append(coords)
        return rings

    def describe_node(self, node_edge: int) -> str:
        """Multi-line description of a node ring for diagnostics."""
        lines = [f"Node{self.origin(node_edge)}"]
        for e in self.node_edges(node_edge):
            sym = self.sym(e)
            line = (
                f"  -> {self.destination(e)} {self.label(e)} Sym: {self.label(sym)}"
                f" {'Res' if self.is_in_result(e) else '-'}/{'Res' if self.is_in_result(sym) else '-'}"
            )
            if self.is_result_linked(e):
                line += f" Link: {self.destination(self.result_next(e))}"
            lines.append(line)
        return "\n".join(lines)
