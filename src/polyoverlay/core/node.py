"""Node-local label propagation and result ring linking.

A node is not materialized as an object. It is identified by any one
half-edge of its ring, and every operation here walks that ring CCW,
touching only the ring's edges and their syms.

Key operations:
- compute_labelling: Propagate side locations around the node
- merge_sym_labels: Share locations between each edge and its sym
- link_result_edges: Link incoming result edges to outgoing ones
"""

from enum import Enum, auto

from polyoverlay.core.graph import HalfEdgeGraph
from polyoverlay.domain import GEOMETRY_COUNT, Location, Position
from polyoverlay.exceptions import OverlayAssertionError, TopologyConflictError


class LinkState(Enum):
    """State of the result linking walk around a node."""

    FIND_INCOMING = auto()
    LINK_OUTGOING = auto()


class NodeProcessor:
    """Processes the half-edge ring of one node at a time.

    The processor holds no per-node state, so one instance serves every
    node of a graph. Nodes sharing no half-edge may be processed in any
    order.
    """

    def __init__(self, graph: HalfEdgeGraph) -> None:
        self.graph = graph

    def compute_labelling(self, node_edge: int) -> None:
        """Scan around a node CCW and propagate side locations.

        After this call every edge of the node ring has both side
        locations known for each geometry that labels at least one of
        the ring's edges.

        Raises:
            TopologyConflictError: If a labelled edge disagrees with the
                location propagated from its neighbour
            OverlayAssertionError: If a labelled edge has only one side known
        """
        for geom_index in range(GEOMETRY_COUNT):
            self._propagate_area_labels(node_edge, geom_index)

    def _propagate_area_labels(self, node_edge: int, geom_index: int) -> None:
        graph = self.graph
        e_start = self._find_propagation_start_edge(node_edge, geom_index)
        # geometry does not touch this node
        if e_start is None:
            return

        curr_loc = graph.label(e_start).location(geom_index, Position.LEFT)
        e = graph.rot_next(e_start)
        while e != e_start:
            label = graph.label(e)
            if not label.has_location(geom_index):
                label.set_locations_both(geom_index, curr_loc)
            else:
                loc_left = label.location(geom_index, Position.LEFT)
                loc_right = label.location(geom_index, Position.RIGHT)
                if loc_left is Location.UNKNOWN or loc_right is Location.UNKNOWN:
                    raise OverlayAssertionError(
                        f"Found single unknown side at {graph.origin(e)} -> "
                        f"{graph.destination(e)}: {label.to_string(geom_index)}"
                    )
                if loc_right is not curr_loc:
                    raise TopologyConflictError(
                        f"Side location conflict: edge right location {loc_right.name}"
                        f" does not match current location {curr_loc.name}",
                        graph.origin(e),
                    )
                curr_loc = loc_left
            e = graph.rot_next(e)

    def _find_propagation_start_edge(self, node_edge: int, geom_index: int) -> int | None:
        for e in self.graph.node_edges(node_edge):
            if self.graph.label(e).has_location(geom_index):
                return e
        return None

    def merge_sym_labels(self, node_edge: int) -> None:
        """Merge each ring edge's label with its sym's label.

        Locations known on one direction fill unknown slots on the other,
        with left and right swapped across the reversal.
        """
        graph = self.graph
        for e in graph.node_edges(node_edge):
            label = graph.label(e)
            sym_label = graph.label(graph.sym(e))
            label.merge(sym_label.flipped())
            sym_label.merge(label.flipped())

    def link_result_edges(self, node_edge: int) -> None:
        """Link the result edges around a node into ring fragments.

        Each incoming result edge (the sym of a ring member) gets its
        result link set to the next outgoing result edge CCW. Result
        rings therefore have their face on the right, which makes
        shells clockwise and holes counter-clockwise.

        The node edge is linked last, so the walk starts just after it.
        A single call links every in/out pair of the node. If an incoming
        result edge is found to be linked already, the node was processed
        before and the walk stops without changing any link.

        Args:
            node_edge: An outgoing result edge of the node, whose sym is
                not in the result

        Raises:
            OverlayAssertionError: If node_edge breaks the preconditions
            TopologyConflictError: If an incoming result edge has no
                outgoing result edge to link to
        """
        graph = self.graph
        if not graph.is_in_result(node_edge):
            raise OverlayAssertionError(
                f"Attempt to link non-result edge at {graph.origin(node_edge)}"
            )
        if graph.is_in_result(graph.sym(node_edge)):
            raise OverlayAssertionError(
                f"Found both half-edges in result at {graph.origin(node_edge)}"
            )

        end_out = graph.rot_next(node_edge)
        curr_out = end_out
        state = LinkState.FIND_INCOMING
        curr_result_in: int | None = None
        while True:
            if state is LinkState.FIND_INCOMING:
                curr_in = graph.sym(curr_out)
                if graph.is_in_result(curr_in):
                    # node already linked by an earlier call
                    if graph.is_result_linked(curr_in):
                        return
                    curr_result_in = curr_in
                    state = LinkState.LINK_OUTGOING
            elif graph.is_in_result(curr_out):
                graph.set_result_next(curr_result_in, curr_out)
                state = LinkState.FIND_INCOMING

            curr_out = graph.rot_next(curr_out)
            if curr_out == end_out:
                break

        if state is LinkState.LINK_OUTGOING:
            raise TopologyConflictError("No outgoing edge found", graph.origin(node_edge))
