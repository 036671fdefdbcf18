"""Unit tests for node label propagation, sym merging and result linking."""

import pytest

from polyoverlay.core.graph import HalfEdgeGraph, NodedEdge
from polyoverlay.core.node import NodeProcessor
from polyoverlay.core.overlay import OverlayProcessor
from polyoverlay.domain import Coordinate, EdgeLabel, Location, MultiPolygon, Position
from polyoverlay.exceptions import OverlayAssertionError, TopologyConflictError

INT = Location.INTERIOR
EXT = Location.EXTERIOR

ORIGIN = Coordinate(0, 0)

# Half-edge indices of the star's outgoing edges, in CCW order
EAST, NORTH, WEST, SOUTH = 0, 2, 4, 6


def make_star(
    east: EdgeLabel | None = None,
    north: EdgeLabel | None = None,
    west: EdgeLabel | None = None,
    south: EdgeLabel | None = None,
) -> HalfEdgeGraph:
    """Four edges leaving the origin along the axes."""
    return HalfEdgeGraph(
        [
            NodedEdge(ORIGIN, Coordinate(1, 0), east or EdgeLabel()),
            NodedEdge(ORIGIN, Coordinate(0, 1), north or EdgeLabel()),
            NodedEdge(ORIGIN, Coordinate(-1, 0), west or EdgeLabel()),
            NodedEdge(ORIGIN, Coordinate(0, -1), south or EdgeLabel()),
        ]
    )


def sides(graph: HalfEdgeGraph, e: int, geom_index: int = 0) -> tuple[Location, Location]:
    label = graph.label(e)
    return label.location(geom_index, Position.LEFT), label.location(geom_index, Position.RIGHT)


class TestComputeLabelling:
    """Tests for side location propagation around a node."""

    def test_propagates_between_known_edges(self) -> None:
        """Unlabelled edges take the location of the sector they lie in."""
        # interior between east and west going through north
        graph = make_star(
            east=EdgeLabel.for_area(0, INT, EXT),
            west=EdgeLabel.for_area(0, EXT, INT),
        )
        NodeProcessor(graph).compute_labelling(EAST)

        assert sides(graph, NORTH) == (INT, INT)
        assert sides(graph, SOUTH) == (EXT, EXT)
        assert graph.label(NORTH).location(0, Position.ON) is INT
        # labelled edges are left as they were
        assert sides(graph, EAST) == (INT, EXT)
        assert sides(graph, WEST) == (EXT, INT)

    def test_single_labelled_edge(self) -> None:
        """One labelled edge decides every other edge of the node."""
        graph = make_star(north=EdgeLabel.for_area(0, EXT, INT))
        NodeProcessor(graph).compute_labelling(EAST)

        assert sides(graph, WEST) == (EXT, EXT)
        assert sides(graph, SOUTH) == (EXT, EXT)
        assert sides(graph, EAST) == (EXT, EXT)

    def test_no_unknown_sides_remain(self) -> None:
        """Every edge ends with both sides known."""
        graph = make_star(
            east=EdgeLabel.for_area(0, INT, EXT),
            west=EdgeLabel.for_area(0, EXT, INT),
        )
        NodeProcessor(graph).compute_labelling(SOUTH)

        for e in (EAST, NORTH, WEST, SOUTH):
            assert graph.label(e).is_complete(0)

    def test_start_edge_does_not_matter(self) -> None:
        """Labelling is the same whichever ring member names the node."""
        results = []
        for node_edge in (EAST, NORTH, WEST, SOUTH):
            graph = make_star(
                east=EdgeLabel.for_area(0, INT, EXT),
                west=EdgeLabel.for_area(0, EXT, INT),
            )
            NodeProcessor(graph).compute_labelling(node_edge)
            results.append([str(graph.label(e)) for e in (EAST, NORTH, WEST, SOUTH)])

        assert all(r == results[0] for r in results)

    def test_deterministic(self) -> None:
        """Repeated runs on equal input produce equal labels."""

        def run() -> list[str]:
            graph = make_star(
                east=EdgeLabel.for_area(0, INT, EXT),
                north=EdgeLabel.for_area(1, INT, EXT),
                west=EdgeLabel.for_area(0, EXT, INT),
            )
            NodeProcessor(graph).compute_labelling(EAST)
            return [str(graph.label(e)) for e in graph.edges()]

        assert run() == run()

    def test_relabelling_same_node_changes_nothing(self) -> None:
        """A second run on an already labelled star leaves the labels as they are."""
        graph = make_star(
            east=EdgeLabel.for_area(0, INT, EXT),
            west=EdgeLabel.for_area(0, EXT, INT),
        )
        processor = NodeProcessor(graph)
        processor.compute_labelling(EAST)
        before = [str(graph.label(e)) for e in graph.edges()]

        processor.compute_labelling(NORTH)

        assert [str(graph.label(e)) for e in graph.edges()] == before

    def test_relabelling_overlay_graph_changes_nothing(self) -> None:
        """Re-running every node of a labelled overlay graph is a no-op."""
        overlay = OverlayProcessor()
        geom0 = MultiPolygon.from_coordinates([(0, 0), (1, 0), (1, 1), (0, 1)])
        geom1 = MultiPolygon.from_coordinates([(0.5, 0.5), (1.5, 0.5), (1.5, 1.5), (0.5, 1.5)])
        graph = overlay.build_graph(geom0, geom1)
        overlay.label(graph, geom0, geom1)
        before = [str(graph.label(e)) for e in graph.edges()]

        processor = NodeProcessor(graph)
        for node_edge in graph.nodes():
            processor.compute_labelling(node_edge)

        assert [str(graph.label(e)) for e in graph.edges()] == before

    def test_geometries_are_independent(self) -> None:
        """Each geometry propagates from its own labelled edges."""
        graph = make_star(
            east=EdgeLabel.for_area(0, INT, EXT),
            north=EdgeLabel.for_area(1, INT, EXT),
            west=EdgeLabel.for_area(0, EXT, INT),
        )
        NodeProcessor(graph).compute_labelling(EAST)

        assert sides(graph, NORTH, 0) == (INT, INT)
        assert sides(graph, WEST, 1) == (INT, INT)
        assert sides(graph, SOUTH, 1) == (INT, INT)
        assert sides(graph, EAST, 1) == (INT, INT)

    def test_geometry_absent_from_node(self) -> None:
        """A geometry with no labelled edge at the node stays unknown."""
        graph = make_star(east=EdgeLabel.for_area(0, INT, EXT))
        NodeProcessor(graph).compute_labelling(EAST)

        for e in (EAST, NORTH, WEST, SOUTH):
            assert not graph.label(e).has_location(1)

    def test_side_location_conflict(self) -> None:
        """A labelled edge disagreeing with the propagated location fails."""
        graph = make_star(
            east=EdgeLabel.for_area(0, INT, EXT),
            west=EdgeLabel.for_area(0, INT, EXT),
        )
        with pytest.raises(TopologyConflictError) as exc_info:
            NodeProcessor(graph).compute_labelling(EAST)

        assert exc_info.value.coordinate == ORIGIN
        assert str(exc_info.value).endswith("at (0, 0)")

    def test_interior_where_exterior_expected(self) -> None:
        """The location left behind by a labelled neighbour is checked too."""
        graph = make_star(
            east=EdgeLabel.for_area(0, INT, EXT),
            north=EdgeLabel.for_area(0, EXT, INT),
            west=EdgeLabel.for_area(0, EXT, INT),
        )
        with pytest.raises(TopologyConflictError, match="EXTERIOR"):
            NodeProcessor(graph).compute_labelling(EAST)

    def test_single_unknown_side(self) -> None:
        """An edge with exactly one side known is an internal error."""
        west = EdgeLabel()
        west.set_location(0, Position.RIGHT, INT)
        graph = make_star(east=EdgeLabel.for_area(0, INT, EXT), west=west)

        with pytest.raises(OverlayAssertionError, match="single unknown side"):
            NodeProcessor(graph).compute_labelling(EAST)

    def test_single_unknown_left_side(self) -> None:
        """The one-sided check also covers a missing right side."""
        west = EdgeLabel()
        west.set_location(0, Position.LEFT, EXT)
        graph = make_star(east=EdgeLabel.for_area(0, INT, EXT), west=west)

        with pytest.raises(OverlayAssertionError):
            NodeProcessor(graph).compute_labelling(EAST)


class TestMergeSymLabels:
    """Tests for merging labels across edge reversal."""

    def test_fills_sym_with_sides_swapped(self) -> None:
        """Locations on an edge reach its sym with left and right swapped."""
        graph = make_star(east=EdgeLabel.for_area(0, INT, EXT))
        graph.edge(graph.sym(EAST)).label = EdgeLabel()

        NodeProcessor(graph).merge_sym_labels(EAST)

        sym_label = graph.label(graph.sym(EAST))
        assert sym_label.location(0, Position.LEFT) is EXT
        assert sym_label.location(0, Position.RIGHT) is INT

    def test_fills_edge_from_sym(self) -> None:
        """Merging works in both directions."""
        graph = make_star()
        graph.label(graph.sym(NORTH)).set_area_locations(1, INT, EXT)

        NodeProcessor(graph).merge_sym_labels(EAST)

        assert sides(graph, NORTH, 1) == (EXT, INT)

    def test_propagated_labels_reach_syms(self) -> None:
        """After propagation and merge the outer ends know both sides."""
        graph = make_star(
            east=EdgeLabel.for_area(0, INT, EXT),
            west=EdgeLabel.for_area(0, EXT, INT),
        )
        processor = NodeProcessor(graph)
        processor.compute_labelling(EAST)
        processor.merge_sym_labels(EAST)

        assert sides(graph, graph.sym(NORTH)) == (INT, INT)
        assert sides(graph, graph.sym(SOUTH)) == (EXT, EXT)

    def test_known_locations_are_kept(self) -> None:
        """Merging never overwrites a known location."""
        graph = make_star(east=EdgeLabel.for_area(0, INT, EXT))
        graph.label(graph.sym(EAST)).set_area_locations(0, INT, INT)

        NodeProcessor(graph).merge_sym_labels(EAST)

        assert sides(graph, EAST) == (INT, EXT)
        assert sides(graph, graph.sym(EAST)) == (INT, INT)


class TestLinkResultEdges:
    """Tests for linking incoming result edges to outgoing ones."""

    @pytest.fixture
    def graph(self) -> HalfEdgeGraph:
        return make_star()

    def test_links_incoming_to_next_outgoing(self, graph: HalfEdgeGraph) -> None:
        """An incoming result edge links to the next outgoing result edge CCW."""
        graph.set_in_result(graph.sym(EAST))
        graph.set_in_result(WEST)

        NodeProcessor(graph).link_result_edges(WEST)

        assert graph.result_next(graph.sym(EAST)) == WEST

    def test_links_every_pair_in_one_call(self, graph: HalfEdgeGraph) -> None:
        """Two in/out pairs at a node are both linked by one call."""
        graph.set_in_result(graph.sym(EAST))
        graph.set_in_result(graph.sym(WEST))
        graph.set_in_result(NORTH)
        graph.set_in_result(SOUTH)

        NodeProcessor(graph).link_result_edges(NORTH)

        assert graph.result_next(graph.sym(EAST)) == NORTH
        assert graph.result_next(graph.sym(WEST)) == SOUTH

    def test_same_links_from_either_outgoing_edge(self, graph: HalfEdgeGraph) -> None:
        """The links do not depend on which outgoing edge names the node."""
        graph.set_in_result(graph.sym(EAST))
        graph.set_in_result(graph.sym(WEST))
        graph.set_in_result(NORTH)
        graph.set_in_result(SOUTH)

        NodeProcessor(graph).link_result_edges(SOUTH)

        assert graph.result_next(graph.sym(EAST)) == NORTH
        assert graph.result_next(graph.sym(WEST)) == SOUTH

    def test_idempotent(self, graph: HalfEdgeGraph) -> None:
        """A second call on a linked node changes nothing."""
        graph.set_in_result(graph.sym(EAST))
        graph.set_in_result(WEST)
        processor = NodeProcessor(graph)
        processor.link_result_edges(WEST)

        # a link that a second pass would otherwise overwrite
        graph.set_result_next(graph.sym(EAST), NORTH)
        processor.link_result_edges(WEST)

        assert graph.result_next(graph.sym(EAST)) == NORTH

    def test_non_result_edges_are_not_linked(self, graph: HalfEdgeGraph) -> None:
        """Only incoming result edges receive links."""
        graph.set_in_result(graph.sym(EAST))
        graph.set_in_result(WEST)

        NodeProcessor(graph).link_result_edges(WEST)

        for e in graph.edges():
            if e != graph.sym(EAST):
                assert not graph.is_result_linked(e)

    def test_node_edge_not_in_result(self, graph: HalfEdgeGraph) -> None:
        """The node edge must be a result edge."""
        with pytest.raises(OverlayAssertionError, match="non-result edge"):
            NodeProcessor(graph).link_result_edges(EAST)

    def test_both_half_edges_in_result(self, graph: HalfEdgeGraph) -> None:
        """The node edge's sym must not be a result edge."""
        graph.set_in_result(EAST)
        graph.set_in_result(graph.sym(EAST))

        with pytest.raises(OverlayAssertionError, match="both half-edges"):
            NodeProcessor(graph).link_result_edges(EAST)
