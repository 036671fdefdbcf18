"""Whole-graph labelling.

Runs node label propagation and sym merging at every node, then locates
edges that never meet the boundary of one of the inputs.
"""

import structlog

from polyoverlay.core.geometry import midpoint
from polyoverlay.core.graph import HalfEdgeGraph
from polyoverlay.core.node import NodeProcessor
from polyoverlay.domain import GEOMETRY_COUNT, MultiPolygon

logger = structlog.get_logger(__name__)


class OverlayLabeller:
    """Completes the labels of a noded overlay graph.

    Args:
        graph: Graph built from the noded edges of both inputs
        geometries: The two input geometries, by geometry index
    """

    def __init__(self, graph: HalfEdgeGraph, geometries: tuple[MultiPolygon, MultiPolygon]) -> None:
        self.graph = graph
        self.geometries = geometries
        self.node_processor = NodeProcessor(graph)

    def compute_labelling(self) -> int:
        """Label every edge of the graph for both geometries.

        Returns:
            Number of undirected edges whose location was found by
            point location rather than propagation

        Raises:
            TopologyConflictError: If propagation finds inconsistent labels
            OverlayAssertionError: If an edge has a one-sided label
        """
        for node_edge in self.graph.nodes():
            self.node_processor.compute_labelling(node_edge)
            self.node_processor.merge_sym_labels(node_edge)

        located = self.label_disconnected_edges()
        logger.debug(
            "Graph labelled",
            nodes=self.graph.node_count(),
            located_edges=located,
        )
        return located

    def label_disconnected_edges(self) -> int:
        """Locate edges with no known location for a geometry.

        Such an edge belongs to a part of the graph that never meets the
        geometry's boundary, so the whole edge lies in one region of it.
        """
        graph = self.graph
        located = 0
        for e in range(0, len(graph), 2):
            label = graph.label(e)
            sym_label = graph.label(graph.sym(e))
            for geom_index in range(GEOMETRY_COUNT):
                if label.has_location(geom_index):
                    continue
                location = self.geometries[geom_index].locate(
                    midpoint(graph.origin(e), graph.destination(e))
                )
                label.set_locations_both(geom_index, location)
                sym_label.set_locations_both(geom_index, location)
                located += 1
        return located
