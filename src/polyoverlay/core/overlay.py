"""Overlay pipeline orchestration.

This module wires the overlay stages together:
1. Node both inputs and build the half-edge graph
2. Label every edge for both inputs
3. Mark the result edges for a boolean operation
4. Either link the result edges into rings, or evaluate the result
   area directly from the labelled edges

Any topology error aborts the run; no partial result is produced.
"""

import math
import time
from dataclasses import dataclass, field

from polyoverlay.config import OverlayOp, OverlaySettings, get_default_settings
from polyoverlay.core.area import AreaEvaluator
from polyoverlay.core.graph import HalfEdgeGraph
from polyoverlay.core.labeller import OverlayLabeller
from polyoverlay.core.node import NodeProcessor
from polyoverlay.core.noder import SimpleNoder
from polyoverlay.core.rules import is_result_edge
from polyoverlay.domain import Coordinate, MultiPolygon
from polyoverlay.exceptions import AreaMismatchError, TopologyError
from polyoverlay.utils import OverlayLogger, OverlayStats


@dataclass
class OverlayResult:
    """Outcome of a full overlay.

    Attributes:
        operation: The boolean operation performed
        rings: Closed result rings; shells clockwise, holes counter-clockwise
        area: Result area evaluated directly from the labelled edges
        linked_area: Result area evaluated from the linked rings
        graph: The labelled and linked graph
        stats: Graph and ring counts for the run
    """

    operation: OverlayOp
    rings: list[list[Coordinate]]
    area: float
    linked_area: float
    graph: HalfEdgeGraph = field(repr=False)
    stats: OverlayStats = field(repr=False)

    def to_dict(self) -> dict:
        """Serialize rings and areas for output."""
        return {
            "operation": self.operation.value,
            "area": self.area,
            "rings": [[c.to_list() for c in ring] for ring in self.rings],
        }


class OverlayProcessor:
    """Runs the overlay of two polygonal geometries.

    Example:
        processor = OverlayProcessor()
        result = processor.overlay(a, b, OverlayOp.UNION)
        area = processor.area(a, b)
    """

    def __init__(
        self,
        settings: OverlaySettings | None = None,
        overlay_logger: OverlayLogger | None = None,
    ) -> None:
        """Initialize overlay processor with configuration.

        Args:
            settings: Application settings (defaults if None)
            overlay_logger: Logger collecting stage statistics
        """
        self.settings = settings if settings is not None else get_default_settings()
        self.overlay_logger = overlay_logger if overlay_logger is not None else OverlayLogger()
        self.noder = SimpleNoder()
        self.area_evaluator = AreaEvaluator()

    def build_graph(self, geom0: MultiPolygon, geom1: MultiPolygon) -> HalfEdgeGraph:
        """Node both inputs and build their half-edge graph."""
        graph = HalfEdgeGraph(self.noder.node(geom0, geom1))
        self.overlay_logger.log_graph_built(graph.node_count(), len(graph))
        return graph

    def label(self, graph: HalfEdgeGraph, geom0: MultiPolygon, geom1: MultiPolygon) -> None:
        """Complete the labels of every edge for both inputs."""
        located = OverlayLabeller(graph, (geom0, geom1)).compute_labelling()
        self.overlay_logger.log_labelling_complete(graph.node_count(), located)

    def mark_result_edges(self, graph: HalfEdgeGraph, op: OverlayOp) -> int:
        """Set the result flag of every half-edge bounding the result.

        Returns:
            Number of result half-edges
        """
        count = 0
        for e in graph.edges():
            in_result = is_result_edge(graph.label(e), op)
            graph.set_in_result(e, in_result)
            count += in_result
        self.overlay_logger.log_result_edges(op.value, count)
        return count

    def link(self, graph: HalfEdgeGraph) -> list[list[Coordinate]]:
        """Link result edges at every node and extract the result rings."""
        node_processor = NodeProcessor(graph)
        for e in graph.result_edges():
            node_processor.link_result_edges(e)
        rings = graph.result_rings()
        self.overlay_logger.log_rings_linked(len(rings))
        return rings

    def overlay(
        self,
        geom0: MultiPolygon,
        geom1: MultiPolygon,
        op: OverlayOp | None = None,
    ) -> OverlayResult:
        """Compute the full overlay of two geometries.

        Args:
            geom0: First input
            geom1: Second input
            op: Boolean operation (settings default if None)

        Returns:
            OverlayResult with linked rings and areas

        Raises:
            TopologyError: If the graph is inconsistent, or if area
                verification is enabled and the two areas disagree
        """
        op = op if op is not None else self.settings.overlay.operation
        start_time = time.time()
        try:
            graph = self.build_graph(geom0, geom1)
            self.label(graph, geom0, geom1)
            self.mark_result_edges(graph, op)
            area = self.area_evaluator.overlay_area(graph, op)
            rings = self.link(graph)
            linked_area = self.area_evaluator.linked_ring_area(rings)
            if self.settings.overlay.verify_area:
                self._verify_area(area, linked_area)
        except TopologyError as e:
            self.overlay_logger.log_topology_failure(e)
            raise

        self.overlay_logger.log_area(op.value, area, (time.time() - start_time) * 1000)
        return OverlayResult(
            operation=op,
            rings=rings,
            area=area,
            linked_area=linked_area,
            graph=graph,
            stats=self.overlay_logger.stats,
        )

    def area(
        self,
        geom0: MultiPolygon,
        geom1: MultiPolygon,
        op: OverlayOp | None = None,
    ) -> float:
        """Compute the overlay area without linking result rings.

        Raises:
            TopologyError: If the graph is inconsistent
        """
        op = op if op is not None else self.settings.overlay.operation
        start_time = time.time()
        try:
            graph = self.build_graph(geom0, geom1)
            self.label(graph, geom0, geom1)
            area = self.area_evaluator.overlay_area(graph, op)
        except TopologyError as e:
            self.overlay_logger.log_topology_failure(e)
            raise

        self.overlay_logger.log_area(op.value, area, (time.time() - start_time) * 1000)
        return area

    def _verify_area(self, area: float, linked_area: float) -> None:
        tolerance = self.settings.overlay.area_tolerance
        scale = max(abs(area), abs(linked_area), 1.0)
        if not math.isclose(area, linked_area, rel_tol=tolerance, abs_tol=tolerance * scale):
            raise AreaMismatchError(area, linked_area)
