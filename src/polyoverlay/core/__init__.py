"""Core overlay algorithms for polyoverlay.

This module contains the core algorithms for:

- Geometry primitives (orientation, intersections, angular ordering)
- The half-edge graph of a noded overlay
- Node label propagation and result ring linking
- Direct area evaluation from oriented edges
- Noding, overlay rules and pipeline orchestration

Key functions:
- area_term: Per-segment area term for a given ring orientation
- ring_area: Area of a ring from its edge area terms
- is_result_edge: Overlay rule for a labelled half-edge

Key classes:
- HalfEdgeGraph: Arena of half-edges with node rings and sym pairing
- NodeProcessor: Node-local labelling, merging and linking
- AreaEvaluator: Polygon and overlay area without ring construction
- SimpleNoder: Brute-force noder for two polygonal inputs
- OverlayLabeller: Whole-graph labelling
- OverlayProcessor: Full overlay and area-only pipelines
- BatchProcessor: Parallel area evaluation of many pairs
"""

from polyoverlay.core.area import AreaEvaluator, area_term, ring_area
from polyoverlay.core.graph import HalfEdge, HalfEdgeGraph, NodedEdge
from polyoverlay.core.labeller import OverlayLabeller
from polyoverlay.core.node import LinkState, NodeProcessor
from polyoverlay.core.noder import SimpleNoder
from polyoverlay.core.overlay import OverlayProcessor, OverlayResult
from polyoverlay.core.processor import BatchProcessor, process_pair
from polyoverlay.core.rules import is_result_edge, is_result_location

__all__ = [
    # Area
    "AreaEvaluator",
    # Batch
    "BatchProcessor",
    # Graph
    "HalfEdge",
    "HalfEdgeGraph",
    "LinkState",
    "NodeProcessor",
    "NodedEdge",
    # Pipeline
    "OverlayLabeller",
    "OverlayProcessor",
    "OverlayResult",
    "SimpleNoder",
    "area_term",
    "is_result_edge",
    "is_result_location",
    "process_pair",
    "ring_area",
]
