"""polyoverlay - Topological overlay of polygonal geometries.

polyoverlay nodes two polygonal geometries into a planar graph of half-edges,
labels every edge with its location relative to both inputs, and then either
links the result edges into output rings (intersection, union, difference,
symmetric difference) or evaluates the area of the result directly from the
labelled edges.

Example:
    $ polyoverlay area a.json b.json --op intersection
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
