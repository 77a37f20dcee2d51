"""
Geometry Layer
==============

Bounded Context: Geographic points and boundary shape checks.

Responsibilities:
- Point representation (immutable)
- Boundary closure test and repair
- Edge intersection (orientation predicate)
- Boundary builders (rectangle, circle approximation)
- NO issue reporting, NO scheduling

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Zero side effects
"""

from palisade_zone.geometry.shapes import (
    Point,
    Boundary,
    as_vertex_array,
    points_from_pairs,
    parse_points,
    rectangle_boundary,
    circular_boundary,
)
from palisade_zone.geometry.intersection import (
    CLOSURE_TOLERANCE_DEG,
    ccw,
    edges_intersect,
    detect_self_intersection,
    is_closed,
    auto_close,
)

__all__ = [
    "Point",
    "Boundary",
    "as_vertex_array",
    "points_from_pairs",
    "parse_points",
    "rectangle_boundary",
    "circular_boundary",
    "CLOSURE_TOLERANCE_DEG",
    "ccw",
    "edges_intersect",
    "detect_self_intersection",
    "is_closed",
    "auto_close",
]
