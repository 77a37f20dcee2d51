"""
Palisade Zone - Geofence Validation Engine
==========================================

Bounded Context: Admissibility of user-drawn geofence boundaries.

Design Philosophy:
- Separation of Concerns: Geometry and Validation separated
- Pure functions: same input, same result, no side effects
- Data problems are findings (Issue), not exceptions

Architecture:

    palisade_zone/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── shapes.py      # Point, boundary builders, vertex arrays
    │   └── intersection.py # Closure, auto-close, self-intersection
    │
    └── validation/        # Classification (stateless)
        ├── issues.py      # IssueCode, Issue, ValidationResult
        └── validator.py   # validate_point, validate_boundary

Usage:

    from palisade_zone import Point, validate_boundary, auto_close, IssueCode

    points = [Point(0, 0), Point(0, 1), Point(1, 0)]
    result = validate_boundary(points)

    if result.is_valid:
        if result.has_code(IssueCode.AUTO_CLOSE):
            points = auto_close(points)
        submit(points)
"""

# Geometry Layer (immutable, stateless)
from palisade_zone.geometry import (
    Point,
    Boundary,
    CLOSURE_TOLERANCE_DEG,
    as_vertex_array,
    points_from_pairs,
    parse_points,
    rectangle_boundary,
    circular_boundary,
    ccw,
    edges_intersect,
    detect_self_intersection,
    is_closed,
    auto_close,
)

# Validation Layer (stateless)
from palisade_zone.validation import (
    IssueCode,
    Issue,
    PointResult,
    ValidationResult,
    BLOCKING_CODES,
    ADVISORY_CODES,
    validate_point,
    validate_boundary,
)

__all__ = [
    # Geometry
    "Point",
    "Boundary",
    "CLOSURE_TOLERANCE_DEG",
    "as_vertex_array",
    "points_from_pairs",
    "parse_points",
    "rectangle_boundary",
    "circular_boundary",
    "ccw",
    "edges_intersect",
    "detect_self_intersection",
    "is_closed",
    "auto_close",
    # Validation
    "IssueCode",
    "Issue",
    "PointResult",
    "ValidationResult",
    "BLOCKING_CODES",
    "ADVISORY_CODES",
    "validate_point",
    "validate_boundary",
]

__version__ = "1.0.0"
