"""
Validation Layer
================

Bounded Context: Admissibility of a geofence boundary.

Responsibilities:
- Coordinate range checks
- Boundary classification (errors block, warnings advise)
- Structured, code-tagged findings
- NO mutation of input, NO scheduling, NO I/O
"""

from palisade_zone.validation.issues import (
    IssueCode,
    Issue,
    PointResult,
    ValidationResult,
    BLOCKING_CODES,
    ADVISORY_CODES,
)
from palisade_zone.validation.validator import validate_point, validate_boundary

__all__ = [
    "IssueCode",
    "Issue",
    "PointResult",
    "ValidationResult",
    "BLOCKING_CODES",
    "ADVISORY_CODES",
    "validate_point",
    "validate_boundary",
]
