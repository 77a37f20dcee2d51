"""
Boundary Validator
==================

Pure, synchronous classification of a candidate geofence boundary.

Evaluation order (each step may end the pass):
1. Minimum vertex count (< 3 -> MIN_POINTS, stop)
2. Per-point range checks (any error -> stop, no shape checks)
3. Closure check (AUTO_CLOSE warning)
4. Self-intersection check, len >= 4 (SELF_INTERSECTION warning)

Malformed numbers (None, NaN, inf, strings) are reported as issues,
never raised.
"""

import math
import numbers
from collections.abc import Mapping
from typing import Any, List, Optional

from palisade_zone.geometry.shapes import Boundary, Point
from palisade_zone.geometry.intersection import detect_self_intersection, is_closed
from palisade_zone.validation.issues import Issue, IssueCode, PointResult, ValidationResult

MIN_BOUNDARY_POINTS = 3
MIN_INTERSECTION_POINTS = 4

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def _is_finite_real(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def _check_axis(
    value: Any,
    name: str,
    bounds: tuple,
    invalid_code: IssueCode,
    range_code: IssueCode
) -> Optional[Issue]:
    field = name.lower()
    if not _is_finite_real(value):
        return Issue(field=field, message=f"{name} must be a number", code=invalid_code)

    low, high = bounds
    if value < low or value > high:
        return Issue(
            field=field,
            message=f"{name} must be between {low:g} and {high:g}",
            code=range_code
        )
    return None


def validate_point(lat: Any, lng: Any) -> PointResult:
    """
    Validate a single coordinate pair.

    Args:
        lat: Latitude (finite real in [-90, 90] to pass)
        lng: Longitude (finite real in [-180, 180] to pass)

    Returns:
        PointResult with zero, one or two errors (latitude first)
    """
    errors = [
        issue
        for issue in (
            _check_axis(lat, "Latitude", LATITUDE_RANGE,
                        IssueCode.INVALID_LATITUDE, IssueCode.LATITUDE_OUT_OF_RANGE),
            _check_axis(lng, "Longitude", LONGITUDE_RANGE,
                        IssueCode.INVALID_LONGITUDE, IssueCode.LONGITUDE_OUT_OF_RANGE),
        )
        if issue is not None
    ]
    return PointResult(errors=tuple(errors))


def _as_point(item: Any) -> Optional[Point]:
    if isinstance(item, Point):
        return item
    if isinstance(item, Mapping):
        return Point.from_dict(item)
    return None


def validate_boundary(points: Boundary) -> ValidationResult:
    """
    Validate a candidate geofence boundary.

    Args:
        points: Ordered points (Point or {"latitude", "longitude"} mappings).
                May be empty, must not be None.

    Returns:
        ValidationResult; deterministic for identical input

    Raises:
        TypeError: If points is None (caller contract violation)
    """
    if points is None:
        raise TypeError("points must be a sequence of Point, got None")

    if len(points) < MIN_BOUNDARY_POINTS:
        return ValidationResult(errors=(
            Issue(
                field="coordinates",
                message="Geofence must have at least 3 points",
                code=IssueCode.MIN_POINTS
            ),
        ))

    errors: List[Issue] = []
    resolved: List[Point] = []

    for index, item in enumerate(points):
        field = f"coordinates[{index}]"
        point = _as_point(item)

        if point is None:
            errors.append(Issue(
                field=field,
                message=f"Point {index + 1}: Invalid coordinate object",
                code=IssueCode.INVALID_COORDINATE
            ))
            continue

        for err in validate_point(point.latitude, point.longitude).errors:
            errors.append(Issue(
                field=field,
                message=f"Point {index + 1}: {err.message}",
                code=err.code
            ))
        resolved.append(point)

    # Edges built from bad points are meaningless
    if errors:
        return ValidationResult(errors=tuple(errors))

    warnings: List[Issue] = []

    if not is_closed(resolved):
        warnings.append(Issue(
            field="coordinates",
            message="Polygon will be automatically closed",
            code=IssueCode.AUTO_CLOSE
        ))

    if len(resolved) >= MIN_INTERSECTION_POINTS and detect_self_intersection(resolved):
        warnings.append(Issue(
            field="coordinates",
            message="Polygon edges intersect themselves",
            code=IssueCode.SELF_INTERSECTION
        ))

    return ValidationResult(errors=(), warnings=tuple(warnings))
