"""
Test Geofence Validation Engine
===============================

Classification of candidate boundaries (palisade_zone): point checks,
vertex count, closure and self-intersection.

Usage:
    pytest test_geofence_validation.py
"""

import math

import pytest
from hypothesis import given, strategies as st

from palisade_zone import (
    CLOSURE_TOLERANCE_DEG,
    IssueCode,
    Point,
    ValidationResult,
    as_vertex_array,
    auto_close,
    circular_boundary,
    detect_self_intersection,
    edges_intersect,
    is_closed,
    parse_points,
    points_from_pairs,
    rectangle_boundary,
    validate_boundary,
    validate_point,
)


def pts(*pairs):
    return points_from_pairs(pairs)


TRIANGLE = pts((0, 0), (0, 1), (1, 0))
CLOSED_SQUARE = pts((0, 0), (0, 2), (2, 2), (2, 0), (0, 0))
BOWTIE = pts((0, 0), (2, 2), (2, 0), (0, 2), (0, 0))


# ─────────────────────────────────────────────────────────────────────────────
# Reference boundaries
# ─────────────────────────────────────────────────────────────────────────────

def test_open_triangle_is_valid_with_auto_close_warning():
    result = validate_boundary(TRIANGLE)

    assert result.is_valid
    assert result.errors == ()
    assert result.warning_codes == (IssueCode.AUTO_CLOSE,)
    assert result.warnings[0].field == "coordinates"
    assert result.warnings[0].message == "Polygon will be automatically closed"


def test_two_points_is_min_points_error():
    result = validate_boundary(pts((0, 0), (0, 1)))

    assert not result.is_valid
    assert result.error_codes == (IssueCode.MIN_POINTS,)
    assert result.errors[0].message == "Geofence must have at least 3 points"
    assert result.warnings == ()


def test_out_of_range_latitude_skips_shape_checks():
    result = validate_boundary(pts((91, 0), (0, 1), (1, 0)))

    assert not result.is_valid
    assert result.error_codes == (IssueCode.LATITUDE_OUT_OF_RANGE,)
    assert result.errors[0].field == "coordinates[0]"
    assert result.errors[0].message == "Point 1: Latitude must be between -90 and 90"
    # Not closed, but no AUTO_CLOSE: shape checks never ran
    assert result.warnings == ()


def test_closed_square_has_no_findings():
    result = validate_boundary(CLOSED_SQUARE)

    assert result.is_valid
    assert result.errors == ()
    assert result.warnings == ()


def test_bowtie_is_valid_with_self_intersection_warning():
    result = validate_boundary(BOWTIE)

    assert result.is_valid
    assert IssueCode.SELF_INTERSECTION in result.warning_codes
    assert IssueCode.AUTO_CLOSE not in result.warning_codes


def test_open_crossing_shape_reports_both_warnings_in_order():
    result = validate_boundary(pts((0, 0), (2, 2), (2, 0), (0, 2), (0, 1)))

    assert result.warning_codes == (IssueCode.AUTO_CLOSE, IssueCode.SELF_INTERSECTION)


def test_open_four_point_bowtie_only_needs_closing():
    # Its only crossing is edge 0 against edge len-2, which is never tested
    result = validate_boundary(BOWTIE[:-1])

    assert not detect_self_intersection(BOWTIE[:-1])
    assert result.warning_codes == (IssueCode.AUTO_CLOSE,)


@pytest.mark.parametrize("count", [0, 1, 2])
def test_fewer_than_three_points(count):
    result = validate_boundary(TRIANGLE[:count])

    assert result.error_codes == (IssueCode.MIN_POINTS,)


def test_min_points_ignores_bad_coordinates():
    result = validate_boundary([Point(None, "x"), Point(500, 500)])

    assert result.error_codes == (IssueCode.MIN_POINTS,)


def test_none_boundary_is_a_caller_error():
    with pytest.raises(TypeError):
        validate_boundary(None)


# ─────────────────────────────────────────────────────────────────────────────
# Per-point checks
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "lat, lng, expected",
    [
        (0, 0, ()),
        (90, 180, ()),
        (-90, -180, ()),
        (90.0001, 0, (IssueCode.LATITUDE_OUT_OF_RANGE,)),
        (0, -180.5, (IssueCode.LONGITUDE_OUT_OF_RANGE,)),
        (None, 0, (IssueCode.INVALID_LATITUDE,)),
        (0, None, (IssueCode.INVALID_LONGITUDE,)),
        (math.nan, 0, (IssueCode.INVALID_LATITUDE,)),
        (0, math.inf, (IssueCode.INVALID_LONGITUDE,)),
        (-math.inf, 0, (IssueCode.INVALID_LATITUDE,)),
        ("", 0, (IssueCode.INVALID_LATITUDE,)),
        ("12.5", 0, (IssueCode.INVALID_LATITUDE,)),
        (True, 0, (IssueCode.INVALID_LATITUDE,)),
        (100, 200, (IssueCode.LATITUDE_OUT_OF_RANGE, IssueCode.LONGITUDE_OUT_OF_RANGE)),
        (None, math.nan, (IssueCode.INVALID_LATITUDE, IssueCode.INVALID_LONGITUDE)),
    ],
)
def test_validate_point(lat, lng, expected):
    result = validate_point(lat, lng)

    assert tuple(e.code for e in result.errors) == expected
    assert result.is_valid == (expected == ())


def test_validate_point_fields_and_messages():
    result = validate_point(None, 181)

    assert [(e.field, e.message) for e in result.errors] == [
        ("latitude", "Latitude must be a number"),
        ("longitude", "Longitude must be between -180 and 180"),
    ]


def test_point_errors_are_prefixed_and_indexed():
    boundary = pts((0, 0), (0, 1), (1, 0), (0, 200))

    result = validate_boundary(boundary)

    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.field == "coordinates[3]"
    assert error.message == "Point 4: Longitude must be between -180 and 180"


def test_every_bad_point_is_reported():
    boundary = [Point(0, 0), Point(None, 0), Point(95, 190), Point(1, 1)]

    result = validate_boundary(boundary)

    assert [(e.field, e.code) for e in result.errors] == [
        ("coordinates[1]", IssueCode.INVALID_LATITUDE),
        ("coordinates[2]", IssueCode.LATITUDE_OUT_OF_RANGE),
        ("coordinates[2]", IssueCode.LONGITUDE_OUT_OF_RANGE),
    ]


def test_mapping_points_are_accepted():
    boundary = [
        {"latitude": 0, "longitude": 0},
        {"latitude": 0, "longitude": 1},
        {"latitude": 1},
    ]

    result = validate_boundary(boundary)

    assert result.error_codes == (IssueCode.INVALID_LONGITUDE,)
    assert result.errors[0].field == "coordinates[2]"


def test_unrecognized_entry_is_invalid_coordinate():
    result = validate_boundary([Point(0, 0), "not a point", Point(1, 0)])

    assert result.error_codes == (IssueCode.INVALID_COORDINATE,)
    assert result.errors[0].message == "Point 2: Invalid coordinate object"


def test_issue_blocking_flag():
    open_result = validate_boundary(TRIANGLE)
    bad_result = validate_boundary(TRIANGLE[:1])

    assert not open_result.warnings[0].is_blocking
    assert bad_result.errors[0].is_blocking


# ─────────────────────────────────────────────────────────────────────────────
# Closure and intersection
# ─────────────────────────────────────────────────────────────────────────────

def test_closure_tolerance():
    nearly = pts((0, 0), (0, 1), (1, 0), (CLOSURE_TOLERANCE_DEG / 2, 0))
    apart = pts((0, 0), (0, 1), (1, 0), (CLOSURE_TOLERANCE_DEG * 10, 0))

    assert is_closed(nearly)
    assert not is_closed(apart)
    assert not is_closed([])


def test_auto_close_appends_first_point():
    closed = auto_close(TRIANGLE)

    assert closed == [*TRIANGLE, TRIANGLE[0]]
    assert len(TRIANGLE) == 3  # input untouched


def test_auto_close_leaves_closed_and_short_boundaries_alone():
    assert auto_close(CLOSED_SQUARE) == list(CLOSED_SQUARE)
    assert auto_close(TRIANGLE[:2]) == list(TRIANGLE[:2])
    assert auto_close([]) == []


def test_closed_boundary_validates_without_auto_close():
    result = validate_boundary(auto_close(TRIANGLE))

    assert result.is_valid
    assert not result.has_code(IssueCode.AUTO_CLOSE)


def test_triangle_skips_intersection_check():
    assert not detect_self_intersection(TRIANGLE)
    assert not detect_self_intersection(None)


def test_crossing_edges():
    a, b = Point(0, 0), Point(2, 2)
    c, d = Point(2, 0), Point(0, 2)

    assert edges_intersect(a, b, c, d)
    assert not edges_intersect(a, Point(0, 2), c, Point(2, 2))


def test_collinear_overlap_is_not_reported():
    # Strict orientation predicate: degenerate collinear edges stay silent
    boundary = pts((0, 0), (0, 2), (0, 1), (0, 3))

    assert not detect_self_intersection(boundary)


def test_first_and_closing_edge_pair_is_skipped():
    assert not detect_self_intersection(CLOSED_SQUARE)
    assert detect_self_intersection(BOWTIE)


def test_vertex_array_is_read_only():
    vertices = as_vertex_array(CLOSED_SQUARE)

    assert vertices.shape == (5, 2)
    with pytest.raises(ValueError):
        vertices[0, 0] = 42.0


# ─────────────────────────────────────────────────────────────────────────────
# Builders and parsing
# ─────────────────────────────────────────────────────────────────────────────

def test_rectangle_boundary_is_closed_and_clean():
    boundary = rectangle_boundary(Point(10, 20), Point(9, 21))

    assert len(boundary) == 5
    assert boundary[0] == boundary[-1]
    result = validate_boundary(boundary)
    assert result.is_valid
    assert result.warnings == ()


def test_circular_boundary_is_closed_and_clean():
    center = Point(23.301624, 85.327065)
    boundary = circular_boundary(center, radius_m=100, num_points=12)

    assert len(boundary) == 13
    assert boundary[0] == boundary[-1]
    for p in boundary[:-1]:
        assert abs(p.latitude - center.latitude) <= 100 / 111320.0 + 1e-12
    result = validate_boundary(boundary)
    assert result.is_valid
    assert result.warnings == ()


@pytest.mark.parametrize("radius_m, num_points", [(0, 16), (-5, 16), (100, 2)])
def test_circular_boundary_rejects_bad_arguments(radius_m, num_points):
    with pytest.raises(ValueError):
        circular_boundary(Point(0, 0), radius_m=radius_m, num_points=num_points)


def test_parse_points_accepts_pairs_and_objects():
    points = parse_points([[1.5, 2.5], {"latitude": 3, "longitude": 4}, (5, 6)])

    assert points == [Point(1.5, 2.5), Point(3, 4), Point(5, 6)]


@pytest.mark.parametrize("raw", [None, "0,0", [[1, 2, 3]], [42]])
def test_parse_points_rejects_unknown_shapes(raw):
    with pytest.raises(TypeError):
        parse_points(raw)


def test_parse_points_does_not_coerce():
    result = validate_boundary(parse_points([["1", 0], [0, 1], [1, 0]]))

    assert result.error_codes == (IssueCode.INVALID_LATITUDE,)


def test_result_dict_recomputes_validity():
    result = validate_boundary(TRIANGLE[:2])
    data = result.to_dict()
    data["is_valid"] = True

    assert data["errors"][0]["code"] == "MIN_POINTS"
    assert not ValidationResult.from_dict(data).is_valid


# ─────────────────────────────────────────────────────────────────────────────
# Properties
# ─────────────────────────────────────────────────────────────────────────────

valid_points = st.builds(
    Point,
    latitude=st.floats(min_value=-90, max_value=90),
    longitude=st.floats(min_value=-180, max_value=180),
)
any_number = st.one_of(
    st.floats(allow_nan=True, allow_infinity=True),
    st.integers(min_value=-1000, max_value=1000),
    st.none(),
)
any_points = st.builds(Point, latitude=any_number, longitude=any_number)


@given(st.lists(any_points, max_size=8))
def test_validation_is_deterministic(points):
    assert validate_boundary(points) == validate_boundary(list(points))


@given(st.lists(any_points, max_size=2))
def test_short_boundaries_always_min_points(points):
    result = validate_boundary(points)

    assert not result.is_valid
    assert result.error_codes == (IssueCode.MIN_POINTS,)


@given(any_number, any_number)
def test_point_validity_matches_range(lat, lng):
    def in_range(value, limit):
        return (
            value is not None
            and math.isfinite(value)
            and -limit <= value <= limit
        )

    expected = in_range(lat, 90) and in_range(lng, 180)

    assert validate_point(lat, lng).is_valid == expected


@given(st.lists(valid_points, min_size=3, max_size=8))
def test_in_range_boundaries_are_valid(points):
    result = validate_boundary(points)

    assert result.is_valid
    assert set(result.warning_codes) <= {IssueCode.AUTO_CLOSE, IssueCode.SELF_INTERSECTION}


@given(st.lists(valid_points, min_size=3, max_size=8))
def test_auto_close_is_idempotent_and_closes(points):
    once = auto_close(points)

    assert auto_close(once) == once
    assert is_closed(once)
    assert not validate_boundary(once).has_code(IssueCode.AUTO_CLOSE)


@given(st.lists(any_points, min_size=3, max_size=8))
def test_valid_boundary_has_only_valid_points(points):
    result = validate_boundary(points)

    if result.is_valid:
        assert all(validate_point(p.latitude, p.longitude).is_valid for p in points)
    else:
        assert any(not validate_point(p.latitude, p.longitude).is_valid for p in points)


@given(st.lists(valid_points, min_size=4, max_size=8))
def test_self_intersection_is_deterministic(points):
    first = detect_self_intersection(points)

    assert detect_self_intersection(list(points)) == first
    assert validate_boundary(points).has_code(IssueCode.SELF_INTERSECTION) == first
