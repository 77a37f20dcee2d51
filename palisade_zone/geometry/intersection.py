"""
Boundary Shape Checks
=====================

Stateless shape logic - closure and edge intersection on a boundary.

Design:
- Pure functions (no state, input never mutated)
- Strict orientation predicate (collinear/touching edges not special-cased)
- O(n^2) pairwise edge scan (boundaries are small, drawn by hand)
"""

from typing import List

import numpy as np

from palisade_zone.geometry.shapes import Boundary, Point, as_vertex_array

# Absolute tolerance (degrees) for first == last, per axis
CLOSURE_TOLERANCE_DEG = 1e-6


def ccw(p: Point, q: Point, r: Point) -> bool:
    """
    Counter-clockwise orientation of (p, q, r).

    Strict inequality: collinear triples are NOT counter-clockwise.
    """
    return (
        (r.longitude - p.longitude) * (q.latitude - p.latitude)
        > (q.longitude - p.longitude) * (r.latitude - p.latitude)
    )


def edges_intersect(a: Point, b: Point, c: Point, d: Point) -> bool:
    """
    Check whether edge a-b properly crosses edge c-d.

    Args:
        a, b: First edge endpoints
        c, d: Second edge endpoints

    Returns:
        True if the orientation test reports a crossing
    """
    return ccw(a, c, d) != ccw(b, c, d) and ccw(a, b, c) != ccw(a, b, d)


def detect_self_intersection(points: Boundary) -> bool:
    """
    Detect whether any two non-adjacent boundary edges cross.

    Edge i joins points[i] to points[i + 1]. Every pair (i, j) with
    j >= i + 2 is tested, except (0, len - 2): on a closed ring the first
    edge and the closing edge share a vertex.

    Args:
        points: Boundary points (numeric coordinates)

    Returns:
        True on the first crossing pair, False otherwise or if len < 4
    """
    if points is None or len(points) < 4:
        return False

    count = len(points)
    last_edge = count - 2

    for i in range(count - 1):
        for j in range(i + 2, count - 1):
            if i == 0 and j == last_edge:
                continue
            if edges_intersect(points[i], points[i + 1], points[j], points[j + 1]):
                return True
    return False


def is_closed(points: Boundary, tolerance: float = CLOSURE_TOLERANCE_DEG) -> bool:
    """
    Check whether the last point repeats the first within tolerance.

    Latitude and longitude are compared independently. Empty boundaries
    are not closed.
    """
    if not points:
        return False

    ends = as_vertex_array([points[0], points[-1]])
    return bool(np.all(np.abs(ends[0] - ends[1]) < tolerance))


def auto_close(points: Boundary) -> List[Point]:
    """
    Close a boundary by appending its first point, if needed.

    Idempotent: auto_close(auto_close(x)) == auto_close(x).

    Args:
        points: Boundary points (len >= 3 expected)

    Returns:
        New list. Shorter or already closed boundaries are returned with
        the same length and values.
    """
    if len(points) < 3 or is_closed(points):
        return list(points)

    return [*points, points[0]]
