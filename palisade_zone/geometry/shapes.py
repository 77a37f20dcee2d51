"""
Geographic Shapes Module
========================

Pure geographic value types - NO state, NO side effects.

Design:
- Immutable points (frozen dataclass pattern)
- Boundaries are plain ordered sequences of points (caller owned)
- Vertex arrays (numpy) built on demand for shape checks
- Thread-safe by design (immutability)
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

# 1 degree of latitude in meters (approximate, spherical earth)
METERS_PER_DEGREE_LAT = 111320.0


@dataclass(frozen=True)
class Point:
    """
    Immutable geographic coordinate.

    Range is NOT enforced here: out-of-range and non-finite values are
    representable so the validation layer can report them as issues.

    Attributes:
        latitude: Degrees, semantically in [-90, 90]
        longitude: Degrees, semantically in [-180, 180]

    Example:
        >>> p = Point(latitude=23.301624, longitude=85.327065)
        >>> p.to_dict()
        {'latitude': 23.301624, 'longitude': 85.327065}
    """

    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON-compatible dict."""
        return {'latitude': self.latitude, 'longitude': self.longitude}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Point':
        """
        Deserialize from dict.

        Values are taken as-is. A missing key becomes None instead of a
        default 0, so the validator flags it as INVALID_*.

        Args:
            data: Dictionary with keys: latitude, longitude

        Returns:
            Point instance
        """
        return cls(
            latitude=data.get('latitude'),
            longitude=data.get('longitude')
        )

    def as_tuple(self) -> Tuple[float, float]:
        """(latitude, longitude) pair."""
        return (self.latitude, self.longitude)

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


# Ordered sequence of points; order defines edge connectivity
Boundary = Sequence[Point]


def as_vertex_array(points: Boundary) -> np.ndarray:
    """
    Build an Nx2 float array of (latitude, longitude) rows.

    Precondition: every point holds real numbers (NaN/inf allowed).

    Args:
        points: Boundary points

    Returns:
        Read-only array of shape (N, 2)
    """
    vertices = np.array(
        [[p.latitude, p.longitude] for p in points],
        dtype=np.float64
    ).reshape(-1, 2)
    vertices.flags.writeable = False
    return vertices


def points_from_pairs(pairs: Sequence[Sequence[float]]) -> List[Point]:
    """Build points from [(lat, lng), ...] pairs (YAML/CLI friendly)."""
    return [Point(latitude=pair[0], longitude=pair[1]) for pair in pairs]


def rectangle_boundary(top_left: Point, bottom_right: Point) -> List[Point]:
    """
    Closed rectangular boundary from two opposite corners.

    Args:
        top_left: North-west corner
        bottom_right: South-east corner

    Returns:
        Five points, last equal to first
    """
    return [
        Point(top_left.latitude, top_left.longitude),
        Point(top_left.latitude, bottom_right.longitude),
        Point(bottom_right.latitude, bottom_right.longitude),
        Point(bottom_right.latitude, top_left.longitude),
        Point(top_left.latitude, top_left.longitude),
    ]


def circular_boundary(
    center: Point,
    radius_m: float,
    num_points: int = 16
) -> List[Point]:
    """
    Approximate a circle of radius_m meters around center with a polygon.

    Longitude radius is scaled by cos(latitude). The ring is closed: it has
    num_points + 1 points, the last equal to the first.

    Args:
        center: Circle center
        radius_m: Radius in meters (> 0)
        num_points: Polygon vertices (>= 3)

    Returns:
        Closed list of points

    Raises:
        ValueError: If radius_m <= 0 or num_points < 3
    """
    if radius_m <= 0:
        raise ValueError(f"radius_m must be > 0, got {radius_m}")
    if num_points < 3:
        raise ValueError(f"num_points must be >= 3, got {num_points}")

    radius_lat = radius_m / METERS_PER_DEGREE_LAT
    radius_lng = radius_m / (
        METERS_PER_DEGREE_LAT * math.cos(math.radians(center.latitude))
    )

    angles = np.linspace(0.0, 2 * math.pi, num_points + 1)
    latitudes = center.latitude + radius_lat * np.sin(angles)
    longitudes = center.longitude + radius_lng * np.cos(angles)

    ring = [
        Point(latitude=float(lat), longitude=float(lng))
        for lat, lng in zip(latitudes[:-1], longitudes[:-1])
    ]
    # Exact closure (sin/cos at 2*pi is only approximately equal)
    ring.append(ring[0])
    return ring


def parse_points(raw_points: List[Any]) -> List[Point]:
    """
    Parse points from a JSON/YAML payload.

    Accepts {"latitude": ..., "longitude": ...} objects or [lat, lng] pairs.
    Values are not coerced; the validator classifies bad ones.

    Raises:
        TypeError: If raw_points is not a list or an entry has another shape
    """
    if not isinstance(raw_points, list):
        raise TypeError(f"points must be a list, got {type(raw_points).__name__}")

    points = []
    for raw in raw_points:
        if isinstance(raw, dict):
            points.append(Point.from_dict(raw))
        elif isinstance(raw, (list, tuple)) and len(raw) == 2:
            points.append(Point(latitude=raw[0], longitude=raw[1]))
        else:
            raise TypeError(f"Invalid point entry: {raw!r}")
    return points
