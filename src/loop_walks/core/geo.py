"""Great-circle distances, polyline lengths and centroids."""

import math
from typing import Sequence

import numpy as np

from ..models import Coordinate

EARTH_RADIUS_M = 6_371_000.0


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates in meters."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlambda = math.radians(b.lon - a.lon)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push h a hair outside [0, 1] for identical or antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distances_from(point: Coordinate, lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """Vectorised haversine distance from one point to arrays of lat/lon (degrees)."""
    phi1 = math.radians(point.lat)
    phi2 = np.radians(lats)
    dphi = phi2 - phi1
    dlambda = np.radians(lons - point.lon)

    h = np.sin(dphi / 2) ** 2 + math.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) ** 2
    h = np.clip(h, 0.0, 1.0)
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def polyline_length(points: Sequence[Coordinate]) -> float:
    """Sum of consecutive point-to-point distances; 0 for fewer than 2 points."""
    total = 0.0
    for i in range(1, len(points)):
        total += distance_meters(points[i - 1], points[i])
    return total


def centroid(points: Sequence[Coordinate]) -> Coordinate:
    """Arithmetic mean of latitudes and longitudes.

    Good enough at walking-route scale. Not geodesically exact, and wrong for
    paths that straddle the antimeridian or pass near a pole.
    """
    if not points:
        raise ValueError("Cannot compute the centroid of an empty path")
    n = len(points)
    return Coordinate(
        lat=sum(p.lat for p in points) / n,
        lon=sum(p.lon for p in points) / n,
    )
