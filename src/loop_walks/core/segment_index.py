"""Nearest connectable segment lookup over a pool of map segments."""

import logging
from typing import Collection, Optional, Sequence

import numpy as np

from ..config import CONNECTION_RADIUS_M
from ..models import Coordinate, MapSegment
from .geo import distances_from

logger = logging.getLogger(__name__)


class SegmentIndex:
    """Endpoint arrays for a segment pool, kept in input order.

    Lookups are a single vectorised pass over all endpoints. Ties resolve to
    the earliest segment in the pool, so results do not depend on set or dict
    iteration order.
    """

    def __init__(self, segments: Sequence[MapSegment]):
        usable = [s for s in segments if len(s.points) >= 2]
        if len(usable) < len(segments):
            logger.debug("Dropped %d segment(s) with fewer than 2 points", len(segments) - len(usable))
        self.segments: list[MapSegment] = usable
        self._ids = [s.id for s in usable]
        self._start_lats = np.array([s.start.lat for s in usable], dtype=np.float64)
        self._start_lons = np.array([s.start.lon for s in usable], dtype=np.float64)
        self._end_lats = np.array([s.end.lat for s in usable], dtype=np.float64)
        self._end_lons = np.array([s.end.lon for s in usable], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.segments)

    def endpoint_distances(self, point: Coordinate) -> np.ndarray:
        """Distance from point to the closer endpoint of every segment."""
        d_start = distances_from(point, self._start_lats, self._start_lons)
        d_end = distances_from(point, self._end_lats, self._end_lons)
        return np.minimum(d_start, d_end)

    def find_nearest(
        self,
        point: Coordinate,
        excluded: Collection[int] = (),
        max_distance_m: float = CONNECTION_RADIUS_M,
    ) -> Optional[MapSegment]:
        """Closest non-excluded segment with an endpoint strictly within max_distance_m."""
        if not self.segments:
            return None

        distances = self.endpoint_distances(point)
        if excluded:
            mask = np.fromiter((sid in excluded for sid in self._ids), dtype=bool, count=len(self._ids))
            distances[mask] = np.inf

        best = int(np.argmin(distances))
        if distances[best] < max_distance_m:
            return self.segments[best]
        return None


def find_nearest(
    candidates: Sequence[MapSegment],
    point: Coordinate,
    excluded: Collection[int] = (),
    max_distance_m: float = CONNECTION_RADIUS_M,
) -> Optional[MapSegment]:
    """Functional form of SegmentIndex.find_nearest for a one-off lookup."""
    return SegmentIndex(candidates).find_nearest(point, excluded, max_distance_m)
