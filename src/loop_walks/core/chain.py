"""Greedy chaining of disconnected segments into one continuous path."""

import logging
from typing import Sequence, Union

from pydantic import BaseModel, Field, model_validator

from ..config import CONNECTION_RADIUS_M
from ..models import Coordinate, MapSegment
from .geo import distance_meters, polyline_length
from .segment_index import SegmentIndex

logger = logging.getLogger(__name__)


class Chain(BaseModel):
    """An in-progress path built from whole segments.

    Only grows: coordinates are appended and every absorbed segment lands in
    both ``segments`` and ``used_segment_ids``.
    """
    coordinates: list[Coordinate] = Field(default_factory=list)
    used_segment_ids: set[int] = Field(default_factory=set)
    segments: list[MapSegment] = Field(default_factory=list)
    total_distance_m: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def ids_match_segments(self) -> "Chain":
        if len(self.used_segment_ids) != len(self.segments):
            raise ValueError(
                f"{len(self.used_segment_ids)} used ids but {len(self.segments)} segments"
            )
        return self

    @property
    def last_point(self) -> Coordinate:
        return self.coordinates[-1]

    def absorb(self, segment: MapSegment) -> None:
        """Append a segment, reversed if its far end is the closer one.

        Raises ValueError if the segment id is already part of the chain.
        """
        if segment.id in self.used_segment_ids:
            raise ValueError(f"Segment {segment.id} is already in the chain")
        points = segment.points
        if self.coordinates:
            last = self.last_point
            if distance_meters(last, segment.end) < distance_meters(last, segment.start):
                points = list(reversed(points))
        self.coordinates.extend(points)
        self.segments.append(segment)
        self.used_segment_ids.add(segment.id)
        self.total_distance_m += polyline_length(segment.points)


def build_chain(
    seed: MapSegment,
    pool: Union[Sequence[MapSegment], SegmentIndex],
    target_distance_m: float,
    max_connection_m: float = CONNECTION_RADIUS_M,
) -> Chain:
    """Extend from seed by repeatedly absorbing the nearest unused segment.

    Stops once the accumulated segment length reaches target_distance_m or no
    unused segment has an endpoint within max_connection_m of the chain's end.
    The returned chain may fall short of the target.
    """
    index = pool if isinstance(pool, SegmentIndex) else SegmentIndex(pool)

    chain = Chain()
    chain.absorb(seed)

    while chain.total_distance_m < target_distance_m:
        nxt = index.find_nearest(chain.last_point, chain.used_segment_ids, max_connection_m)
        if nxt is None:
            logger.debug(
                "Chain from segment %s stopped at %.0fm of %.0fm: no connectable segment",
                seed.id, chain.total_distance_m, target_distance_m,
            )
            break
        chain.absorb(nxt)

    return chain
