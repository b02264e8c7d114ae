"""Turn an open chained path into a walkable loop."""

from typing import Sequence

from ..config import LOOP_CLOSURE_TOLERANCE_M
from ..models import Coordinate
from .geo import distance_meters


def is_near_loop(coordinates: Sequence[Coordinate], tolerance_m: float = LOOP_CLOSURE_TOLERANCE_M) -> bool:
    if len(coordinates) < 2:
        return True
    return distance_meters(coordinates[0], coordinates[-1]) < tolerance_m


def close_loop(
    coordinates: Sequence[Coordinate],
    tolerance_m: float = LOOP_CLOSURE_TOLERANCE_M,
) -> list[Coordinate]:
    """Return the path as a loop.

    Paths whose ends are already within tolerance_m come back unchanged.
    Anything else becomes out-and-back: the path followed by its reverse,
    minus the turnaround point so it is not duplicated.
    """
    coords = list(coordinates)
    if is_near_loop(coords, tolerance_m):
        return coords
    return coords + coords[-2::-1]
