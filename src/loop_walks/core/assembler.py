"""Assemble OSM ways into walkable loop routes of several target durations.

For each target duration the longest segment not yet used as a seed starts a
chain toward half the target distance; the chain is closed into a loop and
turned into a GeneratedRoute with derived name, description, difficulty and
terrain type. Segments may be reused as chain material across durations, but
never seed two routes in one call.
"""

import logging
import math
from collections import Counter
from typing import Optional, Sequence

from ..config import SynthesisSettings
from ..models import Coordinate, Difficulty, GeneratedRoute, MapSegment, TerrainType
from .chain import build_chain
from .classify import classify_terrain
from .geo import centroid, polyline_length
from .loop import close_loop
from .segment_index import SegmentIndex

logger = logging.getLogger(__name__)

TERRAIN_LABELS: dict[str, str] = {
    "nature": "Nature walk",
    "urban": "City walk",
    "mixed": "Mixed walk",
}

TERRAIN_DESCRIPTIONS: dict[str, str] = {
    "nature": "A walk through parks and green paths",
    "urban": "A city walk along pedestrian streets",
    "mixed": "A mixed city and nature walk",
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def walking_minutes(distance_m: float, settings: SynthesisSettings) -> int:
    """Whole minutes needed to walk distance_m at the configured pace."""
    return _round_half_up(distance_m / settings.walk_speed_mps / 60)


def difficulty_for(distance_m: float, settings: Optional[SynthesisSettings] = None) -> Difficulty:
    settings = settings or SynthesisSettings()
    if distance_m < settings.easy_max_m:
        return "easy"
    if distance_m < settings.moderate_max_m:
        return "moderate"
    return "difficult"


def dominant_terrain(segments: Sequence[MapSegment]) -> TerrainType:
    """Majority terrain among segments; ties go to the category seen first."""
    counts = Counter(classify_terrain(s.tags) for s in segments)
    if not counts:
        return "mixed"
    # most_common keeps first-encountered order among equal counts
    return counts.most_common(1)[0][0]


def route_name(segments: Sequence[MapSegment], terrain: TerrainType, center: Coordinate) -> str:
    for segment in segments:
        if segment.name:
            return f"Walk {segment.name}"
    return f"{TERRAIN_LABELS[terrain]} ({center.lat:.3f}, {center.lon:.3f})"


def route_description(terrain: TerrainType, duration_min: int, distance_m: int) -> str:
    base = TERRAIN_DESCRIPTIONS.get(terrain, "A walk")
    return (
        f"{base} of {duration_min} min ({distance_m / 1000:.1f} km). "
        "Route generated automatically from OpenStreetMap paths."
    )


def _pick_seed(index: SegmentIndex, lengths: list[float], used_seed_ids: set[int]) -> Optional[MapSegment]:
    best: Optional[MapSegment] = None
    best_length = -1.0
    for segment, length in zip(index.segments, lengths):
        if segment.id in used_seed_ids:
            continue
        if length > best_length:
            best, best_length = segment, length
    return best


def synthesize_routes(
    segments: Sequence[MapSegment],
    settings: Optional[SynthesisSettings] = None,
) -> list[GeneratedRoute]:
    """Generate up to one loop route per target duration from raw segments.

    Returns an empty list for empty input. Output depends only on the
    segments and their order.
    """
    settings = settings or SynthesisSettings()
    index = SegmentIndex(segments)
    if not index.segments:
        return []

    lengths = [polyline_length(s.points) for s in index.segments]
    used_seed_ids: set[int] = set()
    routes: list[GeneratedRoute] = []

    for target_min in settings.target_durations_min:
        target_distance = (target_min / 60) * settings.walk_speed_kmh * 1000

        seed = _pick_seed(index, lengths, used_seed_ids)
        if seed is None:
            logger.debug("No unused seed left; stopping before the %d min target", target_min)
            break
        used_seed_ids.add(seed.id)

        chain = build_chain(seed, index, target_distance / 2, settings.connection_radius_m)
        loop = close_loop(chain.coordinates, settings.loop_tolerance_m)

        actual_distance = min(chain.total_distance_m * 2, target_distance * settings.overshoot_cap)
        duration = walking_minutes(actual_distance, settings)
        if duration < target_min * settings.min_duration_fraction:
            logger.debug(
                "Skipping %d min target: chain from segment %s only reaches %d min",
                target_min, seed.id, duration,
            )
            continue

        center = centroid(loop)
        terrain = dominant_terrain(chain.segments)
        distance_m = _round_half_up(actual_distance)

        routes.append(GeneratedRoute(
            name=route_name(chain.segments, terrain, center),
            description=route_description(terrain, duration, distance_m),
            duration_minutes=duration,
            distance_meters=distance_m,
            difficulty=difficulty_for(actual_distance, settings),
            terrain_type=terrain,
            path=loop,
            center_lat=center.lat,
            center_lng=center.lon,
        ))

    logger.debug("Synthesized %d route(s) from %d segment(s)", len(routes), len(index))
    return routes
