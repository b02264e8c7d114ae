"""Route discovery: cached lookup by area, synthesis on a cache miss."""

import logging
from typing import Awaitable, Callable, Optional

from anyio import to_thread

from ..config import MAX_SEARCH_RADIUS_M, SynthesisSettings, is_valid_search_radius
from ..models import Coordinate, MapSegment, TerrainType
from ..state import RouteStore, StoredRoute
from .area import area_hash
from .assembler import synthesize_routes
from .geo import distance_meters
from .osm import fetch_walkable_segments

logger = logging.getLogger(__name__)

SegmentFetcher = Callable[[float, float, float], Awaitable[list[MapSegment]]]


async def discover(
    lat: float,
    lng: float,
    store: RouteStore,
    settings: Optional[SynthesisSettings] = None,
    radius_m: Optional[float] = None,
    duration_min: Optional[int] = None,
    duration_max: Optional[int] = None,
    terrain_type: Optional[TerrainType] = None,
    fetch: Optional[SegmentFetcher] = None,
) -> list[dict]:
    """Return route listings near (lat, lng), closest first.

    Routes already generated for the same area hash are reused; otherwise
    walkable segments are fetched, synthesized and stored.
    Raises ValueError for a radius that is not finite or outside
    (0, MAX_SEARCH_RADIUS_M].
    """
    settings = settings or SynthesisSettings()
    fetch = fetch or fetch_walkable_segments
    radius = radius_m if radius_m is not None else settings.search_radius_m
    if not is_valid_search_radius(radius):
        raise ValueError(f"Search radius must be in (0, {MAX_SEARCH_RADIUS_M}] meters, got {radius}")
    key = area_hash(lat, lng)

    entries: list[StoredRoute] = store.lookup(key)
    if entries:
        logger.debug("Cache hit for area %s: %d route(s)", key, len(entries))
    else:
        segments = await fetch(lat, lng, radius)
        if segments:
            generated = await to_thread.run_sync(synthesize_routes, segments, settings)
            # Another call may have filled this area while we were awaiting
            entries = store.lookup(key)
            if entries:
                logger.debug("Area %s filled concurrently; discarding %d route(s)", key, len(generated))
            else:
                entries = store.store(key, generated)
                logger.info("Generated %d route(s) for area %s", len(entries), key)
        else:
            logger.info("No walkable segments found around %s", key)

    if duration_min is not None:
        entries = [e for e in entries if e.route.duration_minutes >= duration_min]
    if duration_max is not None:
        entries = [e for e in entries if e.route.duration_minutes <= duration_max]
    if terrain_type is not None:
        entries = [e for e in entries if e.route.terrain_type == terrain_type]

    user = Coordinate(lat=lat, lon=lng)
    results = []
    for entry in entries:
        listing = entry.as_listing()
        center = Coordinate(lat=entry.route.center_lat, lon=entry.route.center_lng)
        listing["distance_from_user_m"] = round(distance_meters(user, center))
        results.append(listing)

    results.sort(key=lambda r: r["distance_from_user_m"])
    return results
