"""Walkable OpenStreetMap way fetching via Overpass API."""

import logging

import httpx
from pydantic import ValidationError

from ..config import SEARCH_RADIUS_M
from ..models import Coordinate, MapSegment

logger = logging.getLogger(__name__)

OVERPASS_SERVERS = [
    "https://overpass-api.de/api/interpreter",
    "https://overpass.kumi.systems/api/interpreter",
    "https://overpass.openstreetmap.ru/api/interpreter",
]

USER_AGENT = "loop-walks/1.0"

# Overpass tag filters for ways a dog walk can follow
WALKABLE_FILTERS = [
    '["highway"="footway"]',
    '["highway"="path"]',
    '["highway"="pedestrian"]',
    '["leisure"="park"]',
    '["leisure"="garden"]',
    '["waterway"="riverbank"]',
    '["highway"="track"]["tracktype"="grade1"]',
    '["highway"="living_street"]',
]


def build_walkable_query(lat: float, lng: float, radius_m: float) -> str:
    """Overpass QL for walkable ways within radius_m of (lat, lng)."""
    around = f"(around:{radius_m:.0f},{lat},{lng})"
    clauses = "".join(f"way{f}{around};" for f in WALKABLE_FILTERS)
    return f"[out:json][timeout:25];({clauses});out body geom;"


async def _query_overpass(query: str) -> list[dict]:
    """Execute an Overpass API query with server fallback."""
    async with httpx.AsyncClient(timeout=45.0, headers={"User-Agent": USER_AGENT}) as client:
        for server in OVERPASS_SERVERS:
            try:
                response = await client.post(server, data={"data": query})
                response.raise_for_status()
                data = response.json()
                return data.get("elements", [])
            except httpx.TimeoutException as exc:
                logger.warning("Overpass server %s timed out: %s", server, exc)
                continue
            except httpx.HTTPStatusError as exc:
                logger.warning(
                    "Overpass server %s returned HTTP %s", server, exc.response.status_code
                )
                continue
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("Overpass server %s failed: %s", server, exc)
                continue
    logger.warning("All Overpass servers failed for query")
    return []


def parse_segments(elements: list[dict]) -> list[MapSegment]:
    """Parse Overpass elements into MapSegments, keeping ways with real geometry."""
    segments = []
    for elem in elements:
        if elem.get("type") != "way":
            continue
        geometry = elem.get("geometry") or []
        if len(geometry) < 2:
            continue
        try:
            segments.append(MapSegment(
                id=elem.get("id", 0),
                points=[Coordinate(lat=pt["lat"], lon=pt["lon"]) for pt in geometry],
                tags=elem.get("tags") or {},
            ))
        except (KeyError, ValidationError) as exc:
            logger.debug("Skipping malformed way %s: %s", elem.get("id"), exc)
    return segments


async def fetch_walkable_segments(
    lat: float, lng: float, radius_m: float = SEARCH_RADIUS_M,
) -> list[MapSegment]:
    """Fetch walkable ways around a point as MapSegments.

    Returns an empty list when the area has no walkable ways or every
    Overpass server failed.
    """
    query = build_walkable_query(lat, lng, radius_m)
    elements = await _query_overpass(query)
    segments = parse_segments(elements)
    logger.debug(
        "Overpass returned %d element(s), %d usable segment(s) around %.5f,%.5f",
        len(elements), len(segments), lat, lng,
    )
    return segments
