"""Route tools: discover_routes, get_route, record_route_activity, cleanup_generated_routes."""

import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..config import MAX_SEARCH_RADIUS_M, is_valid_search_radius
from ..state import state
from ..core.area import area_hash
from ..core.discover import discover
from ..exporters.geojson import route_to_geojson
from ._prereqs import require_route

logger = logging.getLogger(__name__)

TERRAIN_TYPES = ("urban", "nature", "mixed")


def register_route_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def discover_routes(
        lat: float,
        lng: float,
        radius_m: float | None = None,
        duration_min: int | None = None,
        duration_max: int | None = None,
        terrain_type: str | None = None,
    ) -> str:
        """Find walking loops near a location, closest first.

        Routes already generated for the same ~1 km area are reused. Otherwise
        walkable OpenStreetMap paths are fetched and chained into loops of
        15, 30, 45, 60 and 75 minutes.
        **Next:** get_route for geometry, export_route to save GPX/GeoJSON.

        Args:
            lat: Latitude of the user (degrees).
            lng: Longitude of the user (degrees).
            radius_m: Search radius for OSM paths (default 3000m, max 20000m).
            duration_min: Only return routes at least this many minutes long.
            duration_max: Only return routes at most this many minutes long.
            terrain_type: Only return 'urban', 'nature' or 'mixed' routes.
        """
        if not (-90 <= lat <= 90) or not (-180 <= lng <= 180):
            return "Error: lat must be in [-90, 90] and lng in [-180, 180]."
        if terrain_type is not None and terrain_type not in TERRAIN_TYPES:
            return f"Error: terrain_type must be one of {', '.join(TERRAIN_TYPES)}."
        if radius_m is not None and not is_valid_search_radius(radius_m):
            return f"Error: radius_m must be a number in (0, {MAX_SEARCH_RADIUS_M}]."

        try:
            results = await discover(
                lat, lng, state.store, state.settings,
                radius_m=radius_m,
                duration_min=duration_min,
                duration_max=duration_max,
                terrain_type=terrain_type,
            )
        except ValueError as e:
            return f"Error: {e}"

        state.last_area_hash = area_hash(lat, lng)
        logger.debug("discover_routes at %.5f,%.5f returned %d route(s)", lat, lng, len(results))
        if not results:
            return "No routes found near this location (check server logs if unexpected)."
        return json.dumps(results, indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_route(route_id: str) -> str:
        """Return one generated route as a GeoJSON Feature, including its path.

        **Requires:** discover_routes first.

        Args:
            route_id: Id from the discover_routes listing.
        """
        try:
            entry = require_route(state, route_id)
        except ValueError as e:
            return f"Error: {e}"

        feature = route_to_geojson(entry.route)
        feature["id"] = entry.id
        feature["properties"]["area_hash"] = entry.area_hash
        feature["properties"]["generated_at"] = entry.generated_at.isoformat()
        return json.dumps(feature)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def record_route_activity(route_id: str) -> str:
        """Record that a generated route was walked or reviewed.

        Routes with activity are kept by cleanup_generated_routes.

        Args:
            route_id: Id from the discover_routes listing.
        """
        try:
            require_route(state, route_id)
        except ValueError as e:
            return f"Error: {e}"
        entry = state.store.record_activity(route_id)
        return f"Activity recorded for '{entry.route.name}' ({entry.activity_count} total)."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def cleanup_generated_routes(max_age_days: int | None = None) -> str:
        """Delete generated routes older than the retention window with no activity.

        Args:
            max_age_days: Retention window in days (default 30).
        """
        days = max_age_days if max_age_days is not None else state.settings.retention_days
        if days < 0:
            return "Error: max_age_days must not be negative."

        counts = state.store.purge_inactive(days)
        if counts["deleted"] == 0 and counts["kept"] == 0:
            return "No old generated routes to clean up."
        return (
            f"Cleaned up {counts['deleted']} inactive generated routes, "
            f"kept {counts['kept']} with activity."
        )
