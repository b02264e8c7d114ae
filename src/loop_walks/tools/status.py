"""Status tool: get_status."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state


def _last_area_routes() -> list[dict]:
    if state.last_area_hash is None:
        return []
    entries = sorted(state.store.lookup(state.last_area_hash), key=lambda e: e.route.duration_minutes)
    return [
        {
            "id": e.id,
            "name": e.route.name,
            "duration_minutes": e.route.duration_minutes,
            "terrain_type": e.route.terrain_type,
            "activity_count": e.activity_count,
        }
        for e in entries
    ]


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the session and the route cache.

        Lists synthesis settings, cache counts, and the routes cached for the
        area of the most recent discover_routes call, shortest first.
        """
        summary = state.summary()
        summary["last_area_routes"] = _last_area_routes()
        return json.dumps(summary, indent=2)
