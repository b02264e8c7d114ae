"""Export tool: export_route."""

import logging
import os
from pathlib import Path
from mcp.server.fastmcp import FastMCP

from ..state import state
from ..exporters.geojson import export_geojson
from ..exporters.gpx import export_gpx
from ._prereqs import require_route

logger = logging.getLogger(__name__)

EXPORTERS = {
    "gpx": export_gpx,
    "geojson": export_geojson,
}


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def register_export_tools(mcp: FastMCP):

    @mcp.tool()
    def export_route(route_id: str, output_path: str, format: str = "gpx") -> str:
        """Export a generated route as a GPX or GeoJSON file.

        **Requires:** discover_routes first.

        Args:
            route_id: Id from the discover_routes listing.
            output_path: Where to save the file (absolute path).
            format: 'gpx' (default) or 'geojson'.
        """
        exporter = EXPORTERS.get(format)
        if exporter is None:
            return f"Error: format must be one of {', '.join(EXPORTERS)}."

        try:
            entry = require_route(state, route_id)
        except ValueError as e:
            return f"Error: {e}"

        try:
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        exporter(entry.route, output_path)
        logger.debug("Exported route %s to %s", entry.id, output_path)
        return f"{format.upper()} exported to {output_path} ({len(entry.route.path)} points)"
