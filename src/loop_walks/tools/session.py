"""Route cache persistence tools: save_routes, load_routes."""

import json
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..config import SynthesisSettings
from ..state import state, RouteStore

logger = logging.getLogger(__name__)


def _default_path() -> Path:
    return Path.home() / ".cache" / "loop-walks" / "routes.json"


def register_session_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def save_routes(path: str | None = None) -> str:
        """Save the generated route cache and settings to a JSON file.

        **Next:** load_routes in a future session to reuse these routes
        instead of querying OpenStreetMap again.

        Args:
            path: Where to save. Default: ~/.cache/loop-walks/routes.json
        """
        save_path = Path(path) if path else _default_path()
        save_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "settings": state.settings.model_dump(mode="json"),
            "routes": [r.model_dump(mode="json") for r in state.store.routes.values()],
        }

        with open(save_path, "w") as f:
            json.dump(data, f, indent=2)

        logger.info("Saved %d route(s) to %s", len(data["routes"]), save_path)
        return f"Saved {len(data['routes'])} route(s) to {save_path}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def load_routes(path: str | None = None) -> str:
        """Load a route cache previously written by save_routes.

        Replaces the current cache and settings.
        **Next:** discover_routes reuses loaded routes for matching areas.

        Args:
            path: Path to load from. Default: ~/.cache/loop-walks/routes.json
        """
        load_path = Path(path) if path else _default_path()

        if not load_path.exists():
            return f"Error: Route file not found at {load_path}"

        try:
            with open(load_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            return f"Error: Invalid route file: {e}"

        try:
            settings = SynthesisSettings(**data["settings"]) if data.get("settings") else SynthesisSettings()
            store = RouteStore(routes={r["id"]: r for r in data.get("routes", [])})
        except (ValidationError, KeyError, TypeError) as e:
            return f"Error: Invalid route file: {e}"

        state.settings = settings
        state.store = store
        state.last_area_hash = None

        return (
            f"Routes restored from {load_path}: {len(store.routes)} route(s) "
            f"across {store.summary()['areas']} area(s)."
        )
