"""Prerequisite checking helpers for MCP tools."""

from ..state import StoredRoute


def require_route(state, route_id: str) -> StoredRoute:
    """Return the stored route or raise ValueError with a descriptive message.

    Usage in a tool:
        try:
            entry = require_route(state, route_id)
        except ValueError as e:
            return f"Error: {e}"
    """
    entry = state.store.get(route_id)
    if entry is None:
        if not state.store.routes:
            raise ValueError("No routes generated yet. Call discover_routes first.")
        raise ValueError(f"Unknown route id {route_id!r}. Call discover_routes to list routes.")
    return entry
