"""MCP server for loop-walks.

Registers all tools and runs via stdio transport.
"""

import json

from mcp.server.fastmcp import FastMCP

from .state import state
from .tools.routes import register_route_tools
from .tools.export import register_export_tools
from .tools.session import register_session_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "loop-walks",
    instructions="Discover dog-walking loop routes of 15 to 75 minutes near any location, built from OpenStreetMap paths",
)

# Register all tool groups
register_route_tools(mcp)
register_export_tools(mcp)
register_session_tools(mcp)
register_status_tools(mcp)


@mcp.resource("state://session")
def session_state() -> str:
    """Current session summary as JSON."""
    return json.dumps(state.summary(), indent=2)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
