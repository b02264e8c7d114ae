"""MCP server smoke test: verifies the server starts and responds to initialize."""

import sys
import pytest
from mcp.client.stdio import stdio_client, StdioServerParameters
from mcp import ClientSession


@pytest.mark.anyio
async def test_mcp_server_initializes():
    """Server starts and responds to MCP initialize with correct name."""
    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "loop_walks"],
    )
    async with stdio_client(params) as (read, write):
        async with ClientSession(read, write) as session:
            result = await session.initialize()

            assert result.serverInfo.name == "loop-walks"


@pytest.mark.anyio
async def test_mcp_server_exposes_expected_tools():
    """Server exposes the expected MCP tools."""
    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "loop_walks"],
    )
    async with stdio_client(params) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()
            tools = await session.list_tools()

        tool_names = {t.name for t in tools.tools}
        assert "discover_routes" in tool_names
        assert "get_route" in tool_names
        assert "record_route_activity" in tool_names
        assert "cleanup_generated_routes" in tool_names
        assert "export_route" in tool_names
        assert "save_routes" in tool_names
        assert "load_routes" in tool_names
        assert "get_status" in tool_names
