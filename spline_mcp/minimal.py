"""
Minimal diagnostic MCP server.

One tool and one resource, no upstream calls. Useful to check that a client
can launch and talk to a Python MCP server at all.

Usage:
    python -m spline_mcp.minimal
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import CallToolResult, ListToolsResult, Resource, TextContent, Tool

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
)
logger = logging.getLogger('spline-mcp')

SERVER_NAME = "Minimal Spline MCP"
TEST_RESOURCE_URI = 'spline://test'

TOOLS = [
    Tool(
        name="hello",
        description="Say hello. Returns a greeting for the given name.",
        inputSchema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Name to greet", "default": "World"},
            },
        },
    ),
]

server = Server(SERVER_NAME)


@server.list_tools()
async def list_tools() -> ListToolsResult:
    return ListToolsResult(tools=TOOLS)


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> CallToolResult:
    if name != 'hello':
        return CallToolResult(content=[TextContent(type="text", text=f"Unknown tool: {name}")], isError=True)
    who = (arguments or {}).get('name') or 'World'
    return CallToolResult(content=[TextContent(type="text", text=f"Hello, {who}!")])


@server.list_resources()
async def list_resources() -> list[Resource]:
    return [Resource(uri=TEST_RESOURCE_URI, name='test', description='Test resource', mimeType='text/plain')]


@server.read_resource()
async def read_resource(uri: Any) -> list[ReadResourceContents]:
    if str(uri) != TEST_RESOURCE_URI:
        raise ValueError(f"Unknown resource URI: {uri}")
    return [ReadResourceContents(content="This is a test resource", mime_type='text/plain')]


async def main() -> None:
    """Run the minimal server with stdio transport."""
    from mcp.server.stdio import stdio_server

    logger.info(f"Starting {SERVER_NAME}")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
