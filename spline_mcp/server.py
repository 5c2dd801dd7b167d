"""
Spline MCP Server

MCP server exposing the Spline.design REST API as tools, resources and prompts.

Usage:
    # stdio transport (Claude Desktop and other local clients)
    python -m spline_mcp.server

    # Streamable HTTP transport
    python -m spline_mcp.server --transport http --port 3000

    Or configure in Claude Desktop config:
    {
        "mcpServers": {
            "spline": {
                "command": "python",
                "args": ["-m", "spline_mcp.server"],
                "env": {"SPLINE_API_KEY": "..."}
            }
        }
    }
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any

import httpx
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import (
    AudioContent,
    CallToolResult,
    EmbeddedResource,
    GetPromptResult,
    ImageContent,
    ListToolsResult,
    Prompt,
    Resource,
    ResourceLink,
    ResourceTemplate,
    TextContent,
)
from starlette.applications import Starlette
from starlette.routing import Route

from . import SERVER_NAME, __version__, prompts, resources
from .api_client import ApiError, SplineApiClient
from .config import ConfigError, Settings, load_settings
from .openai_client import OpenAIClient
from .sessions import StreamableHTTPRouter
from .tools import (
    SchemaValidationError,
    ToolContext,
    ToolFailure,
    UnknownTool,
    get_spec,
    list_specs,
    validate_arguments,
)

# MCP content union type used by CallToolResult
ContentItem = TextContent | ImageContent | AudioContent | ResourceLink | EmbeddedResource

# Configure logging (stderr; stdout belongs to the stdio transport)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
)
logger = logging.getLogger('spline-mcp')


def error_result(message: str) -> list[ContentItem]:
    """Create an error result."""
    return [TextContent(type="text", text=message)]


def build_context(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> ToolContext:
    """Create the API clients tool handlers work with."""
    return ToolContext(
        api=SplineApiClient(settings.api, transport=transport),
        openai=OpenAIClient(settings.openai, transport=transport),
    )


# =============================================================================
# Tool dispatch
# =============================================================================

async def dispatch_tool(ctx: ToolContext, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
    """
    Run one tool call and wrap the outcome in a CallToolResult.

    Never raises: unknown tools, invalid arguments and handler failures all
    come back as ``isError`` results.
    """
    logger.info(f"Calling tool: {name}")
    logger.debug(f"Arguments for {name}: {arguments}")

    try:
        spec = get_spec(name)
    except UnknownTool as e:
        return CallToolResult(content=error_result(str(e)), isError=True)

    try:
        arguments = validate_arguments(name, arguments or {})
    except SchemaValidationError as e:
        return CallToolResult(content=error_result(f"Invalid arguments for {name}: {e}"), isError=True)

    try:
        text = await spec.handler(ctx, arguments)

    except ToolFailure as e:
        return CallToolResult(content=error_result(str(e)), isError=True)

    except (ApiError, ValueError) as e:
        logger.warning(f"Tool {name} failed: {e}")
        return CallToolResult(content=error_result(f"Error {spec.error_label}: {e}"), isError=True)

    except Exception as e:
        logger.exception(f"Error calling tool {name}")
        return CallToolResult(content=error_result(f"Error {spec.error_label}: {e}"), isError=True)

    return CallToolResult(content=[TextContent(type="text", text=text)])


# =============================================================================
# MCP Handlers
# =============================================================================

def build_server(ctx: ToolContext) -> Server:
    """Create the MCP server with tools, resources and prompts registered."""
    server = Server(SERVER_NAME, version=__version__)
    tools = [spec.to_tool() for spec in list_specs()]

    @server.list_tools()
    async def list_tools() -> ListToolsResult:
        """List all available Spline tools."""
        return ListToolsResult(tools=tools)

    # Validation happens in dispatch_tool
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> CallToolResult:
        """Execute a Spline tool."""
        return await dispatch_tool(ctx, name, arguments)

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return resources.list_resources()

    @server.list_resource_templates()
    async def list_resource_templates() -> list[ResourceTemplate]:
        return resources.list_resource_templates()

    @server.read_resource()
    async def read_resource(uri: Any) -> list[ReadResourceContents]:
        text = await resources.read_resource(ctx.api, str(uri))
        return [ReadResourceContents(content=text, mime_type=resources.MIME_TYPE)]

    @server.list_prompts()
    async def list_prompts() -> list[Prompt]:
        return prompts.list_prompts()

    @server.get_prompt()
    async def get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
        return prompts.get_prompt(name, arguments)

    return server


# =============================================================================
# Main Entry Point
# =============================================================================

async def main(ctx: ToolContext) -> None:
    """Run the MCP server with stdio transport."""
    from mcp.server.stdio import stdio_server

    server = build_server(ctx)
    logger.info(f"Starting Spline MCP server (api: {ctx.api.base_url})")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def create_http_app(ctx: ToolContext, json_response: bool = False) -> Starlette:
    """Starlette app serving the MCP endpoint at /mcp."""
    router = StreamableHTTPRouter(build_server(ctx), json_response=json_response)
    return Starlette(
        routes=[Route("/mcp", endpoint=router, methods=["GET", "POST", "DELETE"])],
        lifespan=lambda app: router.run(),
    )


async def main_http(ctx: ToolContext, host: str, port: int, json_response: bool = False) -> None:
    """Run the MCP server with streamable HTTP transport."""
    import uvicorn

    logger.info(
        f"Starting Spline MCP HTTP server on {host}:{port} "
        f"(api: {ctx.api.base_url})"
    )

    config = uvicorn.Config(
        create_http_app(ctx, json_response=json_response),
        host=host,
        port=port,
        log_level="info",
    )
    uv_server = uvicorn.Server(config)
    await uv_server.serve()


def run(argv: list[str] | None = None) -> None:
    """Entry point for running as module."""
    parser = argparse.ArgumentParser(description="Spline.design MCP Server")
    parser.add_argument(
        "--transport", "-t", choices=["stdio", "http"], default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument(
        "--http", dest="transport", action="store_const", const="http",
        help="Shorthand for --transport http",
    )
    parser.add_argument(
        "--host", default=None,
        help="HTTP server host (default: HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--port", "-p", type=int, default=None,
        help="HTTP server port (default: PORT or 3000)",
    )
    parser.add_argument(
        "--config", "-c", default=None,
        help="Path to a .env file to load",
    )
    parser.add_argument(
        "--json-response", action="store_true",
        help="Answer HTTP POSTs with plain JSON instead of SSE streams",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    ctx = build_context(settings)

    if args.transport == "http":
        asyncio.run(main_http(
            ctx,
            args.host or settings.host,
            args.port or settings.port,
            json_response=args.json_response,
        ))
    else:
        asyncio.run(main(ctx))


if __name__ == "__main__":
    run()
