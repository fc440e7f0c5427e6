"""MCP server exposing the GoCardless tools over stdio.

The transport only translates between MCP protocol objects and the
dispatcher; all tool behavior lives in the dispatcher and handlers.
"""

import asyncio
import logging
from typing import List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from gocardless_mcp import __version__
from gocardless_mcp.config import ApiCredentials, GoCardlessSettings
from gocardless_mcp.core.dispatcher import ToolDispatcher
from gocardless_mcp.core.types import Tool, ToolResult
from gocardless_mcp.logging_config import setup_logging
from gocardless_mcp.tools import build_dispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "gocardless-mcp-server"


def to_mcp_tool(tool: Tool) -> types.Tool:
    return types.Tool(
        name=tool.name,
        description=tool.description,
        inputSchema=tool.input_schema(),
    )


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block.text) for block in result.content],
        isError=result.is_error,
    )


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Create an MCP server backed by the dispatcher.

    tools/call is registered directly on the request handler table so the
    dispatcher alone decides the isError flag of every result.

    Args:
        dispatcher: Dispatcher with all tools and handlers registered

    Returns:
        A configured low-level MCP server
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return [to_mcp_tool(tool) for tool in dispatcher.list_tools()]

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call_tool(request.params.name, request.params.arguments or {})
        return types.ServerResult(to_call_tool_result(result))

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve(settings: Optional[GoCardlessSettings] = None) -> None:
    """Run the server on stdin/stdout until the client disconnects."""
    credentials = ApiCredentials.from_settings(settings)
    dispatcher = build_dispatcher(credentials)
    server = create_server(dispatcher)

    logger.info("GoCardless MCP server started successfully")
    logger.info("Environment: %s", credentials.environment)
    logger.info("Access token configured: %s", "Yes" if credentials.is_configured else "No")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Console entry point."""
    settings = GoCardlessSettings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down GoCardless MCP server...")


if __name__ == "__main__":
    main()
