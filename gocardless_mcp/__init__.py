"""GoCardless MCP Server: GoCardless API operations as MCP tools.

This package exposes customers, bank accounts, redirect flows, payments and
billing requests from the GoCardless API as tools that an AI assistant can
call over the Model Context Protocol.

Key Components:
    - Core Types: Tool, ToolParameter, ToolResult for declaring tools
    - ToolRegistry: Ordered registry of the available tools
    - ToolDispatcher: Validates and routes tool calls, wraps every outcome
    - GoCardlessClient: Authenticated HTTP client for the GoCardless API

Example:
    ```python
    from gocardless_mcp import ApiCredentials, build_dispatcher

    credentials = ApiCredentials(environment="sandbox", access_token="sandbox_...")
    dispatcher = build_dispatcher(credentials)

    result = await dispatcher.call_tool("list_payments", {"limit": 5})
    print(result.content[0].text)
    ```

Run the stdio server with the ``gocardless-mcp`` command.
"""

__version__ = "1.0.0"

from gocardless_mcp.client import GoCardlessClient
from gocardless_mcp.config import ApiCredentials, GoCardlessSettings
from gocardless_mcp.core import (
    Tool,
    ToolDispatcher,
    ToolParameter,
    ToolRegistry,
    ToolResult,
)
from gocardless_mcp.tools import build_dispatcher, build_registry

__all__ = [
    "Tool",
    "ToolParameter",
    "ToolResult",
    "ToolRegistry",
    "ToolDispatcher",
    "GoCardlessClient",
    "ApiCredentials",
    "GoCardlessSettings",
    "build_dispatcher",
    "build_registry",
]
