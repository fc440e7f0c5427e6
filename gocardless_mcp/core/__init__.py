"""Core module for the GoCardless MCP server."""

from .dispatcher import ToolDispatcher
from .errors import (
    APIError,
    ConfigError,
    GoCardlessError,
    MalformedResponseError,
    MissingCredentialsError,
    MissingRequiredArgumentError,
    ToolInputError,
    TransportError,
    UnknownToolError,
    UpstreamError,
)
from .registry import ToolRegistry
from .types import (
    ContentBlock,
    Tool,
    ToolHandler,
    ToolInvocation,
    ToolParameter,
    ToolResult,
)

__all__ = [
    "Tool",
    "ToolParameter",
    "ToolInvocation",
    "ToolResult",
    "ContentBlock",
    "ToolHandler",
    "ToolRegistry",
    "ToolDispatcher",
    "GoCardlessError",
    "ConfigError",
    "MissingCredentialsError",
    "ToolInputError",
    "MissingRequiredArgumentError",
    "UnknownToolError",
    "APIError",
    "UpstreamError",
    "TransportError",
    "MalformedResponseError",
]
