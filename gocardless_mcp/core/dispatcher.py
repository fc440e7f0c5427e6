"""Tool Dispatcher for the GoCardless MCP server.

This module routes tool calls to their handlers and converts every outcome
into the uniform ToolResult envelope.
"""

import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from pydantic import ValidationError

from gocardless_mcp.config import ApiCredentials
from gocardless_mcp.core.errors import (
    GoCardlessError,
    MissingCredentialsError,
    MissingRequiredArgumentError,
    ToolInputError,
    UnknownToolError,
)
from gocardless_mcp.core.registry import ToolRegistry
from gocardless_mcp.core.types import Tool, ToolHandler, ToolInvocation, ToolResult
from gocardless_mcp.utils.log_utils import sanitize_log_message

if TYPE_CHECKING:
    from gocardless_mcp.client import GoCardlessClient

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = (
    "GOCARDLESS_ACCESS_TOKEN environment variable is not set. "
    "Please configure your GoCardless access token."
)

# A missing token is reported as a normal (non-error) result
MISSING_CREDENTIALS_IS_ERROR = False


class ToolDispatcher:
    """Dispatcher for running GoCardless tools.

    The dispatcher maintains a mapping of tool names to their handlers. A call
    goes through the credentials check, tool lookup and required-argument
    validation before the handler runs. No exception escapes call_tool.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        client: "GoCardlessClient",
        credentials: Optional[ApiCredentials] = None
    ) -> None:
        """Initialize a tool dispatcher.

        Args:
            registry: The tool registry containing tool definitions
            client: The API client handed to every handler
            credentials: Credentials to check before each call, defaults to the client's
        """
        self._registry = registry
        self._client = client
        self._credentials = credentials or client.credentials
        self._handlers: Dict[str, ToolHandler] = {}

    def register_handler(self, name: str, handler: ToolHandler) -> None:
        """Register a handler for a tool.

        Args:
            name: The name of the tool
            handler: Async function that implements the tool's functionality

        Raises:
            UnknownToolError: If no tool with the given name exists in the registry
            ValueError: If the tool already has a handler
        """
        self._registry.get_tool(name)
        if name in self._handlers:
            raise ValueError(f"Handler for tool '{name}' is already registered")
        self._handlers[name] = handler

    def list_tools(self) -> List[Tool]:
        return self._registry.list_tools()

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """Execute a tool and wrap the outcome in a ToolResult.

        Args:
            name: The name of the tool to execute
            arguments: Arguments from the caller, None is treated as empty

        Returns:
            A result holding one text block. Failures are error-flagged and
            prefixed with "Error: ", except for missing credentials.
        """
        try:
            invocation = ToolInvocation(name=name, arguments=arguments or {})
        except ValidationError as e:
            logger.warning("Malformed tool call for %r: %s", name, e)
            return self._error_result(ToolInputError("Invalid tool call: arguments must be an object"))

        if not self._credentials.is_configured:
            return self._missing_credentials_result(invocation.name)

        try:
            tool = self._registry.get_tool(invocation.name)
            handler = self._handlers.get(tool.name)
            if handler is None:
                raise UnknownToolError(tool.name)

            self._validate_parameters(tool, invocation.arguments)

            logger.info("Calling tool %s", tool.name)
            text = await handler(invocation.arguments, self._client)
            return ToolResult.text(text)
        except (ToolInputError, UnknownToolError) as e:
            logger.warning("Rejected call to %s: %s", invocation.name, e)
            return self._error_result(e)
        except GoCardlessError as e:
            logger.error("Tool %s failed: %s", invocation.name, sanitize_log_message(str(e)))
            return self._error_result(e)
        except Exception as e:
            logger.exception("Unexpected error in tool %s", invocation.name)
            return self._error_result(e)

    def _missing_credentials_result(self, name: str) -> ToolResult:
        logger.warning("Tool %s called without a configured access token", name)
        error = MissingCredentialsError(MISSING_CREDENTIALS_MESSAGE, tool_name=name)
        return ToolResult.text(f"Error: {error}", is_error=MISSING_CREDENTIALS_IS_ERROR)

    @staticmethod
    def _error_result(error: Exception) -> ToolResult:
        message = str(error) or "Unknown error occurred"
        return ToolResult.text(f"Error: {message}", is_error=True)

    @staticmethod
    def _validate_parameters(tool: Tool, parameters: Dict[str, Any]) -> None:
        """Validate parameters against tool definition.

        A required parameter that is absent, None or an empty string counts
        as missing.

        Raises:
            MissingRequiredArgumentError: If required parameters are missing
        """
        for name in tool.required_parameters:
            value = parameters.get(name)
            if value is None or value == "":
                raise MissingRequiredArgumentError(name, tool_name=tool.name)
