"""Tool Registry for the GoCardless MCP server.

This module provides a registry for managing tool definitions.
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from gocardless_mcp.core.errors import UnknownToolError
from gocardless_mcp.core.types import Tool


class ToolRegistry:
    """Registry for managing tool definitions.

    The registry maintains an ordered collection of tools. It ensures that
    tool names are unique and answers discovery requests in registration
    order.
    """

    def __init__(self, tools: Optional[Iterable[Tool]] = None) -> None:
        """Initialize the registry, optionally registering tools.

        Args:
            tools: Tool definitions to register immediately

        Raises:
            ValueError: If two of the given tools share a name
        """
        self._tools: Dict[str, Tool] = {}
        for tool in tools or ():
            self.register_tool(tool)

    def register_tool(self, tool: Union[Tool, Dict[str, Any]]) -> None:
        """Register a new tool in the registry.

        Args:
            tool: The tool definition to register (either a Tool object or dict)

        Raises:
            ValueError: If a tool with the same name already exists
        """
        if isinstance(tool, dict):
            tool = Tool(**tool)

        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self._tools[tool.name] = tool

    def get_tool(self, name: str) -> Tool:
        """Get a tool definition by name.

        Args:
            name: The name of the tool to retrieve

        Returns:
            The tool definition

        Raises:
            UnknownToolError: If no tool with the given name exists
        """
        if name not in self._tools:
            raise UnknownToolError(name)
        return self._tools[name]

    def list_tools(self) -> List[Tool]:
        """Get a list of all registered tools.

        Returns:
            List of all registered tool definitions, in registration order
        """
        return list(self._tools.values())
