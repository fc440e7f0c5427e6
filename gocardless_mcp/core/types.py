"""Type definitions for the GoCardless MCP server.

This module contains the core type definitions used throughout the server,
including Tool, ToolParameter, ToolInvocation and ToolResult.
"""

from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Literal,
    Optional,
    TYPE_CHECKING,
)

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from gocardless_mcp.client import GoCardlessClient


class ToolParameter(BaseModel):
    """Definition of a tool parameter.

    A parameter of type ``object`` may declare its own nested properties,
    which makes this a recursive schema node.

    Attributes:
        type: The data type of the parameter (object, string, number, boolean)
        description: A human-readable description of the parameter
        required: Whether the parameter is required (default: False)
        default: Default value for the parameter if not provided
        enum: Optional list of allowed values for the parameter
        format: Optional JSON Schema format hint (email, uri)
        properties: Nested parameters for object parameters
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["object", "string", "number", "boolean"]
    description: Optional[str] = None
    required: bool = False
    default: Optional[Any] = None
    enum: Optional[List[str]] = None
    format: Optional[str] = None
    properties: Optional[Dict[str, "ToolParameter"]] = None

    def to_json_schema(self) -> Dict[str, Any]:
        """Render this parameter as a JSON Schema fragment."""
        schema: Dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.format:
            schema["format"] = self.format
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        if self.properties is not None:
            schema["properties"] = {
                name: param.to_json_schema() for name, param in self.properties.items()
            }
            required = [name for name, param in self.properties.items() if param.required]
            if required:
                schema["required"] = required
        return schema


class Tool(BaseModel):
    """Definition of a tool exposed to the calling agent.

    Attributes:
        name: The name of the tool
        description: A human-readable description of what the tool does
        parameters: Dictionary of parameter names to ToolParameter objects
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, ToolParameter] = Field(default_factory=dict)

    @property
    def required_parameters(self) -> List[str]:
        """Names of the required top-level parameters, in declaration order."""
        return [name for name, param in self.parameters.items() if param.required]

    def input_schema(self) -> Dict[str, Any]:
        """Render the parameters as the JSON Schema object sent to callers."""
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {
                name: param.to_json_schema() for name, param in self.parameters.items()
            },
        }
        if self.required_parameters:
            schema["required"] = self.required_parameters
        return schema


class ToolInvocation(BaseModel):
    """A single tool call delivered by the transport."""

    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ContentBlock(BaseModel):
    """A text block in a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """The envelope every tool invocation is wrapped in.

    Attributes:
        content: Ordered content blocks (always exactly one here)
        is_error: Whether the invocation failed, serialized as ``isError``
    """

    model_config = ConfigDict(populate_by_name=True)

    content: List[ContentBlock]
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResult":
        """Build a result holding a single text block."""
        return cls(content=[ContentBlock(text=text)], is_error=is_error)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the protocol field names."""
        return self.model_dump(by_alias=True)


# Handlers receive validated arguments and the API client, and return rendered text
ToolHandler = Callable[[Dict[str, Any], "GoCardlessClient"], Awaitable[str]]
