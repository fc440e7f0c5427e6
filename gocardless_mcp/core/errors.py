"""Error classes for the GoCardless MCP server."""

from typing import Optional


class GoCardlessError(Exception):
    """Base exception for all server errors."""

    def __init__(self, message: str, *, tool_name: Optional[str] = None):
        self.tool_name = tool_name
        super().__init__(message)

    def __str__(self) -> str:
        # Args[0] keeps KeyError subclasses from quoting the message
        return self.args[0] if self.args else ""


class ConfigError(GoCardlessError):
    """Raised when the server configuration is unusable."""
    pass


class MissingCredentialsError(ConfigError):
    """Raised when no access token is configured."""
    pass


class ToolInputError(GoCardlessError):
    """Raised when tool arguments are invalid."""
    pass


class MissingRequiredArgumentError(ToolInputError):
    """Raised when a required argument is absent."""

    def __init__(self, field: str, *, tool_name: Optional[str] = None):
        self.field = field
        super().__init__(f"{field} is required", tool_name=tool_name)


class UnknownToolError(GoCardlessError, KeyError):
    """Raised when no tool with the given name is registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}", tool_name=name)


class APIError(GoCardlessError):
    """Raised when there is an error communicating with the GoCardless API."""
    pass


class UpstreamError(APIError):
    """Raised when the API answers with a non-success status."""

    def __init__(self, status_code: int, status_text: str, body_text: str):
        self.status_code = status_code
        self.status_text = status_text
        self.body_text = body_text
        super().__init__(
            f"GoCardless API error: {status_code} {status_text}\n{body_text}"
        )


class TransportError(APIError):
    """Raised when the request fails below HTTP (DNS, connection reset, timeout)."""
    pass


class MalformedResponseError(APIError):
    """Raised when a success response does not carry a JSON object."""
    pass
