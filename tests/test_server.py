"""Tests for the MCP transport adapter."""

from importlib.metadata import version
from unittest.mock import MagicMock

import mcp.types as types
import pytest

from gocardless_mcp import server as server_module
from gocardless_mcp.core.types import ToolResult
from gocardless_mcp.server import create_server, to_call_tool_result, to_mcp_tool
from gocardless_mcp.tools.payments import create_list_payments_tool


def test_to_mcp_tool() -> None:
    tool = to_mcp_tool(create_list_payments_tool())

    assert tool.name == "list_payments"
    assert tool.inputSchema["type"] == "object"
    assert tool.inputSchema["properties"]["limit"]["default"] == 50


def test_to_call_tool_result_keeps_error_flag() -> None:
    result = to_call_tool_result(ToolResult.text("Error: nope", is_error=True))

    assert result.isError is True
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert result.content[0].text == "Error: nope"


@pytest.mark.asyncio
async def test_list_tools_request(dispatcher) -> None:
    """Test the tools/list round trip through the MCP server."""
    server = create_server(dispatcher)
    handler = server.request_handlers[types.ListToolsRequest]

    response = await handler(types.ListToolsRequest(method="tools/list"))

    names = [tool.name for tool in response.root.tools]
    assert len(names) == 11
    assert names[0] == "list_customers"
    assert names[-1] == "fulfil_billing_request"


@pytest.mark.asyncio
async def test_call_tool_request(dispatcher, mock_client: MagicMock) -> None:
    """Test the tools/call round trip through the MCP server."""
    mock_client.request.return_value = {"billing_requests": []}
    server = create_server(dispatcher)
    handler = server.request_handlers[types.CallToolRequest]

    response = await handler(types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name="list_billing_requests", arguments={"limit": 10})
    ))

    result = response.root
    assert result.isError is False
    assert result.content[0].text == "No billing requests found matching the criteria."


@pytest.mark.asyncio
async def test_call_tool_request_missing_credentials(base_dispatcher, mock_client: MagicMock) -> None:
    """Test that the success-shaped credentials message survives the transport."""
    server = create_server(base_dispatcher(access_token=""))
    handler = server.request_handlers[types.CallToolRequest]

    response = await handler(types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name="get_customer", arguments={"customer_id": "CU1"})
    ))

    assert response.root.isError is False
    assert "GOCARDLESS_ACCESS_TOKEN" in response.root.content[0].text
    mock_client.request.assert_not_called()


@pytest.mark.asyncio
async def test_call_tool_request_unknown_tool(dispatcher) -> None:
    server = create_server(dispatcher)
    handler = server.request_handlers[types.CallToolRequest]

    response = await handler(types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name="drop_tables")
    ))

    assert response.root.isError is True
    assert "drop_tables" in response.root.content[0].text


def test_mcp_sdk_major_version() -> None:
    """Test that the installed SDK provides the request-handler API the server uses."""
    assert version("mcp").split(".")[0] == "1"


def test_main_passes_log_settings(monkeypatch, tmp_path) -> None:
    """Test that the console entry point configures logging from settings."""
    log_dir = str(tmp_path / "logs")
    monkeypatch.setenv("GOCARDLESS_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("GOCARDLESS_LOG_DIR", log_dir)
    logging_calls = []
    served = []

    async def fake_serve(settings) -> None:
        served.append(settings)

    monkeypatch.setattr(
        server_module,
        "setup_logging",
        lambda level, log_dir=None: logging_calls.append((level, log_dir))
    )
    monkeypatch.setattr(server_module, "serve", fake_serve)

    server_module.main()

    assert logging_calls == [("DEBUG", log_dir)]
    assert served[0].log_dir == log_dir
