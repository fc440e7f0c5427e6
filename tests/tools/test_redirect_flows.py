"""Tests for the redirect flow tool."""

from unittest.mock import MagicMock

import pytest

from gocardless_mcp.tools.redirect_flows import create_redirect_flow_handler

ARGUMENTS = {
    "description": "Test subscription setup",
    "session_token": "test_session_1",
    "success_redirect_url": "https://example.com/success",
}


@pytest.mark.asyncio
async def test_create_redirect_flow(mock_client: MagicMock) -> None:
    mock_client.request.return_value = {"redirect_flows": {
        "id": "RE123",
        "redirect_url": "https://pay-sandbox.gocardless.com/flow/RE123",
    }}

    text = await create_redirect_flow_handler(dict(ARGUMENTS), mock_client)

    mock_client.request.assert_awaited_once_with(
        "/redirect_flows",
        method="POST",
        body={"redirect_flows": ARGUMENTS}
    )
    assert text.startswith(
        "Successfully created redirect flow:\n\n"
        "ID: RE123\n"
        "Redirect URL: https://pay-sandbox.gocardless.com/flow/RE123\n\n"
    )
    assert "complete the redirect flow" in text


@pytest.mark.asyncio
async def test_create_redirect_flow_with_prefilled_customer(mock_client: MagicMock) -> None:
    mock_client.request.return_value = {"redirect_flows": {"id": "RE1", "redirect_url": "u"}}
    prefilled = {"given_name": "Jane", "email": "jane@example.com"}

    await create_redirect_flow_handler(dict(ARGUMENTS, prefilled_customer=prefilled), mock_client)

    body = mock_client.request.call_args.kwargs["body"]["redirect_flows"]
    assert body["prefilled_customer"] == prefilled


@pytest.mark.asyncio
async def test_create_redirect_flow_ignores_non_object_prefill(mock_client: MagicMock) -> None:
    mock_client.request.return_value = {"redirect_flows": {}}

    text = await create_redirect_flow_handler(
        dict(ARGUMENTS, prefilled_customer="Jane"),
        mock_client
    )

    body = mock_client.request.call_args.kwargs["body"]["redirect_flows"]
    assert "prefilled_customer" not in body
    assert "ID: N/A" in text
