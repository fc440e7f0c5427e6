"""Redirect flow tool for the GoCardless MCP server.

A redirect flow is a hosted page where a customer enters their bank details.
Completing it yields a customer bank account and a mandate.
"""

from typing import Any, Dict

from gocardless_mcp.client import GoCardlessClient
from gocardless_mcp.core.types import Tool, ToolParameter
from gocardless_mcp.tools.formatting import dig


def create_redirect_flow_tool() -> Tool:
    """Create the create_redirect_flow tool definition."""
    return Tool(
        name="create_redirect_flow",
        description=(
            "Create a redirect flow to collect customer bank details. This generates a URL "
            "where customers can securely enter their bank account information."
        ),
        parameters={
            "description": ToolParameter(
                type="string",
                description="Description of what the payment is for",
                required=True
            ),
            "session_token": ToolParameter(
                type="string",
                description="Unique session token to prevent CSRF attacks",
                required=True
            ),
            "success_redirect_url": ToolParameter(
                type="string",
                description="URL to redirect to after successful setup",
                format="uri",
                required=True
            ),
            "prefilled_customer": ToolParameter(
                type="object",
                description="Pre-fill customer information",
                properties={
                    "given_name": ToolParameter(type="string"),
                    "family_name": ToolParameter(type="string"),
                    "email": ToolParameter(type="string", format="email"),
                    "company_name": ToolParameter(type="string")
                }
            )
        }
    )


def _format_redirect_flow(redirect_flow: Dict[str, Any]) -> str:
    return (
        "Successfully created redirect flow:\n\n"
        f"ID: {dig(redirect_flow, 'id')}\n"
        f"Redirect URL: {dig(redirect_flow, 'redirect_url')}\n\n"
        "Send your customer to the redirect URL to collect their bank details. "
        "After they complete the process, you'll need to complete the redirect flow "
        "to create the mandate and customer bank account."
    )


async def create_redirect_flow_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    redirect_flow: Dict[str, Any] = {
        "description": params["description"],
        "session_token": params["session_token"],
        "success_redirect_url": params["success_redirect_url"],
    }
    prefilled = params.get("prefilled_customer")
    if prefilled and isinstance(prefilled, dict):
        redirect_flow["prefilled_customer"] = prefilled

    data = await client.request(
        "/redirect_flows",
        method="POST",
        body={"redirect_flows": redirect_flow}
    )
    return _format_redirect_flow(data.get("redirect_flows") or {})
