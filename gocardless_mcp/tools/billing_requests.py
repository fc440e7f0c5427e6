"""Billing request tools for the GoCardless MCP server.

A billing request moves through create -> flow (customer authorises) ->
fulfil. These tools only issue the individual requests; sequencing them is
up to the caller.

Public Interface:
    - create_billing_request_tool() / create_billing_request_handler()
    - create_billing_request_flow_tool() / create_billing_request_flow_handler()
    - create_get_billing_request_tool() / get_billing_request_handler()
    - create_list_billing_requests_tool() / list_billing_requests_handler()
    - create_fulfil_billing_request_tool() / fulfil_billing_request_handler()
"""

from enum import Enum
from typing import Any, Dict, Final, List
from urllib.parse import quote

from gocardless_mcp.client import GoCardlessClient
from gocardless_mcp.core.errors import ToolInputError
from gocardless_mcp.core.types import Tool, ToolParameter
from gocardless_mcp.tools.formatting import (
    build_query,
    copy_typed,
    dig,
    format_amount,
    is_number,
    join_entries,
)

NO_BILLING_REQUESTS: Final[str] = "No billing requests found matching the criteria."

# Tool argument name -> prefilled_customer field
PREFILLED_CUSTOMER_FIELDS: Final[Dict[str, str]] = {
    "customer_given_name": "given_name",
    "customer_family_name": "family_name",
    "customer_email": "email",
    "customer_company_name": "company_name",
}


class Currency(str, Enum):
    """Currencies a payment request can be raised in."""
    GBP = "GBP"
    EUR = "EUR"
    USD = "USD"
    SEK = "SEK"
    DKK = "DKK"
    AUD = "AUD"
    NZD = "NZD"
    CAD = "CAD"


class BillingRequestStatus(str, Enum):
    """Billing request states accepted by the status filter."""
    PENDING = "pending"
    READY_TO_FULFIL = "ready_to_fulfil"
    FULFILLING = "fulfilling"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


def _billing_request_id_parameter() -> ToolParameter:
    return ToolParameter(
        type="string",
        description="The GoCardless billing request ID (BRQ...)",
        required=True
    )


def create_billing_request_tool() -> Tool:
    """Create the create_billing_request tool definition."""
    return Tool(
        name="create_billing_request",
        description=(
            "Create a billing request for a one-off payment. The customer authorises it "
            "through a billing request flow, after which it can be fulfilled."
        ),
        parameters={
            "amount_cents": ToolParameter(
                type="number",
                description="Amount in minor currency units (e.g. 2999 for 29.99)",
                required=True
            ),
            "currency": ToolParameter(
                type="string",
                description="Three-letter currency code",
                enum=[currency.value for currency in Currency],
                required=True
            ),
            "description": ToolParameter(
                type="string",
                description="Description of what the payment is for"
            ),
            "customer_id": ToolParameter(
                type="string",
                description="Existing customer ID to link the billing request to"
            )
        }
    )


def create_billing_request_flow_tool() -> Tool:
    """Create the create_billing_request_flow tool definition."""
    return Tool(
        name="create_billing_request_flow",
        description=(
            "Create a billing request flow. This returns an authorisation URL where the "
            "customer confirms their details and authorises the billing request."
        ),
        parameters={
            "billing_request_id": _billing_request_id_parameter(),
            "redirect_uri": ToolParameter(
                type="string",
                description="URL to send the customer to after authorising",
                format="uri"
            ),
            "exit_uri": ToolParameter(
                type="string",
                description="URL to send the customer to if they leave the flow",
                format="uri"
            ),
            "customer_email": ToolParameter(
                type="string",
                description="Pre-fill the customer's email address",
                format="email"
            ),
            "customer_given_name": ToolParameter(
                type="string",
                description="Pre-fill the customer's first name"
            ),
            "customer_family_name": ToolParameter(
                type="string",
                description="Pre-fill the customer's last name"
            ),
            "customer_company_name": ToolParameter(
                type="string",
                description="Pre-fill the customer's company name"
            )
        }
    )


def create_get_billing_request_tool() -> Tool:
    """Create the get_billing_request tool definition."""
    return Tool(
        name="get_billing_request",
        description="Get the details and current status of a billing request.",
        parameters={"billing_request_id": _billing_request_id_parameter()}
    )


def create_list_billing_requests_tool() -> Tool:
    """Create the list_billing_requests tool definition."""
    return Tool(
        name="list_billing_requests",
        description="List billing requests from GoCardless, optionally filtered by customer or status.",
        parameters={
            "limit": ToolParameter(
                type="number",
                description="Maximum number of billing requests to return (default: 50)",
                default=50
            ),
            "after": ToolParameter(
                type="string",
                description="Cursor for pagination - get billing requests after this ID"
            ),
            "customer": ToolParameter(
                type="string",
                description="Filter by customer ID"
            ),
            "status": ToolParameter(
                type="string",
                description="Filter by billing request status",
                enum=[status.value for status in BillingRequestStatus]
            )
        }
    )


def create_fulfil_billing_request_tool() -> Tool:
    """Create the fulfil_billing_request tool definition."""
    return Tool(
        name="fulfil_billing_request",
        description=(
            "Fulfil a billing request once it is ready_to_fulfil. "
            "This creates the payment and/or mandate."
        ),
        parameters={"billing_request_id": _billing_request_id_parameter()}
    )


def _payment_request_amount(billing_request: Dict[str, Any]) -> str:
    payment_request = billing_request.get("payment_request")
    if not isinstance(payment_request, dict):
        payment_request = {}
    return format_amount(payment_request.get("amount"), payment_request.get("currency"))


def _format_billing_request_details(header: str, billing_request: Dict[str, Any]) -> str:
    return (
        f"{header}\n\n"
        f"ID: {dig(billing_request, 'id')}\n"
        f"Status: {dig(billing_request, 'status')}\n"
        f"Created: {dig(billing_request, 'created_at')}\n"
        f"Amount: {_payment_request_amount(billing_request)}\n"
        f"Description: {dig(billing_request, 'payment_request', 'description')}\n"
        f"Customer: {dig(billing_request, 'links', 'customer')}\n"
        f"Payment Request: {dig(billing_request, 'links', 'payment_request')}"
    )


def _format_billing_request_flow(flow: Dict[str, Any]) -> str:
    return (
        "Successfully created billing request flow:\n\n"
        f"ID: {dig(flow, 'id')}\n"
        f"Authorisation URL: {dig(flow, 'authorisation_url')}\n"
        f"Expires: {dig(flow, 'expires_at')}\n"
        f"Billing Request: {dig(flow, 'links', 'billing_request')}\n\n"
        "Send your customer to the authorisation URL to confirm their details "
        "and authorise the payment. Once the billing request is ready_to_fulfil, "
        "fulfil it to collect the payment."
    )


def _format_billing_requests(billing_requests: List[Dict[str, Any]]) -> str:
    if not billing_requests:
        return NO_BILLING_REQUESTS
    return join_entries(
        f"Found {len(billing_requests)} billing request(s):",
        (
            f"• ID: {dig(billing_request, 'id')}\n"
            f"  Status: {dig(billing_request, 'status')}\n"
            f"  Amount: {_payment_request_amount(billing_request)}\n"
            f"  Customer: {dig(billing_request, 'links', 'customer')}\n"
            f"  Created: {dig(billing_request, 'created_at')}"
            for billing_request in billing_requests
        )
    )


def _format_fulfilled(billing_request: Dict[str, Any]) -> str:
    return (
        "Successfully fulfilled billing request:\n\n"
        f"ID: {dig(billing_request, 'id')}\n"
        f"Status: {dig(billing_request, 'status')}\n"
        f"Amount: {_payment_request_amount(billing_request)}\n"
        f"Payment: {dig(billing_request, 'links', 'payment_request_payment')}\n"
        f"Mandate: {dig(billing_request, 'links', 'mandate_request_mandate')}"
    )


def _billing_request_path(params: Dict[str, Any], suffix: str = "") -> str:
    billing_request_id = quote(str(params["billing_request_id"]), safe="")
    return f"/billing_requests/{billing_request_id}{suffix}"


async def create_billing_request_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    """Create a billing request carrying a single payment request.

    Raises:
        ToolInputError: If amount_cents is not a positive whole number or
            currency is not a string
    """
    amount = params["amount_cents"]
    if not is_number(amount) or amount <= 0 or int(amount) != amount:
        raise ToolInputError("amount_cents must be a positive whole number of minor currency units")
    if not isinstance(params["currency"], str):
        raise ToolInputError("currency must be a three-letter currency code")

    payment_request: Dict[str, Any] = {
        "amount": int(amount),
        "currency": params["currency"].upper(),
    }
    copy_typed(params, payment_request, ["description"])

    billing_request: Dict[str, Any] = {"payment_request": payment_request}
    if params.get("customer_id") and isinstance(params["customer_id"], str):
        billing_request["links"] = {"customer": params["customer_id"]}

    data = await client.request(
        "/billing_requests",
        method="POST",
        body={"billing_requests": billing_request}
    )
    return _format_billing_request_details(
        "Successfully created billing request:",
        data.get("billing_requests") or {}
    )


async def create_billing_request_flow_handler(
    params: Dict[str, Any],
    client: GoCardlessClient
) -> str:
    """Create the hosted authorisation flow for a billing request."""
    flow: Dict[str, Any] = {}
    copy_typed(params, flow, ["redirect_uri", "exit_uri"])

    prefilled: Dict[str, Any] = {}
    for argument, field in PREFILLED_CUSTOMER_FIELDS.items():
        value = params.get(argument)
        if value and isinstance(value, str):
            prefilled[field] = value
    if prefilled:
        flow["prefilled_customer"] = prefilled

    flow["links"] = {"billing_request": str(params["billing_request_id"])}

    data = await client.request(
        "/billing_request_flows",
        method="POST",
        body={"billing_request_flows": flow}
    )
    return _format_billing_request_flow(data.get("billing_request_flows") or {})


async def get_billing_request_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    data = await client.request(_billing_request_path(params))
    return _format_billing_request_details(
        "Billing Request Details:",
        data.get("billing_requests") or {}
    )


async def list_billing_requests_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    query = build_query(params, string_keys=["after", "customer", "status"])
    data = await client.request("/billing_requests", params=query)
    return _format_billing_requests(data.get("billing_requests") or [])


async def fulfil_billing_request_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    data = await client.request(
        _billing_request_path(params, "/actions/fulfil"),
        method="POST",
        body={"data": {}}
    )
    return _format_fulfilled(data.get("billing_requests") or {})
