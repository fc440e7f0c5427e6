"""Payment listing tool for the GoCardless MCP server."""

from enum import Enum
from typing import Any, Dict, Final, List

from gocardless_mcp.client import GoCardlessClient
from gocardless_mcp.core.types import Tool, ToolParameter
from gocardless_mcp.tools.formatting import build_query, dig, format_amount, join_entries

NO_PAYMENTS: Final[str] = "No payments found matching the criteria."


class PaymentStatus(str, Enum):
    """Payment states accepted by the status filter."""
    PENDING_CUSTOMER_APPROVAL = "pending_customer_approval"
    PENDING_SUBMISSION = "pending_submission"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    PAID_OUT = "paid_out"
    CANCELLED = "cancelled"
    CUSTOMER_APPROVAL_DENIED = "customer_approval_denied"
    FAILED = "failed"
    CHARGED_BACK = "charged_back"


def create_list_payments_tool() -> Tool:
    """Create the list_payments tool definition."""
    return Tool(
        name="list_payments",
        description="List payments from GoCardless. Useful for checking payment status and history.",
        parameters={
            "limit": ToolParameter(
                type="number",
                description="Maximum number of payments to return (default: 50)",
                default=50
            ),
            "customer": ToolParameter(
                type="string",
                description="Filter by customer ID"
            ),
            "status": ToolParameter(
                type="string",
                description="Filter by payment status",
                enum=[status.value for status in PaymentStatus]
            )
        }
    )


def _format_payment(payment: Dict[str, Any]) -> str:
    return (
        f"• Amount: {format_amount(payment.get('amount'), payment.get('currency'))}\n"
        f"  ID: {dig(payment, 'id')}\n"
        f"  Status: {dig(payment, 'status')}\n"
        f"  Created: {dig(payment, 'created_at')}\n"
        f"  Description: {payment.get('description') or 'No description'}"
    )


def _format_payments(payments: List[Dict[str, Any]]) -> str:
    if not payments:
        return NO_PAYMENTS
    return join_entries(
        f"Found {len(payments)} payment(s):",
        (_format_payment(payment) for payment in payments)
    )


async def list_payments_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    """List payments filtered by customer and/or status."""
    query = build_query(params, string_keys=["customer", "status"])
    data = await client.request("/payments", params=query)
    return _format_payments(data.get("payments") or [])
