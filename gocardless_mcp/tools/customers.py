"""Customer tools for the GoCardless MCP server.

Public Interface:
    - create_list_customers_tool() / list_customers_handler()
    - create_create_customer_tool() / create_customer_handler()
    - create_get_customer_tool() / get_customer_handler()
    - create_list_customer_bank_accounts_tool() / list_customer_bank_accounts_handler()

Examples:
    >>> text = await get_customer_handler({"customer_id": "CU123"}, client)
    >>> print(text)
    Customer Details:

    Name: Jane Doe
    Email: jane@example.com
    ...
"""

import json
from typing import Any, Dict, Final, List
from urllib.parse import quote

from gocardless_mcp.client import GoCardlessClient
from gocardless_mcp.core.types import Tool, ToolParameter
from gocardless_mcp.tools.formatting import MISSING, build_query, copy_typed, dig, join_entries

NO_CUSTOMERS: Final[str] = "No customers found."
NO_BANK_ACCOUNTS: Final[str] = (
    "No bank accounts found for this customer. "
    "They may need to complete a redirect flow to add their bank details."
)

ADDRESS_FIELDS: Final[List[str]] = ["address_line1", "city", "postal_code", "country_code"]


def _customer_id_parameter() -> ToolParameter:
    return ToolParameter(
        type="string",
        description="The GoCardless customer ID",
        required=True
    )


def create_list_customers_tool() -> Tool:
    """Create the list_customers tool definition."""
    return Tool(
        name="list_customers",
        description=(
            "List customers from GoCardless. "
            "Useful for finding existing customers before creating payments."
        ),
        parameters={
            "limit": ToolParameter(
                type="number",
                description="Maximum number of customers to return (default: 50, max: 500)",
                default=50
            ),
            "after": ToolParameter(
                type="string",
                description="Cursor for pagination - get customers after this ID"
            )
        }
    )


def create_create_customer_tool() -> Tool:
    """Create the create_customer tool definition."""
    return Tool(
        name="create_customer",
        description="Create a new customer in GoCardless. Required before setting up payments.",
        parameters={
            "email": ToolParameter(
                type="string",
                description="Customer email address",
                format="email",
                required=True
            ),
            "given_name": ToolParameter(
                type="string",
                description="Customer first name",
                required=True
            ),
            "family_name": ToolParameter(
                type="string",
                description="Customer last name",
                required=True
            ),
            "company_name": ToolParameter(type="string", description="Company name (optional)"),
            "address_line1": ToolParameter(type="string", description="First line of address"),
            "city": ToolParameter(type="string", description="City"),
            "postal_code": ToolParameter(type="string", description="Postal/ZIP code"),
            "country_code": ToolParameter(
                type="string",
                description="Two-letter country code (e.g., GB, US)"
            )
        }
    )


def create_get_customer_tool() -> Tool:
    """Create the get_customer tool definition."""
    return Tool(
        name="get_customer",
        description="Get details of a specific customer by their ID.",
        parameters={"customer_id": _customer_id_parameter()}
    )


def create_list_customer_bank_accounts_tool() -> Tool:
    """Create the list_customer_bank_accounts tool definition."""
    return Tool(
        name="list_customer_bank_accounts",
        description="List bank accounts (mandates) for a specific customer.",
        parameters={"customer_id": _customer_id_parameter()}
    )


def _full_name(customer: Dict[str, Any]) -> str:
    return f"{dig(customer, 'given_name')} {dig(customer, 'family_name')}"


def _format_customer_list(customers: List[Dict[str, Any]]) -> str:
    if not customers:
        return NO_CUSTOMERS
    return join_entries(
        f"Found {len(customers)} customers:",
        (
            f"• {_full_name(customer)} ({dig(customer, 'email')})\n"
            f"  ID: {dig(customer, 'id')}\n"
            f"  Created: {dig(customer, 'created_at')}"
            for customer in customers
        )
    )


def _format_created_customer(customer: Dict[str, Any]) -> str:
    return (
        "Successfully created customer:\n\n"
        f"Name: {_full_name(customer)}\n"
        f"Email: {dig(customer, 'email')}\n"
        f"ID: {dig(customer, 'id')}\n"
        f"Created: {dig(customer, 'created_at')}"
    )


def _format_customer_details(customer: Dict[str, Any]) -> str:
    metadata = customer.get("metadata")
    return (
        "Customer Details:\n\n"
        f"Name: {_full_name(customer)}\n"
        f"Email: {dig(customer, 'email')}\n"
        f"ID: {dig(customer, 'id')}\n"
        f"Created: {dig(customer, 'created_at')}\n"
        f"Language: {dig(customer, 'language')}\n"
        f"Metadata: {json.dumps(metadata, indent=2) if metadata is not None else MISSING}"
    )


def _format_bank_accounts(accounts: List[Dict[str, Any]]) -> str:
    if not accounts:
        return NO_BANK_ACCOUNTS
    return join_entries(
        f"Found {len(accounts)} bank account(s):",
        (
            f"• Account ending in {dig(account, 'account_number_ending')}\n"
            f"  ID: {dig(account, 'id')}\n"
            f"  Bank: {dig(account, 'bank_name')}\n"
            f"  Status: {'Active' if account.get('enabled') else 'Inactive'}"
            for account in accounts
        )
    )


async def list_customers_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    """List customers, optionally paging with ``after``."""
    query = build_query(params, string_keys=["after"])
    data = await client.request("/customers", params=query)
    return _format_customer_list(data.get("customers") or [])


async def create_customer_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    """Create a customer.

    The address block is sent only when ``address_line1`` is given, and then
    carries city, postal code and country code along with it.
    """
    customer: Dict[str, Any] = {
        "email": params["email"],
        "given_name": params["given_name"],
        "family_name": params["family_name"],
    }
    copy_typed(params, customer, ["company_name"])
    if params.get("address_line1") and isinstance(params["address_line1"], str):
        copy_typed(params, customer, ADDRESS_FIELDS)

    data = await client.request("/customers", method="POST", body={"customers": customer})
    return _format_created_customer(data.get("customers") or {})


async def get_customer_handler(params: Dict[str, Any], client: GoCardlessClient) -> str:
    customer_id = quote(str(params["customer_id"]), safe="")
    data = await client.request(f"/customers/{customer_id}")
    return _format_customer_details(data.get("customers") or {})


async def list_customer_bank_accounts_handler(
    params: Dict[str, Any],
    client: GoCardlessClient
) -> str:
    data = await client.request(
        "/customer_bank_accounts",
        params={"customer": str(params["customer_id"])}
    )
    return _format_bank_accounts(data.get("customer_bank_accounts") or [])
