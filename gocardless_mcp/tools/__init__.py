"""GoCardless tool definitions and handlers.

TOOL_SPECS pairs each tool definition factory with its handler, in the
order tools are listed to callers.
"""

from typing import Callable, List, Optional, Tuple

from gocardless_mcp.client import GoCardlessClient
from gocardless_mcp.config import ApiCredentials
from gocardless_mcp.core.dispatcher import ToolDispatcher
from gocardless_mcp.core.registry import ToolRegistry
from gocardless_mcp.core.types import Tool, ToolHandler
from gocardless_mcp.tools.billing_requests import (
    create_billing_request_flow_handler,
    create_billing_request_flow_tool,
    create_billing_request_handler,
    create_billing_request_tool,
    create_fulfil_billing_request_tool,
    create_get_billing_request_tool,
    create_list_billing_requests_tool,
    fulfil_billing_request_handler,
    get_billing_request_handler,
    list_billing_requests_handler,
)
from gocardless_mcp.tools.customers import (
    create_create_customer_tool,
    create_customer_handler,
    create_get_customer_tool,
    create_list_customer_bank_accounts_tool,
    create_list_customers_tool,
    get_customer_handler,
    list_customer_bank_accounts_handler,
    list_customers_handler,
)
from gocardless_mcp.tools.payments import create_list_payments_tool, list_payments_handler
from gocardless_mcp.tools.redirect_flows import (
    create_redirect_flow_handler,
    create_redirect_flow_tool,
)

TOOL_SPECS: List[Tuple[Callable[[], Tool], ToolHandler]] = [
    (create_list_customers_tool, list_customers_handler),
    (create_create_customer_tool, create_customer_handler),
    (create_get_customer_tool, get_customer_handler),
    (create_list_customer_bank_accounts_tool, list_customer_bank_accounts_handler),
    (create_redirect_flow_tool, create_redirect_flow_handler),
    (create_list_payments_tool, list_payments_handler),
    (create_billing_request_tool, create_billing_request_handler),
    (create_billing_request_flow_tool, create_billing_request_flow_handler),
    (create_get_billing_request_tool, get_billing_request_handler),
    (create_list_billing_requests_tool, list_billing_requests_handler),
    (create_fulfil_billing_request_tool, fulfil_billing_request_handler),
]


def build_tools() -> List[Tuple[Tool, ToolHandler]]:
    """Instantiate every tool definition alongside its handler."""
    return [(factory(), handler) for factory, handler in TOOL_SPECS]


def build_registry() -> ToolRegistry:
    """Create a registry holding all GoCardless tools.

    Raises:
        ValueError: If two tools share a name
    """
    return ToolRegistry(tool for tool, _ in build_tools())


def build_dispatcher(
    credentials: ApiCredentials,
    client: Optional[GoCardlessClient] = None
) -> ToolDispatcher:
    """Create a dispatcher with every GoCardless tool and handler registered.

    Args:
        credentials: Credentials checked before each call
        client: Optional client, built from the credentials if not provided

    Returns:
        A ready-to-use ToolDispatcher
    """
    tools = build_tools()
    registry = ToolRegistry(tool for tool, _ in tools)
    dispatcher = ToolDispatcher(registry, client or GoCardlessClient(credentials), credentials)
    for tool, handler in tools:
        dispatcher.register_handler(tool.name, handler)
    return dispatcher


__all__ = ["TOOL_SPECS", "build_tools", "build_registry", "build_dispatcher"]
