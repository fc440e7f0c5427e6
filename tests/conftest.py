"""Common test fixtures for the entire test suite."""

import json
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from gocardless_mcp.client import GoCardlessClient
from gocardless_mcp.config import ApiCredentials
from gocardless_mcp.core import ToolDispatcher
from gocardless_mcp.tools import build_dispatcher


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Fixture to ensure no environment variables affect tests.

    This fixture runs automatically for all tests to ensure a clean environment.
    """
    env_vars = [
        "GOCARDLESS_ACCESS_TOKEN",
        "GOCARDLESS_ENVIRONMENT",
        "GOCARDLESS_API_VERSION",
        "GOCARDLESS_LOG_LEVEL",
        "GOCARDLESS_LOG_DIR",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def credentials() -> ApiCredentials:
    """Sandbox credentials with a token configured."""
    return ApiCredentials(environment="sandbox", access_token="sandbox_test_token_123")


@pytest.fixture
def mock_client(credentials: ApiCredentials) -> MagicMock:
    """A stand-in for GoCardlessClient whose request() is an AsyncMock.

    Example:
        def test_something(mock_client):
            mock_client.request.return_value = {"payments": []}
    """
    client = MagicMock(spec=GoCardlessClient)
    client.credentials = credentials
    client.request = AsyncMock(return_value={})
    return client


@pytest.fixture
def base_dispatcher(mock_client: MagicMock) -> Callable[..., ToolDispatcher]:
    """Base fixture for dispatchers wired to the mock client.

    Returns:
        Callable: A factory creating a dispatcher with all GoCardless tools.

    Example:
        def test_something(base_dispatcher):
            dispatcher = base_dispatcher(access_token="")
    """
    def _make_dispatcher(
        access_token: str = "sandbox_test_token_123",
        environment: str = "sandbox"
    ) -> ToolDispatcher:
        creds = ApiCredentials(environment=environment, access_token=access_token)
        return build_dispatcher(creds, client=mock_client)
    return _make_dispatcher


@pytest.fixture
def dispatcher(base_dispatcher) -> ToolDispatcher:
    """A dispatcher with a configured token."""
    return base_dispatcher()


class FakeResponse:
    """Minimal aiohttp response used as an async context manager."""

    def __init__(self, status: int = 200, payload: Any = None, reason: str = "OK", text: Optional[str] = None):
        self.status = status
        self.reason = reason
        self._text = text if text is not None else json.dumps(payload if payload is not None else {})

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        # aiohttp decodes an empty body to None
        if not self._text.strip():
            return None
        return json.loads(self._text)

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


class FakeSession:
    """Minimal aiohttp.ClientSession recording every request."""

    def __init__(self, responses: List[Any]):
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, *args, **kwargs) -> "FakeSession":
        return self

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


@pytest.fixture
def fake_session(monkeypatch) -> Callable[..., FakeSession]:
    """Patch aiohttp.ClientSession with a FakeSession.

    Returns:
        Callable: Takes the responses (or exceptions) to hand out in order.

    Example:
        def test_something(fake_session):
            session = fake_session(FakeResponse(200, {"customers": []}))
    """
    def _install(*responses: Any) -> FakeSession:
        session = FakeSession(list(responses))
        monkeypatch.setattr(aiohttp, "ClientSession", session)
        return session
    return _install


@pytest.fixture
def sample_customer() -> Dict[str, Any]:
    """A customer resource as returned by the API."""
    return {
        "id": "CU000123",
        "email": "jane@example.com",
        "given_name": "Jane",
        "family_name": "Doe",
        "company_name": None,
        "created_at": "2024-01-15T10:00:00.000Z",
        "language": "en",
        "metadata": {"crm_id": "42"},
    }


@pytest.fixture
def sample_payment() -> Dict[str, Any]:
    """A payment resource as returned by the API."""
    return {
        "id": "PM000456",
        "amount": 2999,
        "currency": "GBP",
        "status": "confirmed",
        "created_at": "2024-02-01T09:30:00.000Z",
        "description": "Monthly subscription",
    }


@pytest.fixture
def sample_billing_request() -> Dict[str, Any]:
    """A billing request resource as returned by the API."""
    return {
        "id": "BRQ000789",
        "status": "pending",
        "created_at": "2024-03-01T12:00:00.000Z",
        "payment_request": {
            "amount": 2999,
            "currency": "GBP",
            "description": "Monthly subscription payment",
        },
        "links": {
            "customer": "CU000123",
            "payment_request": "PRQ000111",
        },
    }


@pytest.fixture
def make_response() -> Callable[..., FakeResponse]:
    """Factory for fake aiohttp responses.

    Example:
        def test_something(fake_session, make_response):
            fake_session(make_response(404, {"error": "not_found"}, reason="Not Found"))
    """
    return FakeResponse
