"""HTTP client for the GoCardless API.

Every request carries the bearer token, the API version header and a JSON
content type. A non-success status raises UpstreamError, a network failure
raises TransportError and a success body that is not a JSON object raises
MalformedResponseError. There are no retries.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional

import aiohttp

from gocardless_mcp.config import ApiCredentials
from gocardless_mcp.core.errors import MalformedResponseError, TransportError, UpstreamError
from gocardless_mcp.utils.log_utils import redact_sensitive_data, sanitize_log_message

logger = logging.getLogger(__name__)


class GoCardlessClient:
    """Authenticated client for the GoCardless REST API.

    Attributes:
        credentials: Immutable credentials the client was built with
        base_url: API host chosen from the credentials' environment
    """

    def __init__(self, credentials: ApiCredentials) -> None:
        self.credentials = credentials
        self.base_url = credentials.base_url

    def default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.credentials.access_token}",
            "GoCardless-Version": self.credentials.api_version,
            "Content-Type": "application/json",
        }

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """Make one authenticated request and return the parsed JSON body.

        Args:
            endpoint: Path below the API host, starting with "/"
            method: HTTP method
            body: Optional JSON body
            params: Optional query string parameters
            headers: Extra headers, merged over the defaults

        Returns:
            The decoded JSON object

        Raises:
            UpstreamError: If the API answers outside the 2xx range
            TransportError: If the request fails at the network level
            MalformedResponseError: If a success response is not a JSON object
        """
        url = f"{self.base_url}{endpoint}"
        merged_headers = {**self.default_headers(), **(headers or {})}
        data = json.dumps(body) if body is not None else None

        logger.debug(
            "GoCardless request: %s %s params=%s headers=%s",
            method,
            url,
            dict(params or {}),
            redact_sensitive_data(merged_headers),
        )

        try:
            timeout = aiohttp.ClientTimeout(total=None)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(
                    method,
                    url,
                    headers=merged_headers,
                    params=params or None,
                    data=data,
                ) as response:
                    if not 200 <= response.status < 300:
                        error_text = await response.text()
                        logger.warning(
                            "GoCardless API returned %s for %s %s: %s",
                            response.status,
                            method,
                            endpoint,
                            sanitize_log_message(error_text[:500]),
                        )
                        raise UpstreamError(response.status, response.reason or "", error_text)
                    payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("GoCardless request %s %s failed: %s", method, endpoint, e)
            raise TransportError(f"Error connecting to GoCardless API: {str(e)}") from e
        except ValueError as e:
            raise MalformedResponseError(
                f"GoCardless API returned an invalid JSON body for {method} {endpoint}"
            ) from e

        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"GoCardless API returned an empty or non-object body for {method} {endpoint}"
            )
        return payload
