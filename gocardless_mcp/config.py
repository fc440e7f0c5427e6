"""Configuration for the GoCardless MCP server.

Settings are read once at startup from environment variables (and an
optional ``.env`` file) and frozen into an ApiCredentials instance that is
handed to the HTTP client.
"""

import logging
from dataclasses import dataclass, field
from typing import Final, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LIVE_BASE_URL: Final[str] = "https://api.gocardless.com"
SANDBOX_BASE_URL: Final[str] = "https://api-sandbox.gocardless.com"
DEFAULT_API_VERSION: Final[str] = "2015-07-06"

KNOWN_ENVIRONMENTS: Final[frozenset] = frozenset({"sandbox", "live"})


class GoCardlessSettings(BaseSettings):
    """Process settings, read from ``GOCARDLESS_*`` environment variables."""

    access_token: str = Field("", description="GoCardless access token")
    environment: str = Field("sandbox", description="API environment: sandbox or live")
    api_version: str = Field(DEFAULT_API_VERSION, description="GoCardless-Version header value")
    log_level: str = Field("INFO", description="Logging level name")
    log_dir: Optional[str] = Field(None, description="Directory for rotating log files, console only when unset")

    model_config = SettingsConfigDict(
        env_prefix="GOCARDLESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, env_file: Optional[str] = ".env", **kwargs):
        super().__init__(_env_file=env_file, **kwargs)


def base_url_for(environment: Optional[str]) -> str:
    """Select the API host for an environment name.

    Only the exact string ``live`` selects the live host. Anything else,
    including ``production``, an empty string or None, selects sandbox.
    """
    if environment == "live":
        return LIVE_BASE_URL
    if environment not in KNOWN_ENVIRONMENTS:
        logger.warning(
            "Unrecognized GoCardless environment %r, using sandbox", environment
        )
    return SANDBOX_BASE_URL


@dataclass(frozen=True)
class ApiCredentials:
    """Credentials and target environment for the GoCardless API.

    Attributes:
        environment: Environment name; only ``live`` selects the live host
        access_token: Bearer token, empty when not configured
        api_version: Value of the GoCardless-Version header
    """

    environment: str = "sandbox"
    access_token: str = field(default="", repr=False)
    api_version: str = DEFAULT_API_VERSION

    @classmethod
    def from_settings(cls, settings: Optional[GoCardlessSettings] = None) -> "ApiCredentials":
        """Create credentials from settings.

        Args:
            settings: Optional settings instance, will load from env if not provided

        Returns:
            A frozen ApiCredentials instance
        """
        if settings is None:
            settings = GoCardlessSettings()
        return cls(
            environment=settings.environment,
            access_token=settings.access_token,
            api_version=settings.api_version,
        )

    @property
    def is_configured(self) -> bool:
        """True when an access token is present."""
        return bool(self.access_token)

    @property
    def base_url(self) -> str:
        return base_url_for(self.environment)
