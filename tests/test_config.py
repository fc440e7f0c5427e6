"""Tests for configuration loading and environment selection."""

import dataclasses
import logging

import pytest

from gocardless_mcp.config import (
    DEFAULT_API_VERSION,
    LIVE_BASE_URL,
    SANDBOX_BASE_URL,
    ApiCredentials,
    GoCardlessSettings,
    base_url_for,
)


@pytest.mark.parametrize("environment,expected", [
    ("live", LIVE_BASE_URL),
    ("sandbox", SANDBOX_BASE_URL),
    ("production", SANDBOX_BASE_URL),
    ("", SANDBOX_BASE_URL),
    (None, SANDBOX_BASE_URL),
    ("Live", SANDBOX_BASE_URL),
])
def test_base_url_for(environment, expected) -> None:
    """Test that only the exact string 'live' selects the live host."""
    assert base_url_for(environment) == expected


def test_unrecognized_environment_logs_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="gocardless_mcp.config"):
        assert base_url_for("prod") == SANDBOX_BASE_URL

    assert "Unrecognized GoCardless environment 'prod'" in caplog.text


def test_known_environment_does_not_warn(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="gocardless_mcp.config"):
        base_url_for("sandbox")

    assert caplog.text == ""


def test_settings_defaults() -> None:
    """Test defaults when nothing is configured."""
    settings = GoCardlessSettings(env_file=None)

    assert settings.access_token == ""
    assert settings.environment == "sandbox"
    assert settings.api_version == DEFAULT_API_VERSION
    assert settings.log_level == "INFO"
    assert settings.log_dir is None


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("GOCARDLESS_ACCESS_TOKEN", "live_abc123")
    monkeypatch.setenv("GOCARDLESS_ENVIRONMENT", "live")

    credentials = ApiCredentials.from_settings(GoCardlessSettings(env_file=None))

    assert credentials.access_token == "live_abc123"
    assert credentials.environment == "live"
    assert credentials.base_url == LIVE_BASE_URL
    assert credentials.is_configured


def test_settings_read_env_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("GOCARDLESS_ACCESS_TOKEN=sandbox_from_file\n")

    settings = GoCardlessSettings(env_file=str(env_file))

    assert settings.access_token == "sandbox_from_file"


def test_unset_environment_resolves_to_sandbox() -> None:
    credentials = ApiCredentials.from_settings(GoCardlessSettings(env_file=None))

    assert credentials.base_url == SANDBOX_BASE_URL
    assert credentials.is_configured is False


def test_credentials_are_immutable() -> None:
    credentials = ApiCredentials(access_token="secret")

    with pytest.raises(dataclasses.FrozenInstanceError):
        credentials.access_token = "other"


def test_credentials_repr_hides_token() -> None:
    credentials = ApiCredentials(environment="live", access_token="live_supersecret")

    assert "live_supersecret" not in repr(credentials)
    assert "live" in repr(credentials)


def test_settings_read_log_dir(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("GOCARDLESS_LOG_DIR", str(tmp_path))

    settings = GoCardlessSettings(env_file=None)

    assert settings.log_dir == str(tmp_path)
