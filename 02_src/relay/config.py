"""Project-level configuration and relay settings."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError, field_validator

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "relay.log"

API_KEY_PREFIX = "ad_"
DEFAULT_ENDPOINT = "https://agentdog.io/api/v1"
DEFAULT_SYNC_INTERVAL = 86400

# plugin config key -> environment variable
_ENV_FALLBACKS = {
    "apiKey": "RELAY_API_KEY",
    "endpoint": "RELAY_ENDPOINT",
    "syncInterval": "RELAY_SYNC_INTERVAL",
    "agentName": "RELAY_AGENT_NAME",
}

_FIELD_NAMES = {
    "apiKey": "api_key",
    "endpoint": "endpoint",
    "syncInterval": "sync_interval",
    "agentName": "agent_name",
}


class ConfigError(ValueError):
    """Relay configuration is missing or malformed."""


class RelaySettings(BaseModel):
    """Validated relay settings."""

    api_key: str
    endpoint: str = DEFAULT_ENDPOINT
    sync_interval: float = DEFAULT_SYNC_INTERVAL  # seconds
    agent_name: str = "clawdbot"
    max_registration_attempts: int = 3
    error_buffer_size: int = 10
    delayed_init_seconds: float = 5.0
    request_timeout: float = 10.0

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: str) -> str:
        if not value.startswith(API_KEY_PREFIX):
            raise ValueError(f'must start with "{API_KEY_PREFIX}"')
        return value

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        value = value.rstrip("/")
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("must be an absolute http(s) URL")
        return value

    @field_validator("sync_interval", "delayed_init_seconds", "request_timeout")
    @classmethod
    def _check_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("max_registration_attempts", "error_buffer_size")
    @classmethod
    def _check_count(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value


def load_settings(plugin_config: Mapping[str, Any] | None = None) -> RelaySettings:
    """
    Build RelaySettings from the host's plugin config, falling back to env vars.

    Args:
        plugin_config: Mapping with camelCase keys as the host delivers them
                       (apiKey, endpoint, syncInterval, agentName).

    Raises:
        ConfigError: If the API key is absent or the settings fail validation.
    """
    plugin_config = plugin_config or {}
    values: dict[str, Any] = {}

    for key, env_name in _ENV_FALLBACKS.items():
        value = plugin_config.get(key) or os.getenv(env_name)
        if value:
            values[_FIELD_NAMES[key]] = value

    if not values.get("api_key"):
        raise ConfigError("No API key configured")

    try:
        return RelaySettings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid relay settings: {e}") from e
