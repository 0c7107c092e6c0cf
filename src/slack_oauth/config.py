"""
Configuration for the Slack OAuth authenticator.

Credentials come from SLACK_CLIENT_ID and SLACK_CLIENT_SECRET. Optional knobs:
SLACK_OAUTH_TIMEOUT_SECONDS (token exchange HTTP timeout, default 20) and
SLACK_OAUTH_STORAGE_PATH (JSON file for the persisted token; unset keeps the
token in memory only).
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from slack_oauth.errors import ConfigError

CLIENT_ID_KEY = "SLACK_CLIENT_ID"
CLIENT_SECRET_KEY = "SLACK_CLIENT_SECRET"

# Keys the authenticator cannot run without.
CONFIG_ITEMS: Tuple[str, ...] = (CLIENT_ID_KEY, CLIENT_SECRET_KEY)

DEFAULT_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class OAuthConfig:
    client_id: str
    client_secret: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    storage_path: Optional[str] = None


def _env(name: str) -> Optional[str]:
    return (os.getenv(name, "") or "").strip() or None


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"SLACK_OAUTH_TIMEOUT_SECONDS must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError("SLACK_OAUTH_TIMEOUT_SECONDS must be positive")
    return value


def load_oauth_config() -> OAuthConfig:
    """
    Load the authenticator configuration from environment variables.

    Raises ConfigError listing every required key that is missing or blank.
    """
    missing = [key for key in CONFIG_ITEMS if _env(key) is None]
    if missing:
        raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

    return OAuthConfig(
        client_id=_env(CLIENT_ID_KEY),
        client_secret=_env(CLIENT_SECRET_KEY),
        timeout_seconds=_parse_timeout(_env("SLACK_OAUTH_TIMEOUT_SECONDS")),
        storage_path=_env("SLACK_OAUTH_STORAGE_PATH"),
    )
