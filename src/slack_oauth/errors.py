"""
Errors raised by the Slack OAuth authenticator.

OAuthError is authlib's error type so the router can handle provider failures
the same way it handles any other authlib OAuth failure.
"""

from authlib.integrations.starlette_client import OAuthError


class InvalidURL(ValueError):
    """A derived URL could not be constructed."""

    def __init__(self, url: str = ""):
        self.url = url
        super().__init__("Invalid URL")


class ConfigError(RuntimeError):
    """Required configuration is missing or malformed."""


def oauth_failed(reason: str) -> OAuthError:
    """Return an OAuthError whose `error` is the provider's literal reason."""
    return OAuthError(error=reason, description=f"OAuth Failed: {reason}")


__all__ = ["ConfigError", "InvalidURL", "OAuthError", "oauth_failed"]
