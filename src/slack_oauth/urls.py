"""
Slack OAuth URL construction.

Both URLs are built from fixed bases; InvalidURL is raised if the result does
not parse back into an absolute http(s) URL.
"""

from typing import List, Tuple

import httpx
from authlib.common.urls import add_params_to_uri

from slack_oauth.errors import InvalidURL

AUTHORIZE_URL = "https://slack.com/oauth/authorize"
ACCESS_URL = "https://slack.com/api/oauth.access"
SCOPE = "bot"


def _build(base: str, params: List[Tuple[str, str]]) -> str:
    try:
        url = add_params_to_uri(base, params)
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise InvalidURL(base) from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidURL(url)
    return url


def authorize_url(client_id: str, state: str) -> str:
    """Slack authorize page the user is redirected to from /login."""
    return _build(
        AUTHORIZE_URL,
        [("client_id", client_id), ("scope", SCOPE), ("state", state)],
    )


def access_url(client_id: str, client_secret: str, code: str) -> str:
    """Token exchange endpoint for an authorization code."""
    return _build(
        ACCESS_URL,
        [("client_id", client_id), ("client_secret", client_secret), ("code", code)],
    )
