"""
Slack authorization-code exchange.

Calls oauth.access with the client credentials and the code returned to the
callback endpoint, and reads the bot token from bot.bot_access_token. The
exchange never raises: every failure comes back as an ExchangeResult error so
the caller can hand it to the session's failure callback.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from slack_oauth.errors import oauth_failed
from slack_oauth.urls import access_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeResult:
    """Outcome of one code exchange: exactly one of token/error is set."""

    token: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_bot_token(data) -> str:
    """Extract bot.bot_access_token from an oauth.access response body."""
    if not isinstance(data, dict):
        raise TypeError("oauth.access response is not a JSON object")
    if data.get("ok") is False:
        raise oauth_failed(str(data.get("error") or "unknown_error"))
    bot = data.get("bot")
    if not isinstance(bot, dict):
        raise KeyError("bot")
    token = bot.get("bot_access_token")
    if not isinstance(token, str) or not token:
        raise KeyError("bot.bot_access_token")
    return token


class SlackTokenExchanger:
    """Exchanges an authorization code for a Slack bot access token."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout: float = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        # Tests pass httpx.MockTransport here.
        self.transport = transport

    async def _fetch_token(self, code: str) -> str:
        url = access_url(self.client_id, self.client_secret, code)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.get(url)
            r.raise_for_status()
            data = r.json()
        return parse_bot_token(data)

    async def exchange(self, code: str) -> ExchangeResult:
        try:
            token = await self._fetch_token(code)
        except Exception as e:
            # httpx error messages include the request URL, which carries the client secret.
            logger.warning("Slack token exchange failed (%s)", type(e).__name__)
            return ExchangeResult(error=e)
        return ExchangeResult(token=token)
