"""
Slack OAuth authenticator.

Drives one authorization-code attempt at a time: authenticate() opens a
session, the /login handler redirects to Slack, the /oauth handler validates
the redirect and hands back a PendingExchange that the router runs in the
background. The exchange persists the token, fires exactly one callback and
then resets the session.
"""

import logging
from typing import Mapping, Optional, Tuple

import httpx

from slack_oauth.config import CONFIG_ITEMS, OAuthConfig
from slack_oauth.errors import oauth_failed
from slack_oauth.protocol import Storage
from slack_oauth.session import FailureCallback, Session, SessionState, SuccessCallback
from slack_oauth.slack import ExchangeResult, SlackTokenExchanger
from slack_oauth.storage import TokenStore
from slack_oauth.urls import authorize_url

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
OAUTH_PATH = "/oauth"


class PendingExchange:
    """A claimed session plus the code to exchange; run() resolves the session."""

    def __init__(self, authenticator: "OAuthAuthenticator", session: Session, code: str):
        self.authenticator = authenticator
        self.session = session
        self.code = code

    async def run(self) -> ExchangeResult:
        result = await self.authenticator.exchanger.exchange(self.code)
        self.authenticator.resolve(self.session, result)
        return result


class OAuthAuthenticator:
    """Obtains and persists a Slack bot token through the browser OAuth flow."""

    config_items: Tuple[str, ...] = CONFIG_ITEMS

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        storage: Storage,
        exchanger: Optional[SlackTokenExchanger] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.tokens = TokenStore(storage)
        self.exchanger = exchanger or SlackTokenExchanger(client_id, client_secret)
        self.sessions = SessionState()

    @classmethod
    def from_config(
        cls,
        config: OAuthConfig,
        storage: Storage,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "OAuthAuthenticator":
        exchanger = SlackTokenExchanger(
            config.client_id,
            config.client_secret,
            timeout=config.timeout_seconds,
            transport=transport,
        )
        return cls(config.client_id, config.client_secret, storage, exchanger=exchanger)

    @property
    def authenticated(self) -> bool:
        return self.tokens.get() is not None

    @property
    def pending(self) -> bool:
        return bool(self.sessions.state)

    def authenticate(self, on_success: SuccessCallback, on_failure: FailureCallback) -> None:
        """
        Call on_success with the stored token, or start a new attempt.

        A new attempt replaces any attempt still pending; its callbacks will
        not fire.
        """
        with self.tokens.locked():
            token = self.tokens.get()
            if token is None:
                self.sessions.begin(on_success, on_failure)

        if token is not None:
            on_success(token)
            return

        logger.info("Ready to authenticate: please visit %s", LOGIN_PATH)

    def disconnected(self) -> None:
        """Forget the stored token. A pending attempt is left alone."""
        self.tokens.clear()

    def handle_login(self) -> Optional[str]:
        """Authorize URL to redirect to, or None when no attempt is pending."""
        state = self.sessions.state
        if not state:
            return None
        return authorize_url(self.client_id, state)

    def handle_oauth(self, params: Mapping[str, str]) -> Optional[PendingExchange]:
        """
        Validate Slack's redirect back to the callback endpoint.

        Returns None when the request is ignored (missing fields or a state
        that does not belong to the pending attempt). Raises OAuthError when
        Slack reports an error. Otherwise claims the session and returns the
        exchange to run in the background.
        """
        state = params.get("state")
        code = params.get("code")
        if not state or code is None:
            logger.debug("Ignoring OAuth callback without state/code")
            return None
        if not self.sessions.matches(state):
            logger.debug("Ignoring OAuth callback with unknown state")
            return None

        error = params.get("error")
        if error is not None:
            logger.warning("Slack returned OAuth error: %s", error)
            raise oauth_failed(error)

        session = self.sessions.claim(state)
        if session is None:
            logger.debug("Ignoring duplicate OAuth callback for an exchange in progress")
            return None
        return PendingExchange(self, session, code)

    def resolve(self, session: Session, result: ExchangeResult) -> None:
        """
        Persist the result and fire the session's callback, then reset it.

        Runs under the token store lock, the same lock authenticate() holds
        while it reads the token and starts a session, so a concurrent
        authenticate either replaces the session before this check or sees
        the stored token afterwards.
        """
        with self.tokens.locked():
            if not self.sessions.is_current(session.generation):
                logger.info("Dropping token exchange result for a superseded session")
                return

            if result.ok:
                try:
                    self.tokens.set(result.token)
                except Exception as e:
                    logger.warning("Could not persist bot token (%s)", type(e).__name__)
                    result = ExchangeResult(error=e)

            try:
                if result.ok:
                    session.on_success(result.token)
                else:
                    session.on_failure(result.error)
            finally:
                self.sessions.reset(session.generation)
