"""
Pytest config.

Puts src/ on sys.path so `import slack_oauth` works without installing the
package, and provides a fake Slack oauth.access endpoint built on
httpx.MockTransport.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List

import httpx
import pytest


def _ensure_src_on_syspath() -> None:
    src = str(Path(__file__).resolve().parents[1] / "src")
    if src not in sys.path:
        sys.path.insert(0, src)


_ensure_src_on_syspath()

from slack_oauth import MemoryStorage, OAuthAuthenticator, SlackTokenExchanger  # noqa: E402


class FakeSlack:
    """Records oauth.access requests and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"ok": True, "bot": {"bot_access_token": "xoxb-1"}}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last_params(self) -> Dict[str, str]:
        return dict(self.requests[-1].url.params)


class Recorder:
    """Collects success/failure callback invocations."""

    def __init__(self) -> None:
        self.tokens: List[str] = []
        self.errors: List[Exception] = []

    def success(self, token: str) -> None:
        self.tokens.append(token)

    def failure(self, error: Exception) -> None:
        self.errors.append(error)


@pytest.fixture
def fake_slack() -> FakeSlack:
    return FakeSlack()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def authenticator(storage: MemoryStorage, fake_slack: FakeSlack) -> OAuthAuthenticator:
    exchanger = SlackTokenExchanger("cid", "csecret", transport=fake_slack.transport)
    return OAuthAuthenticator("cid", "csecret", storage, exchanger=exchanger)
