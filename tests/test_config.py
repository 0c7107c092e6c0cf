from __future__ import annotations

import pytest

from slack_oauth import ConfigError, OAuthAuthenticator, load_oauth_config
from slack_oauth.config import DEFAULT_TIMEOUT_SECONDS


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in (
        "SLACK_CLIENT_ID",
        "SLACK_CLIENT_SECRET",
        "SLACK_OAUTH_TIMEOUT_SECONDS",
        "SLACK_OAUTH_STORAGE_PATH",
    ):
        monkeypatch.delenv(key, raising=False)


def test_load_config_requires_credentials(monkeypatch) -> None:
    monkeypatch.setenv("SLACK_CLIENT_ID", "cid")
    with pytest.raises(ConfigError) as exc:
        load_oauth_config()
    assert "SLACK_CLIENT_SECRET" in str(exc.value)
    assert "SLACK_CLIENT_ID" not in str(exc.value)


def test_load_config_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SLACK_CLIENT_ID", " cid ")
    monkeypatch.setenv("SLACK_CLIENT_SECRET", "csecret")
    cfg = load_oauth_config()
    assert cfg.client_id == "cid"
    assert cfg.client_secret == "csecret"
    assert cfg.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert cfg.storage_path is None


def test_load_config_optional_values(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SLACK_CLIENT_ID", "cid")
    monkeypatch.setenv("SLACK_CLIENT_SECRET", "csecret")
    monkeypatch.setenv("SLACK_OAUTH_TIMEOUT_SECONDS", "5.5")
    monkeypatch.setenv("SLACK_OAUTH_STORAGE_PATH", str(tmp_path / "t.json"))
    cfg = load_oauth_config()
    assert cfg.timeout_seconds == 5.5
    assert cfg.storage_path == str(tmp_path / "t.json")


@pytest.mark.parametrize("raw", ["abc", "0", "-1"])
def test_load_config_rejects_bad_timeout(monkeypatch, raw) -> None:
    monkeypatch.setenv("SLACK_CLIENT_ID", "cid")
    monkeypatch.setenv("SLACK_CLIENT_SECRET", "csecret")
    monkeypatch.setenv("SLACK_OAUTH_TIMEOUT_SECONDS", raw)
    with pytest.raises(ConfigError):
        load_oauth_config()


def test_authenticator_from_config(monkeypatch, storage) -> None:
    monkeypatch.setenv("SLACK_CLIENT_ID", "cid")
    monkeypatch.setenv("SLACK_CLIENT_SECRET", "csecret")
    monkeypatch.setenv("SLACK_OAUTH_TIMEOUT_SECONDS", "3")
    auth = OAuthAuthenticator.from_config(load_oauth_config(), storage)
    assert auth.client_id == "cid"
    assert auth.exchanger.client_secret == "csecret"
    assert auth.exchanger.timeout == 3.0
    assert OAuthAuthenticator.config_items == ("SLACK_CLIENT_ID", "SLACK_CLIENT_SECRET")
