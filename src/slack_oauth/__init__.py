"""
Slack bot OAuth authentication.

Exposes the authenticator (OAuthAuthenticator), its FastAPI router factory
(create_auth_router), configuration loading and the token storage backends.
"""

from .authenticator import OAuthAuthenticator, PendingExchange
from .config import OAuthConfig, load_oauth_config
from .errors import ConfigError, InvalidURL, OAuthError
from .router import create_auth_router
from .slack import ExchangeResult, SlackTokenExchanger
from .storage import JSONFileStorage, MemoryStorage, TokenStore

__all__ = [
    "OAuthAuthenticator",
    "PendingExchange",
    "OAuthConfig",
    "load_oauth_config",
    "ConfigError",
    "InvalidURL",
    "OAuthError",
    "create_auth_router",
    "ExchangeResult",
    "SlackTokenExchanger",
    "JSONFileStorage",
    "MemoryStorage",
    "TokenStore",
]
