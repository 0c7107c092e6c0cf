"""
FastAPI app: Slack bot OAuth (authorization-code flow) with a persisted token.

Decisions:
- .env is loaded before importing slack_oauth so SLACK_* settings are
  available when the authenticator is created (Ruff E402 suppressed for that).
- The token is kept in memory unless SLACK_OAUTH_STORAGE_PATH points to a JSON
  file, in which case it survives restarts and /login is only needed once.
- Authentication starts at app startup; the log says when to visit /login.
"""

import logging
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()

# Load .env before slack_oauth so SLACK_* is set; Ruff E402.
from slack_oauth import (  # noqa: E402
    JSONFileStorage,
    MemoryStorage,
    OAuthAuthenticator,
    create_auth_router,
    load_oauth_config,
)

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)
logger = logging.getLogger("slack_oauth.app")

config = load_oauth_config()
storage = JSONFileStorage(config.storage_path) if config.storage_path else MemoryStorage()
authenticator = OAuthAuthenticator.from_config(config, storage)


def _on_token(token: str) -> None:
    logger.info("Slack bot authenticated")


def _on_error(error: Exception) -> None:
    logger.error("Slack bot authentication failed: %s", type(error).__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    authenticator.authenticate(_on_token, _on_error)
    yield


app = FastAPI(lifespan=lifespan)
app.include_router(create_auth_router(authenticator))


@app.get("/")
async def home():
    return {"authenticated": authenticator.authenticated, "pending": authenticator.pending}
