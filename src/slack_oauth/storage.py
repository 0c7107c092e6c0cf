"""
Token persistence.

TokenStore is the narrow accessor the authenticator uses for the bot token
(namespace "oauth", key "token"). Its lock is reentrant so callers can hold it
across a read-then-decide sequence while the exchanger's write waits.
"""

import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from slack_oauth.protocol import Storage

logger = logging.getLogger(__name__)

TOKEN_NAMESPACE = "oauth"
TOKEN_KEY = "token"


class MemoryStorage:
    """Process-local Storage; values vanish on restart."""

    def __init__(self):
        self._data: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()

    def get(self, namespace: str, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(namespace, {}).get(key)

    def set(self, namespace: str, key: str, value: Optional[str]) -> None:
        with self._lock:
            if value is None:
                self._data.get(namespace, {}).pop(key, None)
            else:
                self._data.setdefault(namespace, {})[key] = value


class JSONFileStorage:
    """
    Storage backed by a single JSON document: {namespace: {key: value}}.

    Writes go to a temporary file that replaces the original, so a crash never
    leaves a half-written document behind.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Dict[str, str]]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid storage document at {self.path}")
        return data

    def get(self, namespace: str, key: str) -> Optional[str]:
        with self._lock:
            value = self._load().get(namespace, {}).get(key)
        return value if isinstance(value, str) else None

    def set(self, namespace: str, key: str, value: Optional[str]) -> None:
        with self._lock:
            data = self._load()
            if value is None:
                data.get(namespace, {}).pop(key, None)
            else:
                data.setdefault(namespace, {})[key] = value

            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self.path)


class TokenStore:
    """Read/write access to the persisted bot token."""

    def __init__(self, storage: Storage, namespace: str = TOKEN_NAMESPACE, key: str = TOKEN_KEY):
        self.storage = storage
        self.namespace = namespace
        self.key = key
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator["TokenStore"]:
        """Hold the store lock for a read-then-decide sequence."""
        with self._lock:
            yield self

    def get(self) -> Optional[str]:
        with self._lock:
            return self.storage.get(self.namespace, self.key) or None

    def set(self, token: str) -> None:
        with self._lock:
            self.storage.set(self.namespace, self.key, token)
        logger.info("Stored bot token under %s/%s", self.namespace, self.key)

    def clear(self) -> None:
        with self._lock:
            self.storage.set(self.namespace, self.key, None)
        logger.info("Cleared bot token under %s/%s", self.namespace, self.key)
