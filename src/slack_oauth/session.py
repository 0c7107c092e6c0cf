"""
Authentication session state.

Holds the single in-flight OAuth attempt: its anti-forgery state token, the
caller's completion callbacks and a generation number. Every read or change
goes through one lock. A new attempt replaces the old one; results carrying an
older generation are recognised as stale.

Lifecycle: idle -> pending (begin) -> exchanging (claim) -> idle (reset).
"""

import secrets
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

STATE_MIN = 1
STATE_MAX = 999999

SuccessCallback = Callable[[str], None]
FailureCallback = Callable[[Exception], None]


def generate_state() -> str:
    """Random numeric state token in [STATE_MIN, STATE_MAX]."""
    return str(STATE_MIN + secrets.randbelow(STATE_MAX - STATE_MIN + 1))


class Phase(str, Enum):
    PENDING = "pending"
    EXCHANGING = "exchanging"


@dataclass(frozen=True)
class Session:
    state: str
    generation: int
    on_success: SuccessCallback
    on_failure: FailureCallback
    phase: Phase = Phase.PENDING


class SessionState:
    """The authenticator's one session slot."""

    def __init__(self):
        self._lock = threading.Lock()
        self._session: Optional[Session] = None
        self._generation = 0

    @property
    def state(self) -> str:
        """Current state token; empty string when no session is active."""
        with self._lock:
            return self._session.state if self._session else ""

    def begin(self, on_success: SuccessCallback, on_failure: FailureCallback) -> Session:
        """Start a new attempt, discarding any previous one."""
        with self._lock:
            self._generation += 1
            self._session = Session(
                state=generate_state(),
                generation=self._generation,
                on_success=on_success,
                on_failure=on_failure,
            )
            return self._session

    def matches(self, state: str) -> bool:
        with self._lock:
            return bool(state) and self._session is not None and self._session.state == state

    def claim(self, state: str) -> Optional[Session]:
        """
        Move the pending session with this state to exchanging and return it.

        Returns None if the state does not match or the session is already
        exchanging, so one session is handed to at most one exchange.
        """
        with self._lock:
            session = self._session
            if session is None or not state or session.state != state:
                return None
            if session.phase is not Phase.PENDING:
                return None
            self._session = replace(session, phase=Phase.EXCHANGING)
            return self._session

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return self._session is not None and self._session.generation == generation

    def reset(self, generation: int) -> bool:
        """Clear the session if it is still the given generation."""
        with self._lock:
            if self._session is None or self._session.generation != generation:
                return False
            self._session = None
            return True
