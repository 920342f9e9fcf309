"""Server-side store for Google authorization sessions.

The browser only ever holds the opaque session token (inside the signed session
cookie); OAuth credentials stay in the process. A session is created after a
successful authorization-code exchange, read on every spreadsheet write and
cleared on logout or once it outlives the store's TTL.
"""

import logging
import secrets
import threading
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from typing import Any

from fastapi import Request

logger = logging.getLogger(__name__)

# Key under which the session token lives in the signed cookie session
SESSION_TOKEN_KEY = "auth_token"

DEFAULT_SESSION_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuthSession:
    """An established authorization session."""

    token: str
    credentials: Any  # google.oauth2.credentials.Credentials
    created_at: datetime = field(default_factory=_utcnow)


class SessionStore:
    """In-process mapping of session token -> AuthSession.

    Sessions older than ``ttl`` are evicted lazily: an expired entry is dropped
    when it is looked up, and every ``create`` sweeps out the rest.
    """

    def __init__(self, ttl: timedelta = DEFAULT_SESSION_TTL, clock: Callable[[], datetime] = _utcnow) -> None:
        self._sessions: dict[str, AuthSession] = {}
        self._lock = threading.Lock()
        self._ttl = ttl
        self._clock = clock

    def _expired(self, session: AuthSession, now: datetime) -> bool:
        return now - session.created_at >= self._ttl

    def create(self, credentials: Any) -> AuthSession:
        now = self._clock()
        session = AuthSession(token=secrets.token_urlsafe(32), credentials=credentials, created_at=now)
        with self._lock:
            stale = [token for token, existing in self._sessions.items() if self._expired(existing, now)]
            for token in stale:
                del self._sessions[token]
            self._sessions[session.token] = session
        if stale:
            logger.info("Evicted %d expired authorization session(s)", len(stale))
        logger.info("Authorization session created (%d active)", len(self))
        return session

    def get(self, token: str | None) -> AuthSession | None:
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is not None and self._expired(session, self._clock()):
                del self._sessions[token]
                session = None
        return session

    def clear(self, token: str | None) -> bool:
        """Drop the session for *token*. Returns True if one existed."""
        if not token:
            return False
        with self._lock:
            removed = self._sessions.pop(token, None)
        if removed is not None:
            logger.info("Authorization session cleared (%d active)", len(self))
        return removed is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


# ---------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------


def get_session_store(request: Request) -> SessionStore:
    """Return the store attached to the running application."""
    return request.app.state.session_store


def get_current_session(request: Request) -> AuthSession | None:
    """Resolve the session referenced by the caller's cookie, if any."""
    store = get_session_store(request)
    return store.get(request.session.get(SESSION_TOKEN_KEY))
