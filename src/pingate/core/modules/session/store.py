"""In-memory bearer token store with lazy expiry and a periodic sweep."""

import asyncio
import contextlib
import secrets
import threading
from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from pingate.core.modules.session.models import AuthToken, IssuedToken, Session, TokenValidation
from pingate.utils import now

logger = structlog.get_logger(__name__)

TOKEN_BYTES = 32


class SessionTokenStore:
    """Maps opaque bearer tokens to sessions.

    All operations are synchronous and never await, so they cannot interleave
    on the event loop. The lock covers callers running in worker threads.
    """

    def __init__(
        self,
        ttl: timedelta,
        sweep_interval: float = 60.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("Session TTL must be positive")
        if sweep_interval <= 0:
            raise ValueError("Sweep interval must be positive")
        self._ttl = ttl
        self._sweep_interval = sweep_interval
        self._clock = clock or now
        self._sessions: dict[AuthToken, Session] = {}
        self._lock = threading.Lock()
        self._sweep_task: asyncio.Task[None] | None = None

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._sessions

    def issue(self, remote_address: str) -> IssuedToken:
        """Create a session for an already verified caller."""
        token = AuthToken(secrets.token_urlsafe(TOKEN_BYTES))
        issued_at = self._clock()
        session = Session(
            token=token,
            issued_at=issued_at,
            expires_at=issued_at + self._ttl,
            origin_address=remote_address,
        )
        with self._lock:
            self._sessions[token] = session
        logger.info("session_issued", origin_address=remote_address, expires_at=session.expires_at.isoformat())
        return IssuedToken(token=token, expires_at=session.expires_at)

    def validate(self, token: AuthToken) -> TokenValidation:
        """Look up a token, deleting it on the spot if it has expired."""
        current = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return TokenValidation(valid=False)
            if session.is_expired(current):
                del self._sessions[token]
                return TokenValidation(valid=False)
        return TokenValidation(valid=True, session=session, remaining=session.remaining(current))

    def revoke(self, token: AuthToken) -> None:
        """Delete a token. Unknown tokens are ignored."""
        with self._lock:
            removed = self._sessions.pop(token, None)
        if removed is not None:
            logger.debug("session_revoked", origin_address=removed.origin_address)

    def sweep(self) -> int:
        """Delete every expired session and return how many were removed."""
        current = self._clock()
        with self._lock:
            expired = [token for token, session in self._sessions.items() if session.is_expired(current)]
            for token in expired:
                del self._sessions[token]
        if expired:
            logger.debug("sessions_swept", removed=len(expired))
        return len(expired)

    def start(self) -> None:
        """Start the repeating sweep task on the running event loop."""
        if self._sweep_task is not None:
            return
        self._sweep_task = asyncio.create_task(self._run_sweeps())

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    @property
    def is_running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    async def _run_sweeps(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                self.sweep()
            except Exception:
                logger.exception("sweep_failed")
