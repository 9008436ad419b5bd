"""Session manager: binds the session cookie to a storage provider.

Request handlers call ``session_start`` to get the current session (a new
one is created and a cookie issued when needed) and ``session_destroy`` to
end it. Expired sessions are reclaimed by a background sweeper started
with ``start_gc``.

A stale or forged cookie does not fail the request: when the provider no
longer knows the identifier, a fresh session and cookie replace it.
"""

from __future__ import annotations

import logging
import math
import secrets
import threading
from datetime import datetime, timezone
from types import TracebackType
from urllib.parse import quote_plus, unquote_plus

from starlette.requests import HTTPConnection
from starlette.responses import Response

from . import events
from .errors import SessionExistsError, SessionIdError, SessionNotFoundError
from .registry import ProviderRegistry
from .session.backend import Session
from .sweeper import PeriodicSweeper

logger = logging.getLogger(__name__)

SESSION_ID_BYTES = 32  # 256 bits
_INIT_ATTEMPTS = 3
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def generate_session_id(nbytes: int = SESSION_ID_BYTES) -> str:
    """Return a URL-safe identifier drawn from the OS random source.

    Raises SessionIdError instead of ever returning a weak or empty id.
    """
    try:
        session_id = secrets.token_urlsafe(nbytes)
    except (OSError, NotImplementedError) as e:
        raise SessionIdError("random source unavailable") from e
    if not session_id:
        raise SessionIdError("random source returned no data")
    return session_id


class Manager:
    """Cookie-bound session lifecycle over a named provider.

    Args:
        provider_name: Name the backend was registered under.
        cookie_name: Name of the session cookie.
        max_lifetime: Seconds of inactivity before a session expires. Also
            used as the cookie Max-Age.
        registry: Registry to resolve ``provider_name`` in.
        gc_interval: Seconds between GC sweeps (default: ``max_lifetime``).
        secure: Add the Secure attribute to the cookie.
        same_site: SameSite attribute ("lax", "strict" or "none").

    Raises:
        UnknownProviderError: ``provider_name`` is not registered.
    """

    def __init__(
        self,
        provider_name: str,
        cookie_name: str,
        max_lifetime: float,
        *,
        registry: ProviderRegistry,
        gc_interval: float | None = None,
        secure: bool = False,
        same_site: str = "lax",
    ) -> None:
        if max_lifetime <= 0:
            raise ValueError("max_lifetime must be positive")
        if not cookie_name:
            raise ValueError("cookie_name must not be empty")
        self.provider = registry.lookup(provider_name)
        self.provider_name = provider_name
        self.cookie_name = cookie_name
        self.max_lifetime = max_lifetime
        self.secure = secure
        self.same_site = same_site
        # start, destroy and gc are serialized against each other
        self._lock = threading.Lock()
        self._sweeper = PeriodicSweeper(
            self.gc,
            gc_interval or max_lifetime,
            name=f"session-gc[{provider_name}]",
        )

    # ── Request-facing operations ──────────────────────────────────────────

    def session_start(self, request: HTTPConnection, response: Response) -> Session:
        """Return the request's session, creating one and setting its cookie if needed."""
        with self._lock:
            session_id = self._load_session_id(request)
            if session_id is not None:
                try:
                    return self.provider.read(session_id)
                except SessionNotFoundError:
                    logger.info("Session cookie refers to an unknown or expired session; issuing a new one")
                    events.session_event(
                        activity_id=events.Activity.EXPIRE,
                        session_id=session_id,
                        severity_id=events.Severity.LOW,
                        provider=self.provider_name,
                        message="Stale session cookie replaced",
                    )

            session = self._create_session()
            response.set_cookie(
                key=self.cookie_name,
                value=quote_plus(session.session_id),
                # round up: the cookie must not expire before the session
                max_age=math.ceil(self.max_lifetime),
                path="/",
                secure=self.secure,
                httponly=True,
                samesite=self.same_site,
            )
        events.session_event(
            activity_id=events.Activity.CREATE,
            session_id=session.session_id,
            provider=self.provider_name,
            message="New session issued",
        )
        return session

    def session_destroy(self, request: HTTPConnection, response: Response) -> None:
        """Destroy the request's session and tell the client to drop the cookie."""
        session_id = self._load_session_id(request)
        if session_id is None:
            return

        with self._lock:
            try:
                self.provider.destroy(session_id)
            except SessionNotFoundError:
                logger.debug("Destroy requested for a session that is already gone")
            response.set_cookie(
                key=self.cookie_name,
                value="",
                max_age=-1,
                expires=_EPOCH,
                path="/",
                secure=self.secure,
                httponly=True,
                samesite=self.same_site,
            )
        events.session_event(
            activity_id=events.Activity.DESTROY,
            session_id=session_id,
            provider=self.provider_name,
            message="Session destroyed",
        )

    # ── Garbage collection ─────────────────────────────────────────────────

    def gc(self) -> int:
        """Run one sweep. Returns the number of sessions removed."""
        with self._lock:
            removed = self.provider.gc(self.max_lifetime)
        logger.debug("GC sweep on %r removed %d sessions", self.provider_name, removed)
        events.sweep_event(
            provider=self.provider_name,
            removed=removed,
            remaining=self.active_sessions(),
        )
        return removed

    def start_gc(self) -> bool:
        """Start periodic GC. Only the first call starts the sweeper."""
        return self._sweeper.start()

    @property
    def gc_running(self) -> bool:
        return self._sweeper.running

    def shutdown(self, timeout: float | None = 5.0) -> None:
        """Stop periodic GC and wait for an in-flight sweep to finish."""
        self._sweeper.stop(timeout)

    def __enter__(self) -> Manager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()

    # ── Introspection ──────────────────────────────────────────────────────

    def active_sessions(self) -> int | None:
        """Live session count, or None if the provider cannot count."""
        count = getattr(self.provider, "count", None)
        return count() if callable(count) else None

    # ── Internals ──────────────────────────────────────────────────────────

    def _load_session_id(self, conn: HTTPConnection) -> str | None:
        raw = conn.cookies.get(self.cookie_name)
        if not raw:
            return None
        return unquote_plus(raw) or None

    def _create_session(self) -> Session:
        for _ in range(_INIT_ATTEMPTS):
            session_id = generate_session_id()
            try:
                return self.provider.init(session_id)
            except SessionExistsError:
                logger.warning("Generated session id collided with a live session; retrying")
        raise SessionIdError(f"no unique session id after {_INIT_ATTEMPTS} attempts")
