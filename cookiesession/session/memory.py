"""In-memory session provider.

Sessions live in a single OrderedDict kept in recency order: the first
entry is the least recently used, the last entry the most recently used.
Every read or write moves the session to the end, so a GC sweep only has
to look at the front and can stop at the first live entry.

Not suitable for production across processes: sessions are lost on
restart and are not shared between workers.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import TYPE_CHECKING, Any, Callable, Iterator

from ..errors import SessionExistsError, SessionNotFoundError
from .backend import SessionStore

if TYPE_CHECKING:
    from ..registry import ProviderRegistry

logger = logging.getLogger(__name__)


class MemorySession:
    """Live handle onto a store owned by a MemoryProvider."""

    def __init__(self, provider: MemoryProvider, store: SessionStore) -> None:
        self._provider = provider
        self._store = store

    @property
    def session_id(self) -> str:
        return self._store.session_id

    def set(self, key: Any, value: Any) -> None:
        if not self._provider.update(self.session_id):
            raise SessionNotFoundError(self.session_id)
        with self._store.lock:
            self._store.values[key] = value

    def get(self, key: Any, default: Any = None) -> Any:
        self._provider.update(self.session_id)
        with self._store.lock:
            return self._store.values.get(key, default)

    def delete(self, key: Any) -> None:
        if not self._provider.update(self.session_id):
            raise SessionNotFoundError(self.session_id)
        with self._store.lock:
            self._store.values.pop(key, None)

    def items(self) -> list[tuple[Any, Any]]:
        """Snapshot of the stored key/value pairs in insertion order."""
        self._provider.update(self.session_id)
        with self._store.lock:
            return list(self._store.values.items())

    def __contains__(self, key: Any) -> bool:
        with self._store.lock:
            return key in self._store.values

    def __repr__(self) -> str:
        return f"<MemorySession keys={len(self._store.values)}>"


class MemoryProvider:
    """Thread-safe in-memory provider with lazy and sweep-based expiry.

    Args:
        max_lifetime: Idle seconds after which a session counts as expired
            on read. ``None`` leaves expiry entirely to ``gc``.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        max_lifetime: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: OrderedDict[str, SessionStore] = OrderedDict()
        self._lock = threading.Lock()
        self._max_lifetime = max_lifetime
        self._clock = clock

    def _expired(self, store: SessionStore, now: float) -> bool:
        return self._max_lifetime is not None and store.idle_for(now) > self._max_lifetime

    def init(self, session_id: str) -> MemorySession:
        if not session_id:
            raise ValueError("session id must not be empty")
        with self._lock:
            now = self._clock()
            existing = self._sessions.get(session_id)
            if existing is not None and not self._expired(existing, now):
                raise SessionExistsError("session id already in use")
            store = SessionStore(session_id=session_id, last_accessed=now)
            self._sessions[session_id] = store
            # replacing an expired entry keeps its old slot otherwise
            self._sessions.move_to_end(session_id)
        return MemorySession(self, store)

    def read(self, session_id: str) -> MemorySession:
        with self._lock:
            now = self._clock()
            store = self._sessions.get(session_id)
            if store is None:
                raise SessionNotFoundError(session_id)
            if self._expired(store, now):
                del self._sessions[session_id]
                logger.debug("Dropped expired session on read")
                raise SessionNotFoundError(session_id)
            store.touch(now)
            self._sessions.move_to_end(session_id)
        return MemorySession(self, store)

    def destroy(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)

    def gc(self, max_lifetime: float) -> int:
        removed = 0
        with self._lock:
            now = self._clock()
            while self._sessions:
                store = next(iter(self._sessions.values()))
                if store.idle_for(now) <= max_lifetime:
                    break
                self._sessions.popitem(last=False)
                removed += 1
        return removed

    def update(self, session_id: str) -> bool:
        """Refresh a session's access time. Returns False if it is gone or expired."""
        with self._lock:
            now = self._clock()
            store = self._sessions.get(session_id)
            if store is None:
                return False
            if self._expired(store, now):
                del self._sessions[session_id]
                logger.debug("Dropped expired session on access")
                return False
            store.touch(now)
            self._sessions.move_to_end(session_id)
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        """Iterate session ids from least to most recently used (a snapshot)."""
        with self._lock:
            return iter(list(self._sessions))


def register(
    registry: ProviderRegistry, name: str = "memory", **kwargs: Any
) -> MemoryProvider:
    """Create a MemoryProvider and register it under ``name``."""
    provider = MemoryProvider(**kwargs)
    registry.register(name, provider)
    return provider
