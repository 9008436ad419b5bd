"""Session storage contracts.

A Provider owns every SessionStore it creates. Callers only ever see
Session handles, which are live references into provider-owned state.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(eq=False)
class SessionStore:
    """Data held for one session."""

    session_id: str
    last_accessed: float
    values: dict[Any, Any] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def touch(self, now: float) -> None:
        self.last_accessed = now

    def idle_for(self, now: float) -> float:
        return now - self.last_accessed


@runtime_checkable
class Session(Protocol):
    """Handle used by request code to read and write one session."""

    @property
    def session_id(self) -> str:
        """The session identifier carried in the cookie."""
        ...

    def set(self, key: Any, value: Any) -> None:
        """Store a value. Raises SessionNotFoundError if the session is gone."""
        ...

    def get(self, key: Any, default: Any = None) -> Any:
        """Return a value, or default when the key is absent."""
        ...

    def delete(self, key: Any) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        ...

    def items(self) -> list[tuple[Any, Any]]:
        """Snapshot of the stored key/value pairs in insertion order."""
        ...

    def __contains__(self, key: Any) -> bool: ...


@runtime_checkable
class Provider(Protocol):
    """Protocol for server-side session storage backends."""

    def init(self, session_id: str) -> Session:
        """Create an empty session. Raises SessionExistsError on a live collision."""
        ...

    def read(self, session_id: str) -> Session:
        """Return the session, refreshing its access time.

        Raises SessionNotFoundError if absent or expired.
        """
        ...

    def destroy(self, session_id: str) -> None:
        """Remove a session. Raises SessionNotFoundError if absent."""
        ...

    def gc(self, max_lifetime: float) -> int:
        """Remove sessions idle for more than max_lifetime seconds.

        Returns the number of sessions removed.
        """
        ...
