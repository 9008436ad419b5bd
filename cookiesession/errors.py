"""Exception types raised by the session layer."""

from __future__ import annotations


class SessionError(Exception):
    """Base class for recoverable session errors."""


class UnknownProviderError(SessionError, LookupError):
    """No provider is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"session: unknown provider {name!r} (forgotten register call?)")
        self.name = name


class SessionNotFoundError(SessionError, KeyError):
    """The session identifier is absent or has expired."""

    def __init__(self, session_id: str) -> None:
        super().__init__("session not found")
        self.session_id = session_id

    def __str__(self) -> str:
        # KeyError would repr() the args
        return "session not found"


class SessionExistsError(SessionError):
    """A live session already uses the identifier passed to init."""


class SessionIdError(SessionError):
    """The random source could not produce a session identifier."""


class RegistrationError(RuntimeError):
    """Invalid or duplicate provider registration.

    Raised at startup only. This is a programming error, so it is kept out
    of the SessionError hierarchy and should not be caught.
    """
