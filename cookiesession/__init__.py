"""Server-side sessions bound to an HTTP cookie, with pluggable storage."""

from .errors import (
    RegistrationError,
    SessionError,
    SessionExistsError,
    SessionIdError,
    SessionNotFoundError,
    UnknownProviderError,
)
from .manager import Manager, generate_session_id
from .registry import ProviderRegistry
from .session import MemoryProvider, Provider, Session, SessionStore

__all__ = [
    "Manager",
    "generate_session_id",
    "ProviderRegistry",
    "Provider",
    "Session",
    "SessionStore",
    "MemoryProvider",
    "SessionError",
    "UnknownProviderError",
    "SessionNotFoundError",
    "SessionExistsError",
    "SessionIdError",
    "RegistrationError",
]
