from .backend import Provider, Session, SessionStore
from .memory import MemoryProvider, MemorySession

__all__ = ["Provider", "Session", "SessionStore", "MemoryProvider", "MemorySession"]
