"""Named registry of session providers.

The composition root owns one ProviderRegistry and hands it to the
Manager. Backend modules register into it through an explicit call such
as ``memory.register(registry)`` at startup.
"""

from __future__ import annotations

import logging
import threading

from .errors import RegistrationError, UnknownProviderError
from .session.backend import Provider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}
        self._lock = threading.Lock()

    def register(self, name: str, provider: Provider) -> None:
        """Register a backend under a unique name.

        Raises RegistrationError for a missing or invalid provider or a
        duplicate name.
        """
        if provider is None:
            raise RegistrationError("session: register provider is None")
        if not isinstance(provider, Provider):
            raise RegistrationError(
                f"session: {type(provider).__name__} does not implement the provider interface"
            )
        with self._lock:
            if name in self._providers:
                raise RegistrationError(f"session: register called twice for provider {name!r}")
            self._providers[name] = provider
        logger.debug("Registered session provider %r (%s)", name, type(provider).__name__)

    def lookup(self, name: str) -> Provider:
        with self._lock:
            try:
                return self._providers[name]
            except KeyError:
                raise UnknownProviderError(name) from None

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._providers
