"""Demo FastAPI application for cookie-bound server-side sessions.

Wires a ProviderRegistry, the in-memory provider and a Manager into an
ASGI app. Periodic GC starts with the app and stops on shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import Settings, get_settings
from .manager import Manager
from .registry import ProviderRegistry
from .routes import health, login, logout
from .session import memory

logger = logging.getLogger(__name__)


def build_manager(s: Settings, registry: ProviderRegistry | None = None) -> Manager:
    """Build a Manager from settings.

    When no registry is given, a fresh one is created with the memory
    provider registered under "memory".
    """
    if registry is None:
        registry = ProviderRegistry()
        memory.register(registry, max_lifetime=s.max_lifetime)
    return Manager(
        s.provider,
        s.cookie_name,
        s.max_lifetime,
        registry=registry,
        gc_interval=s.effective_gc_interval,
        secure=s.https_only,
        same_site=s.same_site,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: begin periodic GC. Shutdown: stop it."""
    manager: Manager = app.state.session_manager
    manager.start_gc()
    logger.info(
        "Sessions: provider=%r cookie=%r max_lifetime=%ss",
        manager.provider_name,
        manager.cookie_name,
        manager.max_lifetime,
    )
    try:
        yield
    finally:
        manager.shutdown()


def create_app(
    *,
    settings: Settings | None = None,
    registry: ProviderRegistry | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Explicit settings (default: from environment).
        registry: Provider registry (default: memory provider only).

    Raises:
        UnknownProviderError: The configured provider is not registered.
    """
    s = settings or get_settings()
    app = FastAPI(title="cookiesession demo", lifespan=lifespan)
    app.state.session_manager = build_manager(s, registry)

    app.include_router(login.router)
    app.include_router(logout.router)
    app.include_router(health.router)

    return app
