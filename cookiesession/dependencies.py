"""FastAPI dependency injection: manager and session access."""

from __future__ import annotations

from fastapi import Request, Response

from .manager import Manager
from .session import Session


def get_manager(request: Request) -> Manager:
    """Get the session manager created by the application factory."""
    return request.app.state.session_manager


# Plain ``def`` so FastAPI runs it in the threadpool: the manager lock is a
# threading lock and must not be taken on the event loop.
def get_session(request: Request, response: Response) -> Session:
    """Start (or resume) the session for this request."""
    return get_manager(request).session_start(request, response)


def destroy_session(request: Request, response: Response) -> None:
    """Destroy the current session and expire its cookie."""
    get_manager(request).session_destroy(request, response)
