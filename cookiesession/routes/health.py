"""GET /health: Liveness check."""

from fastapi import APIRouter, Depends

from ..dependencies import get_manager
from ..manager import Manager

router = APIRouter()


@router.get("/health")
def health(manager: Manager = Depends(get_manager)):
    return {
        "status": "ok",
        "provider": manager.provider_name,
        "sessions": manager.active_sessions(),
        "gc": "running" if manager.gc_running else "stopped",
    }
