"""POST /logout: Destroy session."""

from fastapi import APIRouter, Depends

from ..dependencies import destroy_session

router = APIRouter()


@router.post("/logout")
def logout(_destroyed: None = Depends(destroy_session)):
    return {"success": True}
