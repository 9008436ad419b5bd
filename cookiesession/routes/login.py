"""GET/POST /login: Demo login backed by the session."""

import logging
import re

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from ..dependencies import get_session
from ..session import Session

logger = logging.getLogger(__name__)

router = APIRouter()

USERNAME_RE = re.compile(r"^[a-z]{3}$")


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


@router.get("/login")
def show_login(session: Session = Depends(get_session)):
    return {"username": session.get("username")}


@router.post("/login")
def login(
    body: LoginRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    # Errors go through the injected response so the session cookie survives.
    if not body.username:
        response.status_code = 400
        return {"error": "the username can not be null"}
    if not USERNAME_RE.match(body.username):
        response.status_code = 400
        return {"error": "the username is invalid"}

    session.set("username", body.username)
    logger.info("Login stored for username %r", body.username)
    return {"success": True, "username": body.username}
