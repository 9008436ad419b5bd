"""Structured session lifecycle events.

Events are logged to the ``cookiesession.events`` logger as one JSON
object per line. Consumers attach their own handlers (JSON formatter,
log shipper, structlog, etc.). Session identifiers are bearer secrets, so
events only carry a short SHA-256 fingerprint of them.

Usage::

    from . import events
    events.session_event(
        activity_id=events.Activity.CREATE,
        session_id=sid,
        message="New session issued",
    )
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from typing import Any

logger = logging.getLogger("cookiesession.events")


class Activity:
    CREATE = 1
    EXPIRE = 2  # cookie presented for a session that no longer exists
    DESTROY = 3
    SWEEP = 4
    OTHER = 99


class Status:
    SUCCESS = 1
    FAILURE = 2


class Severity:
    INFORMATIONAL = 1
    LOW = 2
    MEDIUM = 3
    HIGH = 4


_ACTIVITY_NAMES = {
    Activity.CREATE: "Create",
    Activity.EXPIRE: "Expire",
    Activity.DESTROY: "Destroy",
    Activity.SWEEP: "Sweep",
    Activity.OTHER: "Other",
}

_SEVERITY_NAMES = {
    Severity.INFORMATIONAL: "Informational",
    Severity.LOW: "Low",
    Severity.MEDIUM: "Medium",
    Severity.HIGH: "High",
}

_PRODUCT = {
    "name": "cookiesession",
    "version": "0.1.0",
}


def fingerprint(session_id: str) -> str:
    """Short, non-reversible tag for correlating events about one session."""
    return hashlib.sha256(session_id.encode()).hexdigest()[:12]


# ── Core emit ──────────────────────────────────────────────────────────────


def emit(event: dict[str, Any]) -> None:
    """Log an event as JSON. Never raises."""
    try:
        logger.info(json.dumps(event, default=str))
    except Exception:
        logger.debug("Dropped unserializable session event", exc_info=True)


# ── Event builders ─────────────────────────────────────────────────────────


def session_event(
    *,
    activity_id: int,
    session_id: str | None = None,
    status_id: int = Status.SUCCESS,
    severity_id: int = Severity.INFORMATIONAL,
    provider: str | None = None,
    message: str = "",
    extra_metadata: dict[str, Any] | None = None,
) -> None:
    """Emit a session lifecycle event."""
    event: dict[str, Any] = {
        "class_name": "Session Activity",
        "activity_id": activity_id,
        "activity_name": _ACTIVITY_NAMES.get(activity_id, "Unknown"),
        "severity_id": severity_id,
        "severity": _SEVERITY_NAMES.get(severity_id, "Unknown"),
        "status_id": status_id,
        "status": "Success" if status_id == Status.SUCCESS else "Failure",
        "time": int(time.time() * 1000),
        "metadata": {
            "product": _PRODUCT,
            **(extra_metadata or {}),
        },
        "message": message,
    }
    if session_id:
        event["session"] = {"uid_hash": fingerprint(session_id)}
    if provider:
        event["session"] = {**event.get("session", {}), "provider": provider}
    emit(event)


def sweep_event(*, provider: str, removed: int, remaining: int | None = None) -> None:
    """Emit a GC sweep summary."""
    metadata: dict[str, Any] = {"removed": removed}
    if remaining is not None:
        metadata["remaining"] = remaining
    session_event(
        activity_id=Activity.SWEEP,
        provider=provider,
        message=f"GC sweep removed {removed} expired sessions",
        extra_metadata={"sweep": metadata},
    )
