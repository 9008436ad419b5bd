"""Tests for the session dependency wired into a FastAPI app."""

import pytest
from fastapi import Depends, FastAPI, Response
from fastapi.testclient import TestClient

from cookiesession.dependencies import destroy_session, get_session
from cookiesession.main import build_manager
from cookiesession.config import Settings
from cookiesession.session import Session


@pytest.fixture
def simple_app():
    """Minimal app for testing the session dependency in isolation."""
    app = FastAPI()
    app.state.session_manager = build_manager(Settings(cookie_name="sid", max_lifetime=60))

    @app.get("/set")
    def set_value(session: Session = Depends(get_session)):
        session.set("key", "value")
        return {"ok": True}

    @app.get("/get")
    def get_value(session: Session = Depends(get_session)):
        return {"key": session.get("key")}

    @app.get("/delete")
    def delete_value(session: Session = Depends(get_session)):
        session.delete("key")
        return {"ok": True}

    @app.get("/destroy")
    def destroy(_: None = Depends(destroy_session)):
        return {"ok": True}

    return app


@pytest.fixture
def session_client(simple_app):
    return TestClient(simple_app, cookies={})


def test_new_session_sets_cookie(session_client):
    resp = session_client.get("/set")
    assert resp.status_code == 200
    assert "sid" in resp.cookies


def test_session_persists_across_requests(session_client):
    session_client.get("/set")
    resp = session_client.get("/get")
    assert resp.json()["key"] == "value"


def test_existing_session_does_not_reissue_cookie(session_client):
    session_client.get("/set")
    resp = session_client.get("/get")
    assert "set-cookie" not in resp.headers


def test_session_empty_by_default(session_client):
    resp = session_client.get("/get")
    assert resp.json()["key"] is None


def test_delete_removes_value(session_client):
    session_client.get("/set")
    session_client.get("/delete")
    assert session_client.get("/get").json()["key"] is None


def test_session_destroy_clears_data(session_client):
    session_client.get("/set")
    session_client.get("/destroy")
    resp = session_client.get("/get")
    assert resp.json()["key"] is None


def test_session_cookie_attributes(session_client, set_cookie_attrs):
    resp = session_client.get("/set")
    _, attrs = set_cookie_attrs(resp, cookie_name="sid")
    assert "httponly" in attrs
    assert attrs["max-age"] == "60"
    assert attrs["path"] == "/"
    assert attrs["samesite"] == "lax"


def test_invalid_cookie_creates_new_session(session_client):
    session_client.cookies.set("sid", "garbage-value")
    resp = session_client.get("/get")
    assert resp.status_code == 200
    assert resp.json()["key"] is None
    assert resp.cookies.get("sid") not in (None, "garbage-value")


def test_separate_clients_get_separate_sessions(simple_app):
    first = TestClient(simple_app, cookies={})
    second = TestClient(simple_app, cookies={})
    first.get("/set")
    assert second.get("/get").json()["key"] is None
