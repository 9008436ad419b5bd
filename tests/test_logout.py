"""Tests for POST /logout."""


def test_logout_destroys_session(client):
    resp = client.post("/login", json={"username": "bob", "password": "pw"})
    assert resp.status_code == 200
    assert client.get("/login").json()["username"] == "bob"

    resp = client.post("/logout")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    assert client.get("/login").json()["username"] is None


def test_logout_without_session(client):
    """Logging out without a session should still succeed."""
    resp = client.post("/logout")
    assert resp.status_code == 200
    assert "set-cookie" not in resp.headers


def test_logout_expires_session_cookie(client, set_cookie_attrs):
    client.get("/login")
    resp = client.post("/logout")
    _, attrs = set_cookie_attrs(resp)
    assert attrs["max-age"] == "-1"
    assert "1970" in attrs["expires"]


def test_logout_removes_session_from_provider(client, provider):
    client.get("/login")
    assert provider.count() == 1
    client.post("/logout")
    assert provider.count() == 0


def test_old_cookie_after_logout_gets_fresh_session(client, provider):
    client.post("/login", json={"username": "bob", "password": "pw"})
    old_cookie = client.cookies.get("sessionid")
    client.post("/logout")

    client.cookies.set("sessionid", old_cookie)
    resp = client.get("/login")
    assert resp.json()["username"] is None
    assert resp.cookies.get("sessionid") not in (None, old_cookie)
