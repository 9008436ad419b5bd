"""Shared fixtures for the cookiesession test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cookiesession.config import Settings, override_settings
from cookiesession.main import create_app
from cookiesession.manager import Manager
from cookiesession.registry import ProviderRegistry
from cookiesession.session import MemoryProvider


COOKIE_NAME = "sessionid"
MAX_LIFETIME = 3600


# ── Clock ─────────────────────────────────────────────────────────────────


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ── Provider & Manager ────────────────────────────────────────────────────


@pytest.fixture
def provider(clock) -> MemoryProvider:
    """Memory provider without lazy expiry, so only gc() removes sessions."""
    return MemoryProvider(clock=clock)


@pytest.fixture
def registry(provider) -> ProviderRegistry:
    reg = ProviderRegistry()
    reg.register("memory", provider)
    return reg


@pytest.fixture
def manager(registry) -> Manager:
    m = Manager("memory", COOKIE_NAME, MAX_LIFETIME, registry=registry)
    yield m
    m.shutdown(timeout=1)


# ── App & Client ──────────────────────────────────────────────────────────


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        provider="memory",
        cookie_name=COOKIE_NAME,
        max_lifetime=MAX_LIFETIME,
    )


@pytest.fixture
def app(test_settings, registry):
    override_settings(test_settings)
    yield create_app(settings=test_settings, registry=registry)
    override_settings(None)


@pytest.fixture
def client(app) -> TestClient:
    """TestClient with cookie persistence. Lifespan (and GC) is not started."""
    return TestClient(app, cookies={})


# ── Request / Response helpers ────────────────────────────────────────────


@pytest.fixture
def make_request():
    """Factory for bare Starlette requests, optionally carrying the session cookie."""
    from starlette.requests import Request

    def _make(cookie: str | None = None, cookie_name: str = COOKIE_NAME) -> Request:
        headers = []
        if cookie is not None:
            headers.append((b"cookie", f"{cookie_name}={cookie}".encode()))
        return Request(
            {
                "type": "http",
                "method": "GET",
                "path": "/",
                "query_string": b"",
                "headers": headers,
            }
        )

    return _make


@pytest.fixture
def set_cookie_attrs():
    """Parse the Set-Cookie header of a response into (value, {attr: value})."""

    def _parse(response, cookie_name: str = COOKIE_NAME) -> tuple[str, dict[str, str]]:
        # Starlette headers spell it getlist, httpx get_list
        getlist = getattr(response.headers, "getlist", None) or response.headers.get_list
        for header in getlist("set-cookie"):
            name_value, *attrs = [part.strip() for part in header.split(";")]
            name, _, value = name_value.partition("=")
            if name != cookie_name:
                continue
            parsed = {}
            for attr in attrs:
                key, _, val = attr.partition("=")
                parsed[key.lower()] = val
            return value, parsed
        raise AssertionError(f"no Set-Cookie for {cookie_name!r}")

    return _parse
