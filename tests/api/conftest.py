"""Shared fixtures for API tests."""

from __future__ import annotations

import httpx
import pytest

from flightabove.api.app import app
from flightabove.api.context import build_context
from flightabove.persistence.credentials import MemoryCredentialStore

GEO_BODY = {"ip": "203.0.113.7", "latitude": 51.4700, "longitude": -0.4543}

FR24_POSITIONS = {
    "data": [
        {"fr24_id": "far1", "callsign": "DLH900", "lat": 52.50, "lon": -0.45, "alt": 36000, "gspeed": 470},
        {"fr24_id": "b2", "callsign": "BAW117", "lat": 51.55, "lon": -0.45, "alt": 8000, "gspeed": 260},
        {"fr24_id": "a1", "callsign": "EZY82", "lat": 51.48, "lon": -0.45, "alt": 3000, "gspeed": 180},
    ]
}


class FakeUpstream:
    """MockTransport handler for geolocation and Flightradar24."""

    def __init__(self):
        self.geo_ok = True
        self.fr24_status = 200
        self.fr24_body: dict = FR24_POSITIONS
        self.requests: list[httpx.Request] = []

    def fr24_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "fr24api.flightradar24.com"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "ipapi.co" and self.geo_ok:
            return httpx.Response(200, json=GEO_BODY)
        if request.url.host == "fr24api.flightradar24.com":
            return httpx.Response(self.fr24_status, json=self.fr24_body)
        return httpx.Response(404)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def credentials():
    return MemoryCredentialStore("test-token")


@pytest.fixture
async def test_app(upstream, credentials, tmp_path):
    """FastAPI app with a context wired to mocked upstream services."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    ctx = build_context(
        settings_path=tmp_path / "settings.json",
        credentials=credentials,
        http_client=http,
    )
    app.state.context = ctx
    yield app
    await ctx.aclose()


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
