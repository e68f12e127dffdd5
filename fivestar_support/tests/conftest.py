"""Pytest configuration and fixtures."""

import json

import httpx
import pytest

from fivestar_support.client import FiveStarClient, FiveStarSyncClient
from fivestar_support.config import get_settings

CLIENT_ID = "abc123"
API_URL = "https://x.test"


class FakeServer:
    """Canned responses keyed by (method, path), with a log of received requests."""

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, dict]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, status: int = 200, json_body=None, text=None):
        body = {"text": text} if text is not None else {"json": json_body}
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        status, body = route
        return httpx.Response(status, **body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def server():
    """Create fake FiveStar server."""
    return FakeServer()


@pytest.fixture
def make_client(server):
    """Build an async client wired to the fake server."""

    def _make(**kwargs) -> FiveStarClient:
        kwargs.setdefault("api_url", API_URL)
        return FiveStarClient(CLIENT_ID, transport=httpx.MockTransport(server.handler), **kwargs)

    return _make


@pytest.fixture
def sync_client(server):
    """Create blocking client wired to the fake server."""
    client = FiveStarSyncClient(
        CLIENT_ID, api_url=API_URL, transport=httpx.MockTransport(server.handler)
    )
    try:
        yield client
    finally:
        client.close()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate tests from FIVESTAR_* variables and any local .env file."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "FIVESTAR_CLIENT_ID",
        "FIVESTAR_API_URL",
        "FIVESTAR_TIMEOUT",
        "FIVESTAR_PLATFORM",
        "FIVESTAR_APP_VERSION",
        "FIVESTAR_DEVICE_MODEL",
        "FIVESTAR_OS_VERSION",
        "FIVESTAR_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
