# ABOUTME: Shared test fixtures for the Weathercloud client test suite.
# ABOUTME: Provides sample payloads, a routed mock HTTP client, and operation contexts.

from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from weathercloud.config import DEFAULT_BASE_URL, Settings
from weathercloud.deps import WeathercloudDeps
from weathercloud.session import Session

EPOCH = 1700000000


def make_response(json_data: Any = None, status_code: int = 200, headers: list | None = None) -> httpx.Response:
    """Build an httpx.Response carrying a JSON body."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        headers=headers,
        request=httpx.Request("GET", "https://test"),
    )


@pytest.fixture
def values_payload() -> dict:
    return {
        "temp": 12.5,
        "dew": 8.0,
        "bar": 1012.3,
        "hum": 74,
        "rainrate": 0,
        "wspd": 3.2,
        "wdir": 180,
        "epoch": EPOCH,
    }


@pytest.fixture
def update_payload() -> dict:
    return {"update": 95, "server": "eu-1"}


@pytest.fixture
def profile_payload() -> dict:
    return {"observer": "Jane", "city": "Madrid", "altitude": 650}


@pytest.fixture
def routed_client():
    """Factory for a mock httpx.AsyncClient answering each URL path with a fixed JSON payload."""

    def _factory(routes: dict[str, Any]) -> httpx.AsyncClient:
        mock = AsyncMock(spec=httpx.AsyncClient)

        def respond(url, **kwargs):
            return make_response(routes[url.removeprefix(DEFAULT_BASE_URL)])

        mock.get.side_effect = respond
        mock.post.side_effect = respond
        return mock

    return _factory


@pytest.fixture
def make_deps():
    """Factory for a WeathercloudDeps around a client, with an optional logged-in session."""

    def _factory(client: httpx.AsyncClient, cookies: list[str] | None = None, store=None) -> WeathercloudDeps:
        session = Session()
        if cookies:
            session.set_cookies(cookies)
        return WeathercloudDeps(http_client=client, session=session, settings=Settings(), store=store)

    return _factory


@pytest.fixture
def json_response():
    """Factory building an httpx.Response with a JSON body, status code and headers."""
    return make_response
