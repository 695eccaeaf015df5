"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- clear_settings_cache: Fresh Settings for every test
- api_key_env: GOOGLE_PLACES_API_KEY set in the environment
- no_api_key_env: Every credential source removed
- circle_filter: Wire-format circle filter (1000 m, cafes)
- scripted: Factory for a request-recording httpx handler
- make_client: Factory for an AreaInsightsClient over httpx.MockTransport
"""

import json
from typing import Any, Callable

import httpx
import pytest

from areapulse.collectors.area_insights import AreaInsightsClient
from areapulse.config.settings import get_settings


TEST_API_KEY = "test-api-key"

CAPACITY_MESSAGE = (
    "The request exceeds the maximum number of allowed places. "
    "Please narrow down your search area."
)


def capacity_response() -> httpx.Response:
    """The 429 the service sends when a query would enumerate too many places."""
    return httpx.Response(
        429,
        json={"error": {"code": 429, "message": CAPACITY_MESSAGE, "status": "RESOURCE_EXHAUSTED"}},
    )


def count_response(count: Any, places: list[str] | None = None) -> httpx.Response:
    body: dict[str, Any] = {"count": count}
    if places is not None:
        body["placeInsights"] = [{"place": place} for place in places]
    return httpx.Response(200, json=body)


class ScriptedHandler:
    """httpx handler replaying queued responses and recording requests.

    Queue entries are httpx.Response objects or callables taking the request
    (use these to raise transport errors).
    """

    def __init__(self, responses):
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request #{len(self.requests)}")
        response = self._responses.pop(0)
        if callable(response):
            return response(request)
        return response

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    @property
    def radii(self) -> list[int | None]:
        return [
            body["filter"]["locationFilter"].get("circle", {}).get("radius")
            for body in self.bodies
        ]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def api_key_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", TEST_API_KEY)
    return TEST_API_KEY


@pytest.fixture
def no_api_key_env(monkeypatch, tmp_path):
    """No key in the environment and no .env file in the working directory."""
    monkeypatch.delenv("GOOGLE_PLACES_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def circle_filter() -> dict[str, Any]:
    """Return a 1000 m circle filter for cafes."""
    return {
        "locationFilter": {
            "circle": {
                "latLng": {"latitude": 37.7749, "longitude": -122.4194},
                "radius": 1000,
            }
        },
        "typeFilter": {"includedTypes": ["cafe"]},
    }


@pytest.fixture
def scripted() -> Callable[..., ScriptedHandler]:
    def _make(*responses) -> ScriptedHandler:
        return ScriptedHandler(responses)
    return _make


@pytest.fixture
def make_client() -> Callable[[ScriptedHandler], AreaInsightsClient]:
    def _make(handler) -> AreaInsightsClient:
        return AreaInsightsClient(
            api_key=TEST_API_KEY,
            transport=httpx.MockTransport(handler),
        )
    return _make
