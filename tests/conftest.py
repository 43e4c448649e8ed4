"""Shared pytest fixtures for environmental data client tests."""

from __future__ import annotations

import json
from typing import Any, Dict, Generator, List, Optional

import pytest

from envdata.clients.envdata.client import HTTPResponse


class MockHTTPClient:
    """Records POST calls and replays queued responses in order."""

    def __init__(self, responses: Optional[List[HTTPResponse]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def post(
        self,
        url: str,
        headers: Dict[str, str],
        json_body: Dict[str, Any],
        timeout: Optional[float],
    ) -> HTTPResponse:
        self.calls.append({
            "url": url,
            "headers": headers,
            "json_body": json_body,
            "timeout": timeout,
        })
        if self.responses:
            return self.responses.pop(0)
        return envelope_response([])

    def close(self) -> None:
        self.closed = True


def envelope_response(message: Any, success: int = 1, status_code: int = 200) -> HTTPResponse:
    """Build an HTTP response carrying a literal ``{success, message}`` envelope."""
    return HTTPResponse(
        status_code=status_code,
        text=json.dumps({"success": success, "message": message}),
    )


STATIONS_FIXTURE = [
    {"id": 1, "name": "Riverside Park", "code": "RVP01", "measures": "pm10,ozone,temperature"},
    {"id": 2, "name": "Harbour Gauge", "code": "HBG02", "measures": '["ph", "turbidity"]'},
]

MEASURES_FIXTURE = ["pm10", "ozone", "temperature"]

VALUES_FIXTURE = [
    {"date_entry": "2024-05-01 10:00:00", "ozone": 41.5},
    {"date_entry": "2024-05-01 11:00:00", "ozone": "43.0"},
    {"date_entry": "2024-05-01 12:00:00", "ozone": None},
]

EDITORIALS_FIXTURE = [
    {
        "id": 7,
        "title": "Ozone season",
        "description": "Summer ozone peaks explained.",
        "image": "/media/ozone.jpg",
        "link": None,
        "lat": "45.4642",
        "lng": "9.19",
        "cats": '["0"]',
        "stations": '["RVP01"]',
        "measures": '["ozone"]',
    }
]

MEASURE_EDITORIALS_FIXTURE = [
    {"id": 1, "measure": "ozone", "title": "Ozone", "description": "Tropospheric ozone.", "unit": "ug/m3"},
    {"id": 2, "measure": "ph", "title": "pH", "description": "Acidity of water.", "unit": None},
]


@pytest.fixture
def mock_http() -> MockHTTPClient:
    return MockHTTPClient()


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove all client env vars for isolated testing."""
    for var in (
        "ENVDATA_API_URL",
        "ENVDATA_TIMEOUT",
        "ENVDATA_VALIDATE_PAYLOADS",
        "ENVDATA_LOG_LEVEL",
        "NO_COLOR",
        "FORCE_COLOR",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings singleton between tests to ensure isolation."""
    from envdata.config import reset_settings

    reset_settings()
    yield
    reset_settings()
