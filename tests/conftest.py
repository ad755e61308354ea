"""Shared fixtures: fake HTTP responses and Streamlit cache isolation."""

from __future__ import annotations

from typing import Any

import pytest

from climate_stations.data import fetchers

NOT_JSON = object()


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self.payload is NOT_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


def station_feature(
    identifier: Any = "7025250",
    name: str = "MONTREAL/PIERRE ELLIOTT TRUDEAU INTL",
    province: str = "QC",
    elevation: Any = 36.0,
    lon: float = -73.75,
    lat: float = 45.47,
) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": {
            "STATION_NAME": name,
            "PROVINCE_CODE": province,
            "CLIMATE_IDENTIFIER": identifier,
            "ELEVATION": elevation,
        },
    }


def climate_feature(**overrides: Any) -> dict[str, Any]:
    props = {
        "CLIMATE_IDENTIFIER": "7025250",
        "LOCAL_DATE": "2020-12-31 00:00:00",
        "LOCAL_YEAR": 2020,
        "MAX_TEMPERATURE": -2.1,
        "MIN_TEMPERATURE": -9.4,
        "MEAN_TEMPERATURE": -5.8,
        "TOTAL_PRECIPITATION": 3.2,
        "TOTAL_RAIN": 0.0,
        "TOTAL_SNOW": 3.4,
    }
    props.update(overrides)
    return {"type": "Feature", "properties": props}


@pytest.fixture(autouse=True)
def clear_station_cache():
    fetchers.fetch_station_collection.clear()
    yield
    fetchers.fetch_station_collection.clear()


@pytest.fixture
def http(monkeypatch):
    """Replaces requests.get; queue responses with `http.respond(...)`, inspect `http.calls`."""

    class _Http:
        def __init__(self) -> None:
            self.calls: list[dict[str, Any]] = []
            self.responses: list[Any] = []

        def respond(self, payload: Any = None, status_code: int = 200) -> None:
            self.responses.append(FakeResponse(payload, status_code))

        def fail(self, exc: Exception) -> None:
            self.responses.append(exc)

        def get(self, url: str, params: Any = None, **kwargs: Any) -> FakeResponse:
            self.calls.append({"url": url, "params": params, **kwargs})
            nxt = self.responses.pop(0)
            if isinstance(nxt, Exception):
                raise nxt
            return nxt

    fake = _Http()
    monkeypatch.setattr(fetchers.requests, "get", fake.get)
    return fake
