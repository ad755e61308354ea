"""Sidebar state transitions and last-initiated-wins selection."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from climate_stations import config
from climate_stations.exceptions import FetchError, ParseError
from climate_stations.models import ClimateRecord, NotFoundResult, SidebarState, Station
from climate_stations.selection import ClimateSidebar

STATION_A = Station("7025250", "MONTREAL INTL A", "QC", 36.0, 45.47, -73.75)
STATION_B = Station("1108447", "VANCOUVER INTL A", "BC", 4.3, 49.19, -123.18)


def _record(station_id: str, day: int = 31) -> ClimateRecord:
    return ClimateRecord(station_id=station_id, observation_date=date(2020, 12, day), max_temperature=1.5)


@pytest.fixture
def make_sidebar():
    pool = ThreadPoolExecutor(max_workers=4)

    def _make(fetch, **kwargs):
        return ClimateSidebar(fetch=fetch, executor=pool, **kwargs)

    yield _make
    pool.shutdown(wait=False)


def test_starts_idle(make_sidebar) -> None:
    sidebar = make_sidebar(lambda sid, year: _record(sid))

    assert sidebar.view.state is SidebarState.IDLE
    assert sidebar.view.header == ""


def test_select_shows_loading_until_fetch_resolves(make_sidebar) -> None:
    release = threading.Event()

    def fetch(sid, year):
        release.wait(5)
        return _record(sid)

    sidebar = make_sidebar(fetch)
    future = sidebar.select(STATION_A)

    assert sidebar.view.header == STATION_A.name
    assert sidebar.view.state is SidebarState.LOADING

    release.set()
    future.result(timeout=5)
    assert sidebar.view.state is SidebarState.POPULATED


def test_record_populates_payload(make_sidebar) -> None:
    calls = []

    def fetch(sid, year):
        calls.append((sid, year))
        return _record(sid)

    sidebar = make_sidebar(fetch)
    sidebar.select(STATION_A).result(timeout=5)

    view = sidebar.view
    assert calls == [("7025250", config.QUERY_YEAR)]
    assert view.state is SidebarState.POPULATED
    assert [e.label for e in view.payload] == ["Date", "Max Temp"]


def test_year_is_passed_through(make_sidebar) -> None:
    seen = []
    sidebar = make_sidebar(lambda sid, year: seen.append(year) or _record(sid), year=2019)

    sidebar.select(STATION_A).result(timeout=5)

    assert seen == [2019]


def test_not_found_shows_no_data_state(make_sidebar) -> None:
    sidebar = make_sidebar(lambda sid, year: NotFoundResult(sid, year))

    sidebar.select(STATION_A).result(timeout=5)

    assert sidebar.view.state is SidebarState.NO_DATA
    assert sidebar.view.payload[0].value == config.NO_DATA_MESSAGE


@pytest.mark.parametrize("exc", [FetchError("HTTP 500", status_code=500), ParseError("bad body")])
def test_fetch_failure_replaces_loading_with_error(make_sidebar, caplog, exc) -> None:
    def fetch(sid, year):
        raise exc

    sidebar = make_sidebar(fetch)
    sidebar.select(STATION_A).result(timeout=5)

    assert sidebar.view.state is SidebarState.ERROR
    assert sidebar.view.header == STATION_A.name
    assert sidebar.view.payload == ()
    assert "Error fetching climate data for 7025250" in caplog.text


def test_later_click_wins_when_it_resolves_first(make_sidebar) -> None:
    release_a = threading.Event()

    def fetch(sid, year):
        if sid == STATION_A.identifier:
            release_a.wait(5)
            return _record(sid, day=30)
        return _record(sid, day=31)

    sidebar = make_sidebar(fetch)
    future_a = sidebar.select(STATION_A)
    future_b = sidebar.select(STATION_B)

    future_b.result(timeout=5)
    assert sidebar.view.header == STATION_B.name

    release_a.set()
    future_a.result(timeout=5)

    view = sidebar.view
    assert view.header == STATION_B.name
    assert view.state is SidebarState.POPULATED
    assert view.payload[0].value == "2020-12-31"


def test_later_click_wins_when_it_resolves_last(make_sidebar) -> None:
    release_b = threading.Event()

    def fetch(sid, year):
        if sid == STATION_B.identifier:
            release_b.wait(5)
        return _record(sid)

    sidebar = make_sidebar(fetch)
    future_a = sidebar.select(STATION_A)
    future_b = sidebar.select(STATION_B)

    future_a.result(timeout=5)
    assert sidebar.view.state is SidebarState.LOADING
    assert sidebar.view.header == STATION_B.name

    release_b.set()
    future_b.result(timeout=5)
    assert sidebar.view.state is SidebarState.POPULATED
    assert sidebar.view.header == STATION_B.name


def test_each_select_issues_a_new_token(make_sidebar) -> None:
    sidebar = make_sidebar(lambda sid, year: _record(sid))

    sidebar.select(STATION_A).result(timeout=5)
    sidebar.select(STATION_A).result(timeout=5)

    assert sidebar.token == 2


def test_wait_returns_applied_view(make_sidebar) -> None:
    sidebar = make_sidebar(lambda sid, year: NotFoundResult(sid, year))

    sidebar.select(STATION_B)
    view = sidebar.wait(timeout=5)

    assert view.state is SidebarState.NO_DATA


def test_sessions_share_one_fetch_pool() -> None:
    first = ClimateSidebar(fetch=lambda sid, year: _record(sid))
    second = ClimateSidebar(fetch=lambda sid, year: _record(sid))

    assert first.executor is second.executor


def test_wait_is_bounded_by_timeout(make_sidebar) -> None:
    release = threading.Event()

    def fetch(sid, year):
        release.wait(5)
        return _record(sid)

    sidebar = make_sidebar(fetch)
    future = sidebar.select(STATION_A)

    view = sidebar.wait(timeout=0.05)

    assert view.state is SidebarState.LOADING
    release.set()
    future.result(timeout=5)
