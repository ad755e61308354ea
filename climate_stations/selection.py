"""
Sidebar state for the selected station.

Each selection is issued a token; a fetch result is applied only while its
token is still the latest one, so the last-initiated click wins regardless
of the order in which responses complete.
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from typing import Callable, Optional, Union

from . import config
from .data import fetch_latest
from .exceptions import StationMapError
from .models import (
    ClimateRecord,
    NotFoundResult,
    SidebarState,
    SidebarView,
    Station,
)
from .presenter import present

logger = logging.getLogger(__name__)

FetchFn = Callable[[str, int], Union[ClimateRecord, NotFoundResult]]

# Shared by the sidebars of every session
_shared_executor = ThreadPoolExecutor(
    max_workers=config.CLIMATE_FETCH_WORKERS, thread_name_prefix="climate-fetch"
)


class ClimateSidebar:
    """Runs per-click climate fetches off the UI thread and owns the sidebar view."""

    def __init__(
        self,
        fetch: FetchFn = fetch_latest,
        year: int = config.QUERY_YEAR,
        executor: Optional[Executor] = None,
    ) -> None:
        self._fetch = fetch
        self._year = year
        self._executor = executor if executor is not None else _shared_executor
        self._lock = threading.Lock()
        self._token = 0
        self._pending: Optional[Future] = None
        self._view = SidebarView(header="", state=SidebarState.IDLE)

    @property
    def view(self) -> SidebarView:
        with self._lock:
            return self._view

    @property
    def executor(self) -> Executor:
        return self._executor

    @property
    def token(self) -> int:
        with self._lock:
            return self._token

    def select(self, station: Station) -> Future:
        """Shows the loading state for `station` and starts fetching its latest record."""
        with self._lock:
            self._token += 1
            token = self._token
            self._view = SidebarView(header=station.name, state=SidebarState.LOADING)
            future = self._executor.submit(self._run, token, station)
            self._pending = future
        logger.info(f"Fetching {self._year} climate data for {station.identifier} ({station.name})")
        return future

    def wait(self, timeout: Optional[float] = None) -> SidebarView:
        """Waits up to `timeout` for the latest fetch to be applied, then returns the view."""
        with self._lock:
            pending = self._pending
        if pending is not None:
            wait([pending], timeout=timeout)
        return self.view

    def _run(self, token: int, station: Station) -> None:
        try:
            result = self._fetch(station.identifier, self._year)
        except StationMapError as e:
            logger.error(f"Error fetching climate data for {station.identifier}: {e}")
            view = SidebarView(header=station.name, state=SidebarState.ERROR)
        else:
            state = SidebarState.NO_DATA if isinstance(result, NotFoundResult) else SidebarState.POPULATED
            view = SidebarView(header=station.name, state=state, payload=present(result))
        self._apply(token, view)

    def _apply(self, token: int, view: SidebarView) -> None:
        with self._lock:
            if token != self._token:
                logger.debug(f"Discarding stale result for {view.header} (token {token}, latest {self._token})")
                return
            self._view = view
