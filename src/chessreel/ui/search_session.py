"""Background archive search orchestration for the UI thread."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from chessreel.archive import HistoryFetcher, filter_games
from chessreel.config import AppSettings
from chessreel.core.models import DateRange, Game, SearchFilters

_LOGGER = logging.getLogger(__name__)


class _SearchCommandBus(QObject):
    search_requested = pyqtSignal(int, str, object, object)


class _SearchWorker(QObject):
    finished = pyqtSignal(int, object)  # request_id, list[Game]
    player_missing = pyqtSignal(int, str)  # request_id, username
    failed = pyqtSignal(int, str)  # request_id, message

    __slots__ = ("_fetcher", "_verify_username")

    def __init__(self, fetcher: HistoryFetcher, *, verify_username: bool) -> None:
        super().__init__()
        self._fetcher = fetcher
        self._verify_username = verify_username

    @pyqtSlot(int, str, object, object)
    def search(
        self,
        request_id: int,
        username: str,
        range_obj: object,
        filters_obj: object,
    ) -> None:
        if not isinstance(range_obj, DateRange):
            self.failed.emit(request_id, "Invalid date range")
            return
        if not isinstance(filters_obj, SearchFilters):
            self.failed.emit(request_id, "Invalid search filters")
            return

        try:
            games = asyncio.run(self._run(username, range_obj))
        except Exception as exc:
            _LOGGER.exception("Search for %s failed", username)
            self.failed.emit(request_id, str(exc))
            return

        if games is None:
            self.player_missing.emit(request_id, username)
            return
        self.finished.emit(request_id, filter_games(games, username, filters_obj))

    async def _run(self, username: str, date_range: DateRange) -> list[Game] | None:
        if self._verify_username and not await self._fetcher.player_exists(username):
            return None
        return await self._fetcher.fetch(username, date_range)


class SearchSession:
    """Owns worker-thread lifecycle for archive searches.

    Each search gets a fresh request id; results of any earlier request
    are dropped when they arrive.
    """

    __slots__ = (
        "__weakref__",
        "_on_finished",
        "_on_failed",
        "_on_player_missing",
        "_command_bus",
        "_thread",
        "_worker",
        "_is_started",
        "_is_shutting_down",
        "_pending_request_id",
        "_next_request_id",
    )

    def __init__(
        self,
        *,
        on_finished: Callable[[list[Game]], None],
        on_failed: Callable[[str], None],
        on_player_missing: Callable[[str], None],
        settings: AppSettings | None = None,
        fetcher: HistoryFetcher | None = None,
        parent: QObject | None = None,
    ) -> None:
        settings = settings or AppSettings()
        self._on_finished = on_finished
        self._on_failed = on_failed
        self._on_player_missing = on_player_missing

        self._command_bus = _SearchCommandBus(parent)
        self._thread = QThread(parent)
        self._worker = _SearchWorker(
            fetcher or HistoryFetcher(settings),
            verify_username=settings.verify_username,
        )
        self._is_started = False
        self._is_shutting_down = False
        self._pending_request_id: int | None = None
        self._next_request_id = 0

    @property
    def is_searching(self) -> bool:
        return self._pending_request_id is not None

    def setup(self) -> None:
        """Start worker thread and connect cross-thread signals."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._worker.moveToThread(self._thread)
        self._command_bus.search_requested.connect(self._worker.search)
        self._worker.finished.connect(self._on_worker_finished)
        self._worker.failed.connect(self._on_worker_failed)
        self._worker.player_missing.connect(self._on_worker_player_missing)
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Forget pending work and stop the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel_search()
        self._thread.quit()
        self._thread.wait(2000)
        self._is_started = False

    def start_search(
        self,
        username: str,
        date_range: DateRange,
        filters: SearchFilters,
    ) -> int | None:
        """Queue a search; returns its request id, or ``None`` if refused."""
        username = username.strip()
        if not username:
            return None
        if not self._is_started:
            self.setup()
        if self._is_shutting_down:
            return None

        self._next_request_id += 1
        request_id = self._next_request_id
        self._pending_request_id = request_id
        self._command_bus.search_requested.emit(
            request_id,
            username,
            date_range,
            filters,
        )
        return request_id

    def cancel_search(self) -> None:
        """Discard the result of any in-flight search."""
        self._pending_request_id = None

    def _accepts(self, request_id: int) -> bool:
        if self._is_shutting_down:
            return False
        return request_id == self._pending_request_id

    def _on_worker_finished(self, request_id: int, games_obj: object) -> None:
        if not self._accepts(request_id):
            _LOGGER.debug("Dropping stale search result %d", request_id)
            return
        self._pending_request_id = None
        if not isinstance(games_obj, list):
            self._on_failed("Search worker produced invalid result")
            return
        self._on_finished(games_obj)

    def _on_worker_failed(self, request_id: int, message: str) -> None:
        if not self._accepts(request_id):
            return
        self._pending_request_id = None
        self._on_failed(message)

    def _on_worker_player_missing(self, request_id: int, username: str) -> None:
        if not self._accepts(request_id):
            return
        self._pending_request_id = None
        self._on_player_missing(username)
