"""Tests for SearchSession wiring and stale-result handling."""

from __future__ import annotations

import time
import weakref

from PyQt6.QtWidgets import QApplication

from chessreel.config import AppSettings
from chessreel.core.models import DateRange, Game, PlayerSide, SearchFilters
from chessreel.ui.search_session import SearchSession, _SearchWorker


def _game(url: str, result: str) -> Game:
    return Game(
        url=url,
        pgn="1. e4 *",
        end_time=0,
        time_class="blitz",
        white=PlayerSide("alice", result=result),
        black=PlayerSide("bob"),
    )


class _StubFetcher:
    def __init__(
        self,
        games: list[Game] | None = None,
        *,
        exists: bool = True,
        error: Exception | None = None,
    ) -> None:
        self._games = games or []
        self._exists = exists
        self._error = error
        self.fetch_calls: list[tuple[str, DateRange]] = []
        self.probes: list[str] = []

    async def fetch(self, username: str, date_range: DateRange) -> list[Game]:
        self.fetch_calls.append((username, date_range))
        if self._error is not None:
            raise self._error
        return list(self._games)

    async def player_exists(self, username: str) -> bool:
        self.probes.append(username)
        return self._exists


class _Recorder:
    def __init__(self) -> None:
        self.finished: list[list[Game]] = []
        self.failed: list[str] = []
        self.missing: list[str] = []

    def session(self, fetcher: _StubFetcher, **settings: object) -> SearchSession:
        return SearchSession(
            on_finished=self.finished.append,
            on_failed=self.failed.append,
            on_player_missing=self.missing.append,
            settings=AppSettings(**settings),  # type: ignore[arg-type]
            fetcher=fetcher,  # type: ignore[arg-type]
        )


def _worker_signals(worker: _SearchWorker) -> list[tuple[str, tuple[object, ...]]]:
    emitted: list[tuple[str, tuple[object, ...]]] = []
    worker.finished.connect(lambda *args: emitted.append(("finished", args)))
    worker.failed.connect(lambda *args: emitted.append(("failed", args)))
    worker.player_missing.connect(lambda *args: emitted.append(("missing", args)))
    return emitted


_RANGE = DateRange.single_month(2024, 1)


class TestSearchWorker:
    def test_search_filters_fetched_games(self) -> None:
        fetcher = _StubFetcher([_game("w", "win"), _game("l", "resigned")])
        worker = _SearchWorker(fetcher, verify_username=True)  # type: ignore[arg-type]
        emitted = _worker_signals(worker)

        worker.search(3, "alice", _RANGE, SearchFilters(result="win"))

        assert fetcher.probes == ["alice"]
        ((name, (request_id, games)),) = emitted
        assert (name, request_id) == ("finished", 3)
        assert [g.url for g in games] == ["w"]

    def test_unknown_player_is_reported_without_fetching(self) -> None:
        fetcher = _StubFetcher(exists=False)
        worker = _SearchWorker(fetcher, verify_username=True)  # type: ignore[arg-type]
        emitted = _worker_signals(worker)

        worker.search(1, "ghost", _RANGE, SearchFilters())

        assert emitted == [("missing", (1, "ghost"))]
        assert fetcher.fetch_calls == []

    def test_probe_can_be_disabled(self) -> None:
        fetcher = _StubFetcher([_game("w", "win")], exists=False)
        worker = _SearchWorker(fetcher, verify_username=False)  # type: ignore[arg-type]
        emitted = _worker_signals(worker)

        worker.search(1, "alice", _RANGE, SearchFilters())

        assert fetcher.probes == []
        assert emitted[0][0] == "finished"

    def test_unexpected_error_becomes_failed_signal(self) -> None:
        fetcher = _StubFetcher(error=RuntimeError("network down"))
        worker = _SearchWorker(fetcher, verify_username=False)  # type: ignore[arg-type]
        emitted = _worker_signals(worker)

        worker.search(5, "alice", _RANGE, SearchFilters())

        assert emitted == [("failed", (5, "network down"))]

    def test_bad_arguments_fail_fast(self) -> None:
        worker = _SearchWorker(_StubFetcher(), verify_username=False)  # type: ignore[arg-type]
        emitted = _worker_signals(worker)

        worker.search(1, "alice", "2024-01", SearchFilters())
        worker.search(2, "alice", _RANGE, {"result": "win"})

        assert [name for name, _ in emitted] == ["failed", "failed"]


class TestSearchSession:
    def test_setup_connects_slots_without_weakref_error(self) -> None:
        session = _Recorder().session(_StubFetcher())
        assert weakref.ref(session)() is session

        session.setup()
        session.setup()
        assert session._is_started is True
        session.shutdown()
        assert session._is_started is False

    def test_blank_username_is_refused(self) -> None:
        session = _Recorder().session(_StubFetcher())

        assert session.start_search("   ", _RANGE, SearchFilters()) is None
        assert not session.is_searching
        assert session._is_started is False

    def test_only_latest_request_is_delivered(self) -> None:
        recorder = _Recorder()
        session = recorder.session(_StubFetcher())
        session._pending_request_id = 2

        session._on_worker_finished(1, [_game("old", "win")])
        session._on_worker_failed(1, "old failure")
        session._on_worker_player_missing(1, "old")
        assert (recorder.finished, recorder.failed, recorder.missing) == ([], [], [])

        session._on_worker_finished(2, [_game("new", "win")])
        assert [g.url for g in recorder.finished[0]] == ["new"]
        assert not session.is_searching

    def test_cancel_drops_in_flight_result(self) -> None:
        recorder = _Recorder()
        session = recorder.session(_StubFetcher())
        session._pending_request_id = 4

        session.cancel_search()
        session._on_worker_finished(4, [])

        assert recorder.finished == []

    def test_invalid_worker_payload_reports_failure(self) -> None:
        recorder = _Recorder()
        session = recorder.session(_StubFetcher())
        session._pending_request_id = 1

        session._on_worker_finished(1, "not a list")

        assert recorder.failed == ["Search worker produced invalid result"]

    def test_search_runs_on_worker_thread(self) -> None:
        recorder = _Recorder()
        fetcher = _StubFetcher([_game("w", "win")])
        session = recorder.session(fetcher, verify_username=False)

        request_id = session.start_search(" alice ", _RANGE, SearchFilters())
        assert request_id == 1
        assert session.is_searching

        deadline = time.monotonic() + 5.0
        while not recorder.finished and time.monotonic() < deadline:
            QApplication.processEvents()
            time.sleep(0.01)
        session.shutdown()

        assert fetcher.fetch_calls == [("alice", _RANGE)]
        assert [g.url for g in recorder.finished[0]] == ["w"]
