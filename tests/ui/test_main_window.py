"""Tests for MainWindow search, selection and replay wiring."""

from __future__ import annotations

import time
from collections.abc import Iterator

import pytest
from PyQt6.QtWidgets import QApplication

from chessreel.analysis import GameAnalysis
from chessreel.config import AppSettings
from chessreel.core.models import DateRange, Game, PlayerSide
from chessreel.core.rules import STARTING_FEN
from chessreel.replay.input import ReplayCommand
from chessreel.replay.sounds import SoundCue
from chessreel.ui.i18n import t
from chessreel.ui.main_window import MainWindow

SCHOLARS_MATE = "1. e4 e5 2. Bc4 Nc6 3. Qh5 Nf6 4. Qxf7# 1-0"


class _StubSounds:
    def __init__(self) -> None:
        self.played: list[SoundCue] = []

    def play(self, cue: SoundCue) -> None:
        self.played.append(cue)

    def release(self) -> None:
        pass


class _StubFetcher:
    async def fetch(self, _username: str, _date_range: DateRange) -> list[Game]:
        return []

    async def player_exists(self, _username: str) -> bool:
        return True


class _StubAnalyzer:
    def __init__(self) -> None:
        self.seen: list[str] = []

    def analyze(self, pgn: str, *, is_cancelled=None, on_progress=None) -> GameAnalysis:
        self.seen.append(pgn)
        return GameAnalysis(summary="Reviewed.")


def _game(url: str, pgn: str, *, white: str = "alice", black: str = "bob") -> Game:
    return Game(
        url=url,
        pgn=pgn,
        end_time=0,
        time_class="blitz",
        white=PlayerSide(white, result="win"),
        black=PlayerSide(black, result="checkmated"),
    )


@pytest.fixture()
def sounds() -> _StubSounds:
    return _StubSounds()


@pytest.fixture()
def analyzer() -> _StubAnalyzer:
    return _StubAnalyzer()


@pytest.fixture()
def window(sounds: _StubSounds, analyzer: _StubAnalyzer) -> Iterator[MainWindow]:
    window = MainWindow(
        AppSettings(verify_username=False),
        fetcher=_StubFetcher(),  # type: ignore[arg-type]
        analyzer=analyzer,  # type: ignore[arg-type]
        sound_player=sounds,
    )
    window._username = "alice"
    yield window
    window.close()


def _show_results(window: MainWindow, games: list[Game]) -> None:
    window._on_search_finished(games)


class TestMainWindowSearch:
    def test_starts_on_search_page(self, window: MainWindow) -> None:
        assert not window.on_replay_page
        assert window.selected_game is None
        assert not any(s.isEnabled() for s in window._shortcuts)

    def test_results_switch_to_replay_page(self, window: MainWindow) -> None:
        _show_results(window, [_game("a", SCHOLARS_MATE)])

        assert window.on_replay_page
        assert window._status_label.text() == t().status_found.format(count=1)
        assert all(s.isEnabled() for s in window._shortcuts)

    def test_player_missing_and_failure_stay_on_search_page(self, window: MainWindow) -> None:
        window._on_player_missing("ghost")
        assert window._status_label.text() == t().status_player_not_found.format(user="ghost")

        window._on_search_failed("timeout")
        assert not window.on_replay_page
        assert "timeout" in window._status_label.text()

    def test_new_search_resets_replay(self, window: MainWindow) -> None:
        _show_results(window, [_game("a", SCHOLARS_MATE)])
        window._game_list.select_index(0)
        window.engine.jump_to_end()

        window._on_new_search()

        assert not window.on_replay_page
        assert window.selected_game is None
        assert window.engine.ply_count == 0
        assert window.engine.fen == STARTING_FEN
        assert window._game_list.games == []


class TestMainWindowReplay:
    def test_selecting_game_loads_replay(self, window: MainWindow) -> None:
        game = _game("a", SCHOLARS_MATE)
        _show_results(window, [game])

        window._game_list.select_index(0)

        assert window.selected_game is game
        assert window.engine.ply_count == 7
        assert window.engine.cursor == -1
        assert len(window._move_panel._move_buttons) == 7
        assert not window._board_view.flipped

    def test_board_is_flipped_for_black_games(self, window: MainWindow) -> None:
        _show_results(window, [_game("a", SCHOLARS_MATE, white="carol", black="alice")])

        window._game_list.select_index(0)

        assert window._board_view.flipped

    def test_unparseable_game_keeps_previous_replay(self, window: MainWindow) -> None:
        good = _game("good", SCHOLARS_MATE)
        bad = _game("bad", "1. e4 e5 2. Ke3 *")
        _show_results(window, [good, bad])
        window._game_list.select_index(0)
        window.engine.goto(2)

        window._game_list.select_index(1)

        assert window.selected_game is good
        assert window.engine.cursor == 2
        assert window._status_label.text().startswith("Could not read this game")

    def test_variant_game_keeps_previous_replay(self, window: MainWindow) -> None:
        good = _game("good", SCHOLARS_MATE)
        crazyhouse = _game("zh", '[Variant "Crazyhouse"]\n\n1. e4 e5 *')
        _show_results(window, [good, crazyhouse])
        window._game_list.select_index(0)
        window.engine.goto(1)

        window._game_list.select_index(1)

        assert window.selected_game is good
        assert window.engine.cursor == 1
        assert window._board_view.fen == window.engine.plies[1].fen_after
        assert window._status_label.text().startswith("Could not read this game")

    def test_navigation_updates_board_and_move_list(
        self,
        window: MainWindow,
        sounds: _StubSounds,
    ) -> None:
        _show_results(window, [_game("a", SCHOLARS_MATE)])
        window._game_list.select_index(0)

        window._control_panel.command.emit(ReplayCommand.STEP_FORWARD)
        assert window._board_view.fen == window.engine.plies[0].fen_after
        assert window._move_panel.active_ply == 0
        assert sounds.played == [SoundCue.MOVE]

        window._move_panel.move_clicked.emit(6)
        assert window._board_view.check_square == "e8"
        assert window._move_panel.active_ply == 6

        window._board_view.wheel_scrolled.emit(-120)
        assert window.engine.cursor == 5
        assert window._board_view.check_square is None

    def test_shortcut_routes_through_engine(self, window: MainWindow) -> None:
        _show_results(window, [_game("a", SCHOLARS_MATE)])
        window._game_list.select_index(0)

        down = next(
            s for s in window._shortcuts if s.key().toString() == "Down"
        )
        down.activated.emit()

        assert window.engine.cursor == 6

    def test_mute_button_silences_engine(
        self,
        window: MainWindow,
        sounds: _StubSounds,
    ) -> None:
        _show_results(window, [_game("a", SCHOLARS_MATE)])
        window._game_list.select_index(0)

        window._control_panel._btn_mute.click()
        window.engine.step_forward()

        assert window.engine.is_muted
        assert sounds.played == []


class TestMainWindowAnalysis:
    def test_analyze_runs_in_background(
        self,
        window: MainWindow,
        analyzer: _StubAnalyzer,
    ) -> None:
        game = _game("a", SCHOLARS_MATE)
        _show_results(window, [game])
        window._game_list.select_index(0)

        window._control_panel._btn_analyze.click()
        assert window._status_label.text() == t().status_analysis_started

        deadline = time.monotonic() + 5.0
        while window._analysis_panel.analysis is None and time.monotonic() < deadline:
            QApplication.processEvents()
            time.sleep(0.01)

        assert analyzer.seen == [game.pgn]
        assert window._analysis_panel._summary.text() == "Reviewed."

    def test_analysis_result_for_previous_selection_is_dropped(
        self,
        window: MainWindow,
    ) -> None:
        _show_results(window, [_game("a", SCHOLARS_MATE), _game("b", SCHOLARS_MATE)])
        window._game_list.select_index(0)
        window._analysis_session._pending_request_id = 9

        window._game_list.select_index(1)
        window._analysis_session._on_worker_finished(9, GameAnalysis(summary="stale"))

        assert window._analysis_panel.analysis is None

    def test_analyze_without_selection_is_ignored(self, window: MainWindow) -> None:
        window._on_analyze()
        assert window._status_label.text() == t().status_ready
