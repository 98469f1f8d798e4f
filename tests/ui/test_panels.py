"""Tests for search, game list, control and analysis panels."""

from __future__ import annotations

import datetime

from chessreel.analysis.models import AssessmentKind, GameAnalysis, MoveAssessment
from chessreel.core.models import DateRange, Game, PlayerSide, SearchFilters
from chessreel.replay.input import ReplayCommand
from chessreel.ui.i18n import set_language, t
from chessreel.ui.panels.analysis_panel import AnalysisPanel
from chessreel.ui.panels.control_panel import ControlPanel
from chessreel.ui.panels.game_list import GameListPanel, describe_game
from chessreel.ui.panels.search_panel import SearchPanel


def _game(url: str, white: str, black: str, white_result: str, black_result: str) -> Game:
    return Game(
        url=url,
        pgn="1. e4 *",
        end_time=1_704_067_200,  # 2024-01-01 UTC
        time_class="rapid",
        white=PlayerSide(white, 1500, white_result),
        black=PlayerSide(black, 1400, black_result),
    )


class TestSearchPanel:
    def test_submit_emits_request(self) -> None:
        panel = SearchPanel(today=datetime.date(2024, 3, 15))
        requests: list[tuple[str, object, object]] = []
        panel.search_requested.connect(lambda *args: requests.append(args))

        panel.set_username("  alice ")
        panel.set_range(DateRange(2023, 11, 2024, 2))
        panel.set_opening(" Sicilian ")
        panel.set_result("loss")
        panel._btn_search.click()

        assert requests == [
            (
                "alice",
                DateRange(2023, 11, 2024, 2),
                SearchFilters(opening="Sicilian", result="loss"),
            )
        ]

    def test_defaults_to_current_month_and_all_results(self) -> None:
        panel = SearchPanel(today=datetime.date(2024, 3, 15))
        panel.set_username("alice")

        _username, date_range, filters = panel.current_request()

        assert date_range == DateRange.single_month(2024, 3)
        assert filters == SearchFilters()

    def test_blank_username_does_not_emit(self) -> None:
        panel = SearchPanel()
        requests: list[object] = []
        panel.search_requested.connect(lambda *args: requests.append(args))

        panel._btn_search.click()

        assert requests == []

    def test_result_options_include_literal_loss_codes(self) -> None:
        panel = SearchPanel()
        values = [panel._result.itemData(i) for i in range(panel._result.count())]
        assert values == [
            "all",
            "win",
            "loss",
            "draw",
            "checkmated",
            "resigned",
            "timeout",
            "abandoned",
        ]

    def test_retranslate_keeps_selected_result(self) -> None:
        panel = SearchPanel()
        panel.set_result("draw")

        set_language("Russian")
        panel.retranslate_ui()

        assert panel._result.currentData() == "draw"
        assert panel._btn_search.text() == t().btn_search == "Найти партии"


class TestGameListPanel:
    def test_describe_game_from_searched_player_view(self) -> None:
        game = _game("g", "bob", "alice", "timeout", "win")
        text = describe_game(game, "Alice")

        assert text.startswith("🏆 ♚ vs bob (1500)")
        assert "win · rapid · 2024-01-01" in text

    def test_selecting_row_emits_game(self) -> None:
        panel = GameListPanel()
        games = [
            _game("a", "alice", "bob", "win", "resigned"),
            _game("b", "carol", "alice", "win", "checkmated"),
        ]
        panel.set_games(games, "alice")
        selected: list[Game] = []
        panel.game_selected.connect(selected.append)

        panel.select_index(1)

        assert selected == [games[1]]
        assert panel._list.count() == 2
        assert "alice" in panel._title.text()

    def test_set_games_does_not_emit_selection(self) -> None:
        panel = GameListPanel()
        selected: list[Game] = []
        panel.game_selected.connect(selected.append)

        panel.set_games([_game("a", "alice", "bob", "win", "resigned")], "alice")

        assert selected == []

    def test_new_search_button(self) -> None:
        panel = GameListPanel()
        clicks: list[bool] = []
        panel.new_search_requested.connect(lambda: clicks.append(True))

        panel._btn_new_search.click()

        assert clicks == [True]

    def test_clear(self) -> None:
        panel = GameListPanel()
        panel.set_games([_game("a", "alice", "bob", "win", "resigned")], "alice")

        panel.clear()

        assert panel.games == []
        assert panel._list.count() == 0


class TestControlPanel:
    def test_transport_buttons_emit_commands(self) -> None:
        panel = ControlPanel()
        commands: list[ReplayCommand] = []
        panel.command.connect(commands.append)

        for command in ReplayCommand:
            panel._buttons[command].click()

        assert commands == list(ReplayCommand)

    def test_play_button_reflects_state(self) -> None:
        panel = ControlPanel()
        play = panel._buttons[ReplayCommand.TOGGLE_PLAY]

        panel.set_playing(True)
        assert play.toolTip() == t().tip_pause
        panel.set_playing(False)
        assert play.toolTip() == t().tip_play

    def test_mute_button_toggles_and_emits(self) -> None:
        panel = ControlPanel()
        states: list[bool] = []
        panel.mute_toggled.connect(states.append)

        panel._btn_mute.click()
        panel._btn_mute.click()

        assert states == [True, False]

    def test_replay_inactive_disables_buttons(self) -> None:
        panel = ControlPanel()
        panel.set_replay_active(False)

        assert not panel._buttons[ReplayCommand.STEP_FORWARD].isEnabled()
        assert not panel._btn_analyze.isEnabled()


class TestAnalysisPanel:
    def test_starts_with_placeholder(self) -> None:
        panel = AnalysisPanel()
        assert panel._summary.text() == t().analysis_placeholder

    def test_set_analysis_lists_moments(self) -> None:
        panel = AnalysisPanel()
        clicked: list[int] = []
        panel.moment_clicked.connect(clicked.append)
        analysis = GameAnalysis(
            summary="White played well.",
            move_assessments=(
                MoveAssessment(3, "black", AssessmentKind.BLUNDER, "Hangs the queen.", 5, "Qd4"),
                MoveAssessment(4, "white", AssessmentKind.BEST, "Punishes it.", 6, "Nxd4"),
            ),
        )

        panel.set_progress(3, 8)
        panel.set_analysis(analysis)
        panel._rows[1].click()

        assert panel._summary.text() == "White played well."
        assert panel.moment_count == 2
        assert "3... Qd4 ??" in panel._rows[0].text()
        assert clicked == [6]

    def test_placeholder_analysis_has_no_moments(self) -> None:
        panel = AnalysisPanel()
        panel.set_analysis(GameAnalysis.unavailable())

        assert panel._summary.text() == "Analysis unavailable at this time."
        assert panel.moment_count == 0

    def test_clear_restores_placeholder(self) -> None:
        panel = AnalysisPanel()
        panel.set_analysis(GameAnalysis(summary="done"))

        panel.clear()

        assert panel.analysis is None
        assert panel._summary.text() == t().analysis_placeholder
