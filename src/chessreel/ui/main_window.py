"""MainWindow: top-level window assembling all UI components."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStackedWidget,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from chessreel.analysis import GameAnalysis, GameAnalyzer
from chessreel.archive import HistoryFetcher
from chessreel.config import AppSettings
from chessreel.core.errors import PgnParseError
from chessreel.core.models import DateRange, Game, ParsedGame, SearchFilters
from chessreel.core.rules import STARTING_FEN
from chessreel.replay import ReplayEngine
from chessreel.replay.input import KEY_COMMANDS
from chessreel.replay.sounds import CuePlayer, SoundPlayer
from chessreel.ui.analysis_session import AnalysisSession
from chessreel.ui.board_view import BoardView
from chessreel.ui.i18n import t
from chessreel.ui.panels.analysis_panel import AnalysisPanel
from chessreel.ui.panels.control_panel import ControlPanel
from chessreel.ui.panels.game_list import GameListPanel
from chessreel.ui.panels.move_panel import MovePanel
from chessreel.ui.panels.search_panel import SearchPanel
from chessreel.ui.search_session import SearchSession

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Search page followed by the game list and replay board."""

    _SEARCH_PAGE = 0
    _REPLAY_PAGE = 1

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        fetcher: HistoryFetcher | None = None,
        analyzer: GameAnalyzer | None = None,
        sound_player: CuePlayer | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or AppSettings()
        self.setWindowTitle(t().window_title)
        self.setMinimumSize(960, 640)
        self.resize(1200, 780)

        self._username = ""
        self._selected_game: Game | None = None

        self._engine = ReplayEngine(
            sound_player
            if sound_player is not None
            else SoundPlayer(volume=self._settings.sound_volume),
            muted=not self._settings.sound_enabled,
            parent=self,
        )
        self._search_session = SearchSession(
            on_finished=self._on_search_finished,
            on_failed=self._on_search_failed,
            on_player_missing=self._on_player_missing,
            settings=self._settings,
            fetcher=fetcher,
            parent=self,
        )
        self._analysis_session = AnalysisSession(
            on_progress=self._on_analysis_progress,
            on_finished=self._on_analysis_finished,
            on_cancelled=self._on_analysis_cancelled,
            analyzer=analyzer or GameAnalyzer(self._settings),
            parent=self,
        )

        self._setup_ui()
        self._setup_shortcuts()
        self._connect_signals()
        self._search_session.setup()
        self._analysis_session.setup()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        self._pages = QStackedWidget()
        self.setCentralWidget(self._pages)

        self._search_panel = SearchPanel()
        self._pages.addWidget(self._search_panel)

        replay = QWidget()
        root = QHBoxLayout(replay)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        # Game list (left)
        self._game_list = GameListPanel()
        self._game_list.setFixedWidth(320)
        root.addWidget(self._game_list)

        # Board + transport (center)
        center = QVBoxLayout()
        center.setSpacing(6)
        self._board_view = BoardView()
        center.addWidget(self._board_view, stretch=1)
        self._hint = QLabel(t().select_game_hint)
        self._hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        center.addWidget(self._hint)
        self._control_panel = ControlPanel()
        self._control_panel.set_muted(self._engine.is_muted)
        self._control_panel.set_replay_active(False)
        center.addWidget(self._control_panel)
        root.addLayout(center, stretch=3)

        # Moves + analysis (right)
        right = QVBoxLayout()
        right.setSpacing(6)
        self._move_panel = MovePanel()
        right.addWidget(self._move_panel, stretch=2)
        self._analysis_panel = AnalysisPanel()
        right.addWidget(self._analysis_panel, stretch=1)
        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(300)
        root.addWidget(right_widget)

        self._pages.addWidget(replay)

        # Status bar
        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel(t().status_ready)
        self._status.addWidget(self._status_label)

    def _setup_shortcuts(self) -> None:
        self._shortcuts: list[QShortcut] = []
        for key in KEY_COMMANDS:
            shortcut = QShortcut(QKeySequence(key), self)
            shortcut.setContext(Qt.ShortcutContext.WindowShortcut)
            shortcut.setEnabled(False)
            shortcut.activated.connect(
                lambda key=key: self._engine.handle_key(key)
            )
            self._shortcuts.append(shortcut)

    def _connect_signals(self) -> None:
        self._search_panel.search_requested.connect(self._on_search_requested)
        self._game_list.game_selected.connect(self._on_game_selected)
        self._game_list.new_search_requested.connect(self._on_new_search)

        self._control_panel.command.connect(self._engine.execute)
        self._control_panel.mute_toggled.connect(self._engine.set_muted)
        self._control_panel.analyze_clicked.connect(self._on_analyze)
        self._move_panel.move_clicked.connect(self._engine.goto)
        self._analysis_panel.moment_clicked.connect(self._engine.goto)
        self._board_view.wheel_scrolled.connect(self._engine.handle_wheel)

        self._engine.position_changed.connect(self._on_position_changed)
        self._engine.check_square_changed.connect(self._board_view.set_check_square)
        self._engine.playing_changed.connect(self._control_panel.set_playing)

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def engine(self) -> ReplayEngine:
        return self._engine

    @property
    def selected_game(self) -> Game | None:
        return self._selected_game

    @property
    def on_replay_page(self) -> bool:
        return self._pages.currentIndex() == self._REPLAY_PAGE

    # ── Search ───────────────────────────────────────────────────────────

    def _on_search_requested(
        self,
        username: str,
        date_range: DateRange,
        filters: SearchFilters,
    ) -> None:
        request_id = self._search_session.start_search(username, date_range, filters)
        if request_id is None:
            return
        self._username = username
        self._search_panel.set_busy(True)
        self._set_status(t().status_searching.format(user=username))

    def _on_search_finished(self, games: list[Game]) -> None:
        self._search_panel.set_busy(False)
        self._clear_selection()
        self._game_list.set_games(games, self._username)
        self._show_page(self._REPLAY_PAGE)
        self._set_status(t().status_found.format(count=len(games)))

    def _on_search_failed(self, message: str) -> None:
        self._search_panel.set_busy(False)
        self._set_status(t().status_search_failed.format(msg=message))

    def _on_player_missing(self, username: str) -> None:
        self._search_panel.set_busy(False)
        self._set_status(t().status_player_not_found.format(user=username))

    def _on_new_search(self) -> None:
        self._search_session.cancel_search()
        self._search_panel.set_busy(False)
        self._clear_selection()
        self._game_list.clear()
        self._show_page(self._SEARCH_PAGE)
        self._set_status(t().status_ready)

    # ── Selection ────────────────────────────────────────────────────────

    def _on_game_selected(self, game: Game) -> None:
        try:
            parsed = self._engine.load_game(game)
        except PgnParseError as exc:
            _LOGGER.warning("Cannot replay %s: %s", game.url, exc)
            self._set_status(t().status_bad_pgn.format(msg=exc))
            return

        self._selected_game = game
        self._analysis_session.cancel_analysis()
        self._analysis_panel.clear()
        self._move_panel.set_plies(parsed.plies, white_first=parsed.white_first)
        self._board_view.set_flipped(not game.plays_white(self._username))
        self._control_panel.set_replay_active(True)
        self._hint.hide()

    def _clear_selection(self) -> None:
        self._selected_game = None
        self._analysis_session.cancel_analysis()
        self._analysis_panel.clear()
        self._engine.reset(ParsedGame(start_fen=STARTING_FEN))
        self._move_panel.clear()
        self._control_panel.set_replay_active(False)
        self._hint.show()

    def _on_position_changed(self, cursor: int, fen: str) -> None:
        self._board_view.set_position(fen, self._engine.current_ply)
        self._move_panel.set_active_ply(cursor)

    # ── Analysis ─────────────────────────────────────────────────────────

    def _on_analyze(self) -> None:
        if self._selected_game is None:
            return
        if self._analysis_session.start_analysis(self._selected_game.pgn):
            self._set_status(t().status_analysis_started)

    def _on_analysis_progress(self, done: int, total: int) -> None:
        self._analysis_panel.set_progress(done, total)

    def _on_analysis_finished(self, analysis: GameAnalysis) -> None:
        self._analysis_panel.set_analysis(analysis)
        self._set_status(t().status_analysis_done)

    def _on_analysis_cancelled(self) -> None:
        self._analysis_panel.clear()
        self._set_status(t().status_analysis_cancelled)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _show_page(self, index: int) -> None:
        self._pages.setCurrentIndex(index)
        for shortcut in self._shortcuts:
            shortcut.setEnabled(index == self._REPLAY_PAGE)

    def _set_status(self, text: str) -> None:
        self._status_label.setText(text)

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._search_session.shutdown()
        self._analysis_session.shutdown()
        self._engine.shutdown()
        super().closeEvent(event)
