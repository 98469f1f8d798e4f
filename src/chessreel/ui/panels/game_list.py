"""GameListPanel: sidebar listing the games of the last search."""

from __future__ import annotations

import datetime

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessreel.core.enums import LOSS_RESULTS, PlayerResult
from chessreel.core.models import Game
from chessreel.ui.i18n import t

_WIN_COLOR = QColor("#1f4d36")
_LOSS_COLOR = QColor("#5a2426")

_RESULT_GLYPH: dict[str, str] = {
    PlayerResult.WIN.value: "🏆",
    PlayerResult.CHECKMATED.value: "#",
    PlayerResult.TIMEOUT.value: "⏱",
    PlayerResult.RESIGNED.value: "⚑",
}


def describe_game(game: Game, username: str) -> str:
    """One-line sidebar label: opponent, result, time class and date."""
    side = game.side_of(username)
    opponent = game.opponent_of(username)
    glyph = _RESULT_GLYPH.get(side.result, "–")
    colour = "♔" if game.plays_white(username) else "♚"
    ended = datetime.datetime.fromtimestamp(game.end_time, tz=datetime.timezone.utc)
    return (
        f"{glyph} {colour} vs {opponent.username} ({opponent.rating})  "
        f"{side.result} · {game.time_class} · {ended:%Y-%m-%d}"
    )


class GameListPanel(QWidget):
    """Selectable list of games, tinted by the searched player's result."""

    game_selected = pyqtSignal(object)  # Game
    new_search_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._games: list[Game] = []
        self._username = ""
        self._setup_ui()
        self.retranslate_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        header = QHBoxLayout()
        self._title = QLabel()
        self._title.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        header.addWidget(self._title, 1)

        self._btn_new_search = QPushButton()
        self._btn_new_search.clicked.connect(self.new_search_requested)
        header.addWidget(self._btn_new_search)
        layout.addLayout(header)

        self._list = QListWidget()
        self._list.setWordWrap(True)
        self._list.currentRowChanged.connect(self._on_row_changed)
        layout.addWidget(self._list, 1)

        self._empty = QLabel()
        self._empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty.setStyleSheet("color: #888;")
        layout.addWidget(self._empty)

    def retranslate_ui(self) -> None:
        s = t()
        self._btn_new_search.setText(s.btn_new_search)
        self._empty.setText(s.games_empty)
        self._refresh_title()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def games(self) -> list[Game]:
        return list(self._games)

    def set_games(self, games: list[Game], username: str) -> None:
        self._games = list(games)
        self._username = username
        self._list.blockSignals(True)
        self._list.clear()
        for game in self._games:
            item = QListWidgetItem(describe_game(game, username))
            item.setData(Qt.ItemDataRole.UserRole, game.url)
            result = game.side_of(username).result
            if result == PlayerResult.WIN:
                item.setBackground(QBrush(_WIN_COLOR))
            elif result in LOSS_RESULTS:
                item.setBackground(QBrush(_LOSS_COLOR))
            self._list.addItem(item)
        self._list.setCurrentRow(-1)
        self._list.blockSignals(False)
        self._empty.setVisible(not self._games)
        self._refresh_title()

    def clear(self) -> None:
        self.set_games([], "")

    def select_index(self, row: int) -> None:
        self._list.setCurrentRow(row)

    def _refresh_title(self) -> None:
        s = t()
        if self._username:
            self._title.setText(f"{self._username} · {s.games_header} ({len(self._games)})")
        else:
            self._title.setText(s.games_header)

    def _on_row_changed(self, row: int) -> None:
        if 0 <= row < len(self._games):
            self.game_selected.emit(self._games[row])
