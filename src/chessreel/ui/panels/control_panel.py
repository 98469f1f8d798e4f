"""ControlPanel: replay transport buttons."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QPushButton, QToolButton, QWidget

from chessreel.replay.input import ReplayCommand
from chessreel.ui.i18n import t


class ControlPanel(QWidget):
    """Start / previous / play / next / end buttons plus mute and analyze.

    Every transport button emits the same ``command`` signal, so the
    panel never touches replay state itself.
    """

    command = pyqtSignal(object)  # ReplayCommand
    mute_toggled = pyqtSignal(bool)
    analyze_clicked = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._buttons: dict[ReplayCommand, QToolButton] = {}
        self._playing = False
        self._muted = False
        self._setup_ui()
        self.retranslate_ui()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        btn_font = QFont("Adwaita Sans", 12)
        glyphs = {
            ReplayCommand.JUMP_TO_START: "⏮",
            ReplayCommand.STEP_BACKWARD: "◀",
            ReplayCommand.TOGGLE_PLAY: "▶",
            ReplayCommand.STEP_FORWARD: "▶▏",
            ReplayCommand.JUMP_TO_END: "⏭",
        }
        for cmd, glyph in glyphs.items():
            btn = QToolButton()
            btn.setText(glyph)
            btn.setFont(btn_font)
            btn.setMinimumSize(40, 36)
            btn.clicked.connect(
                lambda _checked=False, c=cmd: self.command.emit(c)
            )
            layout.addWidget(btn)
            self._buttons[cmd] = btn

        layout.addStretch(1)

        self._btn_mute = QToolButton()
        self._btn_mute.setFont(btn_font)
        self._btn_mute.setMinimumSize(40, 36)
        self._btn_mute.clicked.connect(self._on_mute_clicked)
        layout.addWidget(self._btn_mute)

        self._btn_analyze = QPushButton()
        self._btn_analyze.setMinimumHeight(36)
        self._btn_analyze.clicked.connect(self.analyze_clicked)
        layout.addWidget(self._btn_analyze)

    def retranslate_ui(self) -> None:
        s = t()
        self._buttons[ReplayCommand.JUMP_TO_START].setToolTip(s.tip_start)
        self._buttons[ReplayCommand.STEP_BACKWARD].setToolTip(s.tip_prev)
        self._buttons[ReplayCommand.STEP_FORWARD].setToolTip(s.tip_next)
        self._buttons[ReplayCommand.JUMP_TO_END].setToolTip(s.tip_end)
        self._btn_analyze.setText(s.btn_analyze)
        self._refresh_play_button()
        self._refresh_mute_button()

    def set_playing(self, playing: bool) -> None:
        self._playing = playing
        self._refresh_play_button()

    def set_muted(self, muted: bool) -> None:
        self._muted = muted
        self._refresh_mute_button()

    def set_replay_active(self, active: bool) -> None:
        """Enable/disable buttons depending on whether a game is loaded."""
        for btn in self._buttons.values():
            btn.setEnabled(active)
        self._btn_analyze.setEnabled(active)

    def _on_mute_clicked(self) -> None:
        self.set_muted(not self._muted)
        self.mute_toggled.emit(self._muted)

    def _refresh_play_button(self) -> None:
        btn = self._buttons[ReplayCommand.TOGGLE_PLAY]
        btn.setText("⏸" if self._playing else "▶")
        btn.setToolTip(t().tip_pause if self._playing else t().tip_play)

    def _refresh_mute_button(self) -> None:
        self._btn_mute.setText("🔇" if self._muted else "🔊")
        self._btn_mute.setToolTip(t().tip_unmute if self._muted else t().tip_mute)
