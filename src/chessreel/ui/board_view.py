"""BoardView: read-only SVG board driven by the replay engine."""

from __future__ import annotations

import chess
import chess.svg
from PyQt6.QtCore import QByteArray, Qt, pyqtSignal
from PyQt6.QtGui import QWheelEvent
from PyQt6.QtSvgWidgets import QSvgWidget
from PyQt6.QtWidgets import QSizePolicy, QWidget

from chessreel.core.models import Ply
from chessreel.ui.styles.theme import BoardTheme


def render_board_svg(
    fen: str,
    *,
    last_ply: Ply | None = None,
    check_square: str | None = None,
    flipped: bool = False,
    theme: BoardTheme | None = None,
    size: int = 480,
) -> str:
    """SVG markup for *fen* with last-move and check highlights."""
    board = chess.Board(fen)
    lastmove = None
    if last_ply is not None:
        lastmove = chess.Move(
            chess.parse_square(last_ply.from_square),
            chess.parse_square(last_ply.to_square),
        )
    check = chess.parse_square(check_square) if check_square else None
    return chess.svg.board(
        board,
        orientation=chess.BLACK if flipped else chess.WHITE,
        lastmove=lastmove,
        check=check,
        colors=(theme or BoardTheme.default()).svg_colors(),
        size=size,
    )


class BoardView(QSvgWidget):
    """Square SVG board; wheel deltas are forwarded as ``wheel_scrolled``.

    Signals:
        wheel_scrolled(int): vertical angle delta of each wheel event.
    """

    wheel_scrolled = pyqtSignal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._fen = chess.STARTING_FEN
        self._last_ply: Ply | None = None
        self._check_square: str | None = None
        self._flipped = False

        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 320)
        self._render()

    @property
    def fen(self) -> str:
        return self._fen

    @property
    def check_square(self) -> str | None:
        return self._check_square

    @property
    def flipped(self) -> bool:
        return self._flipped

    def set_position(self, fen: str, last_ply: Ply | None = None) -> None:
        self._fen = fen
        self._last_ply = last_ply
        self._render()

    def set_check_square(self, square: str | None) -> None:
        if square == self._check_square:
            return
        self._check_square = square
        self._render()

    def set_flipped(self, flipped: bool) -> None:
        if flipped == self._flipped:
            return
        self._flipped = flipped
        self._render()

    def wheelEvent(self, event: QWheelEvent | None) -> None:
        if event is None:
            return
        delta = event.angleDelta().y()
        if delta:
            # Qt reports wheel-up as positive; up means back through the game.
            self.wheel_scrolled.emit(-delta)
        event.accept()

    def _render(self) -> None:
        svg = render_board_svg(
            self._fen,
            last_ply=self._last_ply,
            check_square=self._check_square,
            flipped=self._flipped,
            theme=self._theme,
        )
        self.load(QByteArray(svg.encode("utf-8")))
        renderer = self.renderer()
        if renderer is not None:
            renderer.setAspectRatioMode(Qt.AspectRatioMode.KeepAspectRatio)
