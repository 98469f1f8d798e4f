"""MovePanel: clickable move list in SAN notation."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QSizePolicy,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from chessreel.core.models import Ply
from chessreel.ui.i18n import t

# Unicode figurine symbols: white = outline, black = filled
_FIGURINE: dict[bool, dict[str, str]] = {
    True: {"K": "♔", "Q": "♕", "R": "♖", "B": "♗", "N": "♘"},
    False: {"K": "♚", "Q": "♛", "R": "♜", "B": "♝", "N": "♞"},
}


def figurine_san(san: str, white: bool) -> str:
    """Replace piece letters in *san* with Unicode figurines."""
    table = _FIGURINE[white]
    if san and san[0] in table:
        san = table[san[0]] + san[1:]
    if "=" in san:
        prefix, _, promo = san.partition("=")
        san = prefix + "=" + table.get(promo[:1], promo[:1]) + promo[1:]
    return san


class MovePanel(QWidget):
    """Two-column move table; clicking a move emits its ply index."""

    move_clicked = pyqtSignal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._plies: list[Ply] = []
        self._move_buttons: dict[int, QToolButton] = {}
        self._active_ply: int | None = None
        self._white_moves_first = True
        self._setup_ui()
        self.retranslate_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self._header = QLabel()
        self._header.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        self._header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._header)

        self._list = QListWidget()
        self._list.setAlternatingRowColors(True)
        self._list.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self._list.setFont(QFont("AdwaitaMono Nerd Font", 12))
        layout.addWidget(self._list)

    def retranslate_ui(self) -> None:
        self._header.setText(t().moves_header)

    @property
    def active_ply(self) -> int | None:
        return self._active_ply

    def clear(self) -> None:
        self._plies.clear()
        self._move_buttons.clear()
        self._active_ply = None
        self._list.clear()

    def set_plies(self, plies: tuple[Ply, ...] | list[Ply], *, white_first: bool = True) -> None:
        """Rebuild the list for a newly selected game."""
        self._plies = list(plies)
        self._white_moves_first = white_first
        self._active_ply = None
        self._rebuild_list()

    def set_active_ply(self, ply: int) -> None:
        """Highlight *ply*; ``-1`` clears the highlight."""
        self._active_ply = ply if ply >= 0 else None
        for move_ply, btn in self._move_buttons.items():
            btn.setProperty("activeMove", move_ply == self._active_ply)
            style = btn.style()
            if style is not None:
                style.unpolish(btn)
                style.polish(btn)
            btn.update()

    def _create_move_button(self, text: str, ply: int) -> QToolButton:
        btn = QToolButton()
        btn.setText(text)
        btn.setCursor(Qt.CursorShape.PointingHandCursor)
        btn.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        btn.setProperty("activeMove", False)
        btn.setStyleSheet(
            """
            QToolButton {
                background: transparent;
                color: #d4d4d4;
                border: 1px solid transparent;
                border-radius: 4px;
                padding: 2px 8px;
                text-align: left;
            }
            QToolButton:hover {
                background: #3c3c3c;
                border-color: #555;
            }
            QToolButton[activeMove="true"] {
                background: #264f78;
                border-color: #3b79b7;
                color: #f0f6ff;
            }
            """
        )
        btn.clicked.connect(
            lambda _checked=False, move_ply=ply: self.move_clicked.emit(move_ply)
        )
        return btn

    def _rebuild_list(self) -> None:
        self._list.clear()
        self._move_buttons.clear()
        # A game starting with black to move leaves the first white cell empty.
        offset = 0 if self._white_moves_first else 1
        total = len(self._plies) + offset
        for row_start in range(0, total, 2):
            row_widget = QWidget()
            row_layout = QHBoxLayout(row_widget)
            row_layout.setContentsMargins(6, 2, 6, 2)
            row_layout.setSpacing(8)

            num_label = QLabel(f"{row_start // 2 + 1}.")
            num_label.setFixedWidth(28)
            num_label.setAlignment(
                Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
            )
            row_layout.addWidget(num_label)

            for column in range(2):
                ply = row_start + column - offset
                if 0 <= ply < len(self._plies):
                    text = figurine_san(self._plies[ply].san, white=column == 0)
                    btn = self._create_move_button(text, ply)
                    row_layout.addWidget(btn, 1)
                    self._move_buttons[ply] = btn
                else:
                    spacer = QWidget()
                    spacer.setSizePolicy(
                        QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed
                    )
                    row_layout.addWidget(spacer, 1)

            item = QListWidgetItem()
            item.setSizeHint(row_widget.sizeHint())
            self._list.addItem(item)
            self._list.setItemWidget(item, row_widget)
        self._list.scrollToTop()
