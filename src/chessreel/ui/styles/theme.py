"""Visual theme constants and QSS styles for chessreel."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme handed to ``chess.svg.board``."""

    light_square: str
    dark_square: str
    last_move_light: str
    last_move_dark: str

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square="#f1f5f9",
            dark_square="#b5c0d0",
            last_move_light="#cdd26a",
            last_move_dark="#aaa23a",
        )

    def svg_colors(self) -> dict[str, str]:
        return {
            "square light": self.light_square,
            "square dark": self.dark_square,
            "square light lastmove": self.last_move_light,
            "square dark lastmove": self.last_move_dark,
        }


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
    font-family: "Adwaita Sans", "Helvetica Neue", sans-serif;
}

QListWidget {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
    font-family: "Adwaita Sans", "Consolas", monospace;
    font-size: 13px;
}

QListWidget::item:selected {
    background: #264f78;
}

QLineEdit, QSpinBox, QComboBox {
    background: #1e1e1e;
    color: #e0e0e0;
    border: 1px solid #3c3c3c;
    border-radius: 4px;
    padding: 4px 6px;
}

QPushButton, QToolButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover, QToolButton:hover {
    background: #505050;
}
QPushButton:pressed, QToolButton:pressed {
    background: #264f78;
}
QPushButton:disabled, QToolButton:disabled {
    color: #666;
    background: #2b2b2b;
}

QTextBrowser {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
}
"""
