"""AnalysisPanel: narrative summary and key moments of a game.

Shows the placeholder hint until an analysis arrives, a progress bar while
one is running, and a clickable list of key moments afterwards.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QFrame,
    QLabel,
    QProgressBar,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from chessreel.analysis.models import GameAnalysis, MoveAssessment
from chessreel.ui.i18n import t

# ── Small reusable sub-widgets ──────────────────────────────────────────


class _MomentRow(QToolButton):
    """Single key moment: NAG, move label and explanation."""

    def __init__(
        self,
        moment: MoveAssessment,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.moment = moment
        kind = moment.assessment
        dots = "." if moment.color == "white" else "..."
        san = f" {moment.san}" if moment.san else ""
        self.setText(
            f"{moment.move_number}{dots}{san} {kind.nag}  {kind.value}\n"
            f"{moment.explanation}"
        )
        self.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextOnly)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setStyleSheet(
            f"""
            QToolButton {{
                background: #2a2a2a;
                color: #d0d0d0;
                border-left: 3px solid {kind.color_hex};
                border-radius: 4px;
                padding: 4px 8px;
                text-align: left;
            }}
            QToolButton:hover {{
                background: #3c3c3c;
            }}
            """
        )


# ── Main panel ──────────────────────────────────────────────────────────


class AnalysisPanel(QWidget):
    """Analysis view shown below the move list."""

    moment_clicked = pyqtSignal(int)  # ply index

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._analysis: GameAnalysis | None = None
        self._rows: list[_MomentRow] = []
        self._setup_ui()

    def _setup_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._title = QLabel()
        self._title.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._title)

        self._progress = QProgressBar()
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(8)
        self._progress.hide()
        root.addWidget(self._progress)

        self._summary = QLabel()
        self._summary.setWordWrap(True)
        self._summary.setFont(QFont("Adwaita Sans", 10))
        self._summary.setStyleSheet("color: #b0b0b0;")
        root.addWidget(self._summary)

        self._moments_frame = QFrame()
        self._moments_layout = QVBoxLayout(self._moments_frame)
        self._moments_layout.setContentsMargins(0, 0, 0, 0)
        self._moments_layout.setSpacing(3)
        root.addWidget(self._moments_frame)
        root.addStretch(1)

        self.retranslate_ui()

    def retranslate_ui(self) -> None:
        s = t()
        self._title.setText(s.analysis_header)
        if self._analysis is None:
            self._summary.setText(s.analysis_placeholder)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def analysis(self) -> GameAnalysis | None:
        return self._analysis

    @property
    def moment_count(self) -> int:
        return len(self._rows)

    def set_progress(self, done: int, total: int) -> None:
        self._progress.setRange(0, max(total, 1))
        self._progress.setValue(done)
        self._progress.show()

    def set_analysis(self, analysis: GameAnalysis) -> None:
        """Populate the panel from a finished analysis."""
        self._analysis = analysis
        self._progress.hide()
        self._summary.setText(analysis.summary)
        self._clear_rows()
        for moment in analysis.move_assessments:
            row = _MomentRow(moment)
            if moment.ply >= 0:
                row.clicked.connect(
                    lambda _checked=False, ply=moment.ply: self.moment_clicked.emit(ply)
                )
            self._moments_layout.addWidget(row)
            self._rows.append(row)

    def clear(self) -> None:
        """Reset the panel to its placeholder state."""
        self._analysis = None
        self._progress.hide()
        self._clear_rows()
        self._summary.setText(t().analysis_placeholder)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _clear_rows(self) -> None:
        for row in self._rows:
            self._moments_layout.removeWidget(row)
            row.deleteLater()
        self._rows.clear()
