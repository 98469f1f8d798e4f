"""SearchPanel: username, month range and filter form."""

from __future__ import annotations

import datetime

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from chessreel.core.enums import PlayerResult, ResultCategory
from chessreel.core.models import DateRange, SearchFilters
from chessreel.ui.i18n import t

_FIRST_ARCHIVE_YEAR = 2007


class _MonthPicker(QWidget):
    """Year + month spin boxes side by side."""

    def __init__(self, year: int, month: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.year = QSpinBox()
        self.year.setRange(_FIRST_ARCHIVE_YEAR, 2100)
        self.year.setValue(year)
        layout.addWidget(self.year, 2)

        self.month = QSpinBox()
        self.month.setRange(1, 12)
        self.month.setValue(month)
        layout.addWidget(self.month, 1)

    def value(self) -> tuple[int, int]:
        return self.year.value(), self.month.value()


class SearchPanel(QWidget):
    """Collects a search request and emits it as plain values.

    The date range may be inverted; the fetcher treats that as an empty
    search rather than an error.
    """

    search_requested = pyqtSignal(str, object, object)  # username, DateRange, SearchFilters

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        today: datetime.date | None = None,
    ) -> None:
        super().__init__(parent)
        self._today = today or datetime.date.today()
        self._setup_ui()
        self.retranslate_ui()

    def _setup_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 24, 24, 24)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)

        form = QFormLayout()
        form.setSpacing(8)
        self._form = form

        self._username = QLineEdit()
        self._username.returnPressed.connect(self._on_submit)
        form.addRow("", self._username)

        self._from = _MonthPicker(self._today.year, self._today.month)
        form.addRow("", self._from)
        self._to = _MonthPicker(self._today.year, self._today.month)
        form.addRow("", self._to)

        self._opening = QLineEdit()
        form.addRow("", self._opening)

        self._result = QComboBox()
        form.addRow("", self._result)
        root.addLayout(form)

        self._btn_search = QPushButton()
        self._btn_search.setFont(QFont("Adwaita Sans", 12, QFont.Weight.Bold))
        self._btn_search.setMinimumHeight(36)
        self._btn_search.clicked.connect(self._on_submit)
        root.addWidget(self._btn_search)

    def retranslate_ui(self) -> None:
        s = t()
        labels = (
            s.search_username,
            s.search_from,
            s.search_to,
            s.search_opening,
            s.search_result,
        )
        for row, text in enumerate(labels):
            item = self._form.itemAt(row, QFormLayout.ItemRole.LabelRole)
            if item is not None and item.widget() is not None:
                item.widget().setText(text)
        self._opening.setPlaceholderText(s.search_opening_hint)
        self._btn_search.setText(s.btn_search)

        current = self._result.currentData()
        self._result.clear()
        options = (
            (ResultCategory.ALL, s.result_all),
            (ResultCategory.WIN, s.result_win),
            (ResultCategory.LOSS, s.result_loss),
            (ResultCategory.DRAW, s.result_draw),
            (PlayerResult.CHECKMATED, s.result_checkmated),
            (PlayerResult.RESIGNED, s.result_resigned),
            (PlayerResult.TIMEOUT, s.result_timeout),
            (PlayerResult.ABANDONED, s.result_abandoned),
        )
        for value, label in options:
            self._result.addItem(label, value.value)
        if current is not None:
            index = self._result.findData(current)
            self._result.setCurrentIndex(max(index, 0))

    # ── Public API ───────────────────────────────────────────────────────

    def set_busy(self, busy: bool) -> None:
        self._btn_search.setEnabled(not busy)

    def set_username(self, username: str) -> None:
        self._username.setText(username)

    def set_range(self, date_range: DateRange) -> None:
        self._from.year.setValue(date_range.start_year)
        self._from.month.setValue(date_range.start_month)
        self._to.year.setValue(date_range.end_year)
        self._to.month.setValue(date_range.end_month)

    def set_result(self, result: str) -> None:
        index = self._result.findData(result)
        if index >= 0:
            self._result.setCurrentIndex(index)

    def set_opening(self, opening: str) -> None:
        self._opening.setText(opening)

    def current_request(self) -> tuple[str, DateRange, SearchFilters]:
        start_year, start_month = self._from.value()
        end_year, end_month = self._to.value()
        date_range = DateRange(start_year, start_month, end_year, end_month)
        filters = SearchFilters(
            opening=self._opening.text().strip(),
            result=self._result.currentData() or ResultCategory.ALL.value,
        )
        return self._username.text().strip(), date_range, filters

    def _on_submit(self) -> None:
        username, date_range, filters = self.current_request()
        if not username:
            self._username.setFocus()
            return
        self.search_requested.emit(username, date_range, filters)
