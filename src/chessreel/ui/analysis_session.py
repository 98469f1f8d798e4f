"""Background game analysis orchestration for the UI thread."""

from __future__ import annotations

import threading
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from chessreel.analysis import AnalysisCancelled, GameAnalysis, GameAnalyzer


class _AnalysisCommandBus(QObject):
    analyze_requested = pyqtSignal(int, str)
    cancel_requested = pyqtSignal()


class _AnalysisWorker(QObject):
    progress = pyqtSignal(int, int, int)  # request_id, done, total
    finished = pyqtSignal(int, object)  # request_id, analysis
    cancelled = pyqtSignal(int)  # request_id

    __slots__ = ("_analyzer", "_cancel_event")

    def __init__(self, analyzer: GameAnalyzer) -> None:
        super().__init__()
        self._analyzer = analyzer
        self._cancel_event = threading.Event()

    @pyqtSlot(int, str)
    def analyze(self, request_id: int, pgn: str) -> None:
        self._cancel_event.clear()
        try:
            analysis = self._analyzer.analyze(
                pgn,
                is_cancelled=self._cancel_event.is_set,
                on_progress=lambda done, total: self.progress.emit(
                    request_id,
                    done,
                    total,
                ),
            )
        except AnalysisCancelled:
            self.cancelled.emit(request_id)
            return

        if self._cancel_event.is_set():
            self.cancelled.emit(request_id)
            return
        self.finished.emit(request_id, analysis)

    @pyqtSlot()
    def cancel(self) -> None:
        self._cancel_event.set()


class AnalysisSession:
    """Owns worker-thread lifecycle for game analysis requests.

    The analyzer degrades to a placeholder on failure, so there is no
    failure callback: every request ends in ``on_finished`` or
    ``on_cancelled``.
    """

    __slots__ = (
        "__weakref__",
        "_on_progress",
        "_on_finished",
        "_on_cancelled",
        "_command_bus",
        "_thread",
        "_worker",
        "_is_started",
        "_is_shutting_down",
        "_pending_request_id",
        "_next_request_id",
    )

    def __init__(
        self,
        *,
        on_progress: Callable[[int, int], None],
        on_finished: Callable[[GameAnalysis], None],
        on_cancelled: Callable[[], None],
        analyzer: GameAnalyzer | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._on_progress = on_progress
        self._on_finished = on_finished
        self._on_cancelled = on_cancelled

        self._command_bus = _AnalysisCommandBus(parent)
        self._thread = QThread(parent)
        self._worker = _AnalysisWorker(analyzer or GameAnalyzer())
        self._is_started = False
        self._is_shutting_down = False
        self._pending_request_id: int | None = None
        self._next_request_id = 0

    def setup(self) -> None:
        """Start worker thread and connect cross-thread signals."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._worker.moveToThread(self._thread)
        self._command_bus.analyze_requested.connect(self._worker.analyze)
        self._command_bus.cancel_requested.connect(self._worker.cancel)
        self._worker.progress.connect(self._on_worker_progress)
        self._worker.finished.connect(self._on_worker_finished)
        self._worker.cancelled.connect(self._on_worker_cancelled)
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Cancel active work and stop worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel_analysis()
        self._thread.quit()
        self._thread.wait(2000)
        self._is_started = False

    def start_analysis(self, pgn: str) -> bool:
        """Start (or restart) a background game analysis."""
        if not pgn.strip():
            return False
        if not self._is_started:
            self.setup()
        if self._is_shutting_down:
            return False

        self.cancel_analysis()
        self._next_request_id += 1
        request_id = self._next_request_id
        self._pending_request_id = request_id
        self._command_bus.analyze_requested.emit(request_id, pgn)
        return True

    def cancel_analysis(self) -> None:
        """Cancel any active analysis request."""
        self._pending_request_id = None
        if self._is_started:
            self._command_bus.cancel_requested.emit()

    def _on_worker_progress(self, request_id: int, done: int, total: int) -> None:
        if request_id != self._pending_request_id:
            return
        self._on_progress(done, total)

    def _on_worker_finished(self, request_id: int, analysis_obj: object) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_request_id:
            return
        self._pending_request_id = None
        if not isinstance(analysis_obj, GameAnalysis):
            self._on_finished(GameAnalysis.unavailable())
            return
        self._on_finished(analysis_obj)

    def _on_worker_cancelled(self, request_id: int) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_request_id:
            return
        self._pending_request_id = None
        self._on_cancelled()
