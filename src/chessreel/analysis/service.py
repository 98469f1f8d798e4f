"""Best-effort game review backed by a UCI engine (Stockfish)."""

from __future__ import annotations

import logging
import math
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import chess
import chess.engine

from chessreel.analysis.models import AssessmentKind, GameAnalysis, MoveAssessment
from chessreel.config import AppSettings
from chessreel.core.rules import parse_pgn

_LOGGER = logging.getLogger(__name__)

_BRILLIANT_MAX_CP_LOSS = 20
_MISTAKE_MIN_CP_LOSS = 100
_BLUNDER_MIN_CP_LOSS = 250
_SACRIFICE_MIN_MATERIAL = 200

# Cap centipawn values so mate scores don't blow up accuracy.
_CP_CAP = 1500
_MATE_SCORE = 100_000

_PIECE_VALUES: dict[chess.PieceType, int] = {
    chess.PAWN: 100,
    chess.KNIGHT: 320,
    chess.BISHOP: 330,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 0,
}

CancelCheck = Callable[[], bool]
ProgressCallback = Callable[[int, int], None]


class AnalysisCancelled(Exception):
    """Raised when a running game analysis was cancelled."""


class AnalysisUnavailable(Exception):
    """No usable engine could be started."""


class UciEngine(Protocol):
    """Subset of :class:`chess.engine.SimpleEngine` used by the analyzer."""

    def analyse(self, board: chess.Board, limit: chess.engine.Limit) -> Any: ...

    def quit(self) -> None: ...


EngineFactory = Callable[[str], UciEngine]


def find_engine_binary(settings: AppSettings | None = None) -> str | None:
    """Try to find a usable Stockfish binary path."""
    configured = settings.engine_path if settings is not None else None
    if configured and os.path.isfile(configured):
        return configured
    env_path = os.environ.get("STOCKFISH_PATH")
    if env_path and os.path.isfile(env_path):
        return env_path
    for name in ("stockfish", "stockfish.exe"):
        found = shutil.which(name)
        if found:
            return found
    return None


@dataclass(slots=True)
class _SideAcc:
    moves: int = 0
    cp_loss_sum: int = 0
    mistakes: int = 0
    blunders: int = 0
    brilliant: int = 0


class GameAnalyzer:
    """Reviews a PGN and reports its key moments.

    :meth:`analyze` never raises for a broken PGN, a missing engine or an
    engine crash; it returns :meth:`GameAnalysis.unavailable` instead.
    Only cancellation propagates, as :class:`AnalysisCancelled`.
    """

    __slots__ = ("_settings", "_engine_factory", "_engine_path")

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        engine_factory: EngineFactory | None = None,
        engine_path: str | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._engine_factory = engine_factory or chess.engine.SimpleEngine.popen_uci
        self._engine_path = engine_path

    def analyze(
        self,
        pgn: str,
        *,
        is_cancelled: CancelCheck | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> GameAnalysis:
        try:
            return self._analyze(pgn, is_cancelled or (lambda: False), on_progress)
        except AnalysisCancelled:
            raise
        except Exception:
            _LOGGER.warning("Analysis failed, returning placeholder", exc_info=True)
            return GameAnalysis.unavailable()

    # ── Internal ─────────────────────────────────────────────────────────

    def _open_engine(self) -> UciEngine:
        path = self._engine_path or find_engine_binary(self._settings)
        if path is None:
            raise AnalysisUnavailable("Stockfish not found")
        return self._engine_factory(path)

    def _analyze(
        self,
        pgn: str,
        cancelled: CancelCheck,
        on_progress: ProgressCallback | None,
    ) -> GameAnalysis:
        parsed = parse_pgn(pgn)
        if not parsed.plies:
            return GameAnalysis(summary="No moves to analyze.")

        limit = chess.engine.Limit(time=self._settings.analysis_time_ms / 1000.0)
        board = chess.Board(parsed.start_fen)
        engine = self._open_engine()
        try:
            assessments: list[MoveAssessment] = []
            sides = {chess.WHITE: _SideAcc(), chess.BLACK: _SideAcc()}
            before = engine.analyse(board, limit)
            previous_kind: AssessmentKind | None = None
            total = len(parsed.plies)

            for ply_index, ply in enumerate(parsed.plies):
                if cancelled():
                    raise AnalysisCancelled

                mover = board.turn
                move_number = board.fullmove_number
                best_move = _first_pv_move(before)
                best_cp = _score_for(before, mover)
                best_san = _safe_san(board, best_move)
                move = board.parse_san(ply.san)
                sacrifice = _is_sacrifice(board, move)
                board.push(move)

                after = engine.analyse(board, limit)
                after_cp = _score_for(after, mover)
                cp_loss = 0 if move == best_move else max(0, best_cp - after_cp)

                kind = classify_move(
                    cp_loss,
                    is_sacrifice=sacrifice,
                    is_best=move == best_move,
                    punishes=previous_kind
                    in (AssessmentKind.MISTAKE, AssessmentKind.BLUNDER),
                )
                _accumulate(sides[mover], cp_loss, kind)
                if kind is not None:
                    assessments.append(
                        MoveAssessment(
                            move_number=move_number,
                            color="white" if mover == chess.WHITE else "black",
                            assessment=kind,
                            explanation=_explain(kind, cp_loss, best_san),
                            ply=ply_index,
                            san=ply.san,
                        )
                    )
                previous_kind = kind
                before = after
                if on_progress is not None:
                    on_progress(ply_index + 1, total)
        finally:
            engine.quit()

        summary = _build_summary(
            parsed.headers,
            sides[chess.WHITE],
            sides[chess.BLACK],
        )
        return GameAnalysis(summary=summary, move_assessments=tuple(assessments))


def classify_move(
    cp_loss: int,
    *,
    is_sacrifice: bool = False,
    is_best: bool = False,
    punishes: bool = False,
) -> AssessmentKind | None:
    """Tag a move as a key moment, or ``None`` for an unremarkable move."""
    if cp_loss > _BLUNDER_MIN_CP_LOSS:
        return AssessmentKind.BLUNDER
    if cp_loss > _MISTAKE_MIN_CP_LOSS:
        return AssessmentKind.MISTAKE
    if is_sacrifice and cp_loss <= _BRILLIANT_MAX_CP_LOSS:
        return AssessmentKind.BRILLIANT
    if is_best and punishes:
        return AssessmentKind.BEST
    return None


def accuracy_from_avg_cp_loss(avg_cp_loss: float) -> float:
    """Convert average centipawn loss to an accuracy percentage.

    ``103.1668 * exp(-0.04354 * ACPL) - 3.1669`` is the usual
    win-probability-inspired approximation.
    """
    if avg_cp_loss <= 0:
        return 100.0
    raw = 103.1668 * math.exp(-0.04354 * avg_cp_loss) - 3.1669
    return max(0.0, min(100.0, raw))


def _score_for(info: Any, color: chess.Color) -> int:
    score = info.get("score") if info else None
    if score is None:
        return 0
    cp = score.pov(color).score(mate_score=_MATE_SCORE)
    return max(-_CP_CAP, min(_CP_CAP, cp if cp is not None else 0))


def _first_pv_move(info: Any) -> chess.Move | None:
    pv = info.get("pv") if info else None
    return pv[0] if pv else None


def _is_sacrifice(board: chess.Board, move: chess.Move) -> bool:
    """The moved piece lands en prise for clearly less than it is worth."""
    piece = board.piece_at(move.from_square)
    if piece is None or piece.piece_type in (chess.PAWN, chess.KING):
        return False
    captured = board.piece_at(move.to_square)
    captured_value = _PIECE_VALUES[captured.piece_type] if captured else 0
    if _PIECE_VALUES[piece.piece_type] - captured_value < _SACRIFICE_MIN_MATERIAL:
        return False
    return board.is_attacked_by(not piece.color, move.to_square)


def _accumulate(acc: _SideAcc, cp_loss: int, kind: AssessmentKind | None) -> None:
    acc.moves += 1
    acc.cp_loss_sum += cp_loss
    if kind is AssessmentKind.BLUNDER:
        acc.blunders += 1
    elif kind is AssessmentKind.MISTAKE:
        acc.mistakes += 1
    elif kind is AssessmentKind.BRILLIANT:
        acc.brilliant += 1


def _safe_san(board: chess.Board, move: chess.Move | None) -> str:
    if move is None or not board.is_legal(move):
        return ""
    return board.san(move)


def _explain(kind: AssessmentKind, cp_loss: int, best_san: str) -> str:
    if kind is AssessmentKind.BLUNDER:
        hint = f" {best_san} was necessary." if best_san else ""
        return f"Loses about {cp_loss / 100:.1f} pawns of evaluation.{hint}"
    if kind is AssessmentKind.MISTAKE:
        hint = f" {best_san} was stronger." if best_san else ""
        return f"Gives away {cp_loss / 100:.1f} pawns.{hint}"
    if kind is AssessmentKind.BRILLIANT:
        return "Offers material and keeps the evaluation."
    return "Finds the engine's top move and punishes the previous error."


def _build_summary(headers: dict[str, str], white: _SideAcc, black: _SideAcc) -> str:
    def describe(name: str, acc: _SideAcc) -> str:
        avg = acc.cp_loss_sum / acc.moves if acc.moves else 0.0
        accuracy = accuracy_from_avg_cp_loss(avg)
        return (
            f"{name} played at {accuracy:.0f}% accuracy with "
            f"{acc.blunders} blunder(s) and {acc.mistakes} mistake(s)"
        )

    parts = [
        describe(headers.get("White", "White"), white),
        describe(headers.get("Black", "Black"), black),
    ]
    summary = "; ".join(parts) + "."
    termination = headers.get("Termination")
    if termination:
        summary += f" {termination}."
    return summary
