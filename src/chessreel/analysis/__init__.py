"""Game analysis APIs."""

from chessreel.analysis.models import (
    UNAVAILABLE_SUMMARY,
    AssessmentKind,
    GameAnalysis,
    MoveAssessment,
)
from chessreel.analysis.service import (
    AnalysisCancelled,
    AnalysisUnavailable,
    GameAnalyzer,
    accuracy_from_avg_cp_loss,
    classify_move,
    find_engine_binary,
)

__all__ = [
    "AnalysisCancelled",
    "AnalysisUnavailable",
    "AssessmentKind",
    "GameAnalysis",
    "GameAnalyzer",
    "MoveAssessment",
    "UNAVAILABLE_SUMMARY",
    "accuracy_from_avg_cp_loss",
    "classify_move",
    "find_engine_binary",
]
