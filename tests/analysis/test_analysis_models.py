"""Tests for analysis result models."""

from __future__ import annotations

from chessreel.analysis.models import (
    UNAVAILABLE_SUMMARY,
    AssessmentKind,
    GameAnalysis,
    MoveAssessment,
)


def test_unavailable_placeholder() -> None:
    analysis = GameAnalysis.unavailable()

    assert analysis.summary == UNAVAILABLE_SUMMARY == "Analysis unavailable at this time."
    assert analysis.move_assessments == ()
    assert not analysis.is_available


def test_assessment_kind_nag_and_colour() -> None:
    assert AssessmentKind.BLUNDER.nag == "??"
    assert AssessmentKind.BRILLIANT.nag == "!!"
    assert all(kind.color_hex.startswith("#") for kind in AssessmentKind)


def test_move_assessment_defaults() -> None:
    moment = MoveAssessment(12, "black", AssessmentKind.MISTAKE, "Drops a pawn.")

    assert moment.ply == -1
    assert moment.san == ""
    assert GameAnalysis("ok", (moment,)).is_available
