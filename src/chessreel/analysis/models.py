"""Data models produced by game analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class AssessmentKind(StrEnum):
    """Key-moment categories reported for a game."""

    BRILLIANT = "brilliant"
    BLUNDER = "blunder"
    MISTAKE = "mistake"
    BEST = "best"

    @property
    def nag(self) -> str:
        """Chess NAG annotation symbol."""
        return _KIND_NAG[self]

    @property
    def color_hex(self) -> str:
        """Hex colour string for UI display."""
        return _KIND_COLOR[self]


_KIND_NAG: dict[AssessmentKind, str] = {
    AssessmentKind.BRILLIANT: "!!",
    AssessmentKind.BEST: "!",
    AssessmentKind.MISTAKE: "?",
    AssessmentKind.BLUNDER: "??",
}

_KIND_COLOR: dict[AssessmentKind, str] = {
    AssessmentKind.BRILLIANT: "#1baaa7",
    AssessmentKind.BEST: "#9bc700",
    AssessmentKind.MISTAKE: "#e68a2e",
    AssessmentKind.BLUNDER: "#ca3431",
}


@dataclass(slots=True, frozen=True)
class MoveAssessment:
    """One noteworthy move with a short explanation."""

    move_number: int
    color: str  # "white" | "black"
    assessment: AssessmentKind
    explanation: str
    ply: int = -1
    san: str = ""


@dataclass(slots=True, frozen=True)
class GameAnalysis:
    """Narrative summary plus key moments of a game."""

    summary: str
    move_assessments: tuple[MoveAssessment, ...] = field(default_factory=tuple)

    @classmethod
    def unavailable(cls) -> GameAnalysis:
        return cls(summary=UNAVAILABLE_SUMMARY)

    @property
    def is_available(self) -> bool:
        return self.summary != UNAVAILABLE_SUMMARY


UNAVAILABLE_SUMMARY = "Analysis unavailable at this time."
