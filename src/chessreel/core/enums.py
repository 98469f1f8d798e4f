"""Outcome vocabulary used by the Chess.com archive."""

from __future__ import annotations

from enum import StrEnum


class PlayerResult(StrEnum):
    """Per-side result codes as reported by the archive API."""

    WIN = "win"
    CHECKMATED = "checkmated"
    RESIGNED = "resigned"
    TIMEOUT = "timeout"
    ABANDONED = "abandoned"
    LOSE = "lose"
    AGREED = "agreed"
    REPETITION = "repetition"
    STALEMATE = "stalemate"
    INSUFFICIENT = "insufficient"
    FIFTY_MOVE = "50move"
    TIME_VS_INSUFFICIENT = "timevsinsufficient"
    # Variant-only outcomes
    KING_OF_THE_HILL = "kingofthehill"
    THREE_CHECK = "threecheck"
    BUGHOUSE_PARTNER_LOSE = "bughousepartnerlose"

    @property
    def is_win(self) -> bool:
        return self is PlayerResult.WIN

    @property
    def is_loss(self) -> bool:
        return self.value in LOSS_RESULTS

    @property
    def is_draw(self) -> bool:
        return self.value in DRAW_RESULTS


class ResultCategory(StrEnum):
    """Coarse result buckets offered by the search form."""

    ALL = "all"
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


LOSS_RESULTS: frozenset[str] = frozenset(
    {
        PlayerResult.CHECKMATED.value,
        PlayerResult.RESIGNED.value,
        PlayerResult.TIMEOUT.value,
        PlayerResult.ABANDONED.value,
        PlayerResult.LOSE.value,
    }
)

DRAW_RESULTS: frozenset[str] = frozenset(
    {
        PlayerResult.AGREED.value,
        PlayerResult.REPETITION.value,
        PlayerResult.STALEMATE.value,
        PlayerResult.INSUFFICIENT.value,
        PlayerResult.FIFTY_MOVE.value,
        PlayerResult.TIME_VS_INSUFFICIENT.value,
    }
)
