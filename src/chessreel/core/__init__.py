"""Core domain layer: archive records, result vocabulary and rules adapter.

Quick start::

    from chessreel.core import parse_pgn, position_in_check

    parsed = parse_pgn(game.pgn)
    status = position_in_check(parsed.plies[-1].fen_after)
"""

from chessreel.core.enums import (
    DRAW_RESULTS,
    LOSS_RESULTS,
    PlayerResult,
    ResultCategory,
)
from chessreel.core.errors import (
    ArchiveError,
    ArchiveNotFoundError,
    ChessReelError,
    PgnParseError,
)
from chessreel.core.models import (
    DateRange,
    Game,
    ParsedGame,
    PartitionKey,
    PlayerSide,
    Ply,
    SearchFilters,
)
from chessreel.core.rules import (
    STARTING_FEN,
    CheckStatus,
    parse_pgn,
    position_in_check,
)

__all__ = [
    "ArchiveError",
    "ArchiveNotFoundError",
    "ChessReelError",
    "CheckStatus",
    "DRAW_RESULTS",
    "DateRange",
    "Game",
    "LOSS_RESULTS",
    "ParsedGame",
    "PartitionKey",
    "PgnParseError",
    "PlayerResult",
    "PlayerSide",
    "Ply",
    "ResultCategory",
    "STARTING_FEN",
    "SearchFilters",
    "parse_pgn",
    "position_in_check",
]
