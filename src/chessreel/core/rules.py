"""Thin adapter over python-chess for PGN parsing and check detection."""

from __future__ import annotations

import io
from dataclasses import dataclass

import chess
import chess.pgn

from chessreel.core.errors import PgnParseError
from chessreel.core.models import ParsedGame, Ply

STARTING_FEN = chess.STARTING_FEN


@dataclass(frozen=True, slots=True)
class CheckStatus:
    """Check information for the side to move in a position."""

    in_check: bool
    side_to_move: chess.Color
    king_square: str | None = None


def parse_pgn(pgn_text: str) -> ParsedGame:
    """Parse *pgn_text* into its mainline plies.

    Raises:
        PgnParseError: when the text holds no game, names a variant other
            than standard chess or Chess960, or any move in the mainline is
            illegal or unreadable.
    """
    if not pgn_text or not pgn_text.strip():
        raise PgnParseError("Empty PGN")

    try:
        game = chess.pgn.read_game(io.StringIO(pgn_text))
    except (ValueError, KeyError) as exc:
        raise PgnParseError(f"Unreadable PGN: {exc}") from exc

    if game is None:
        raise PgnParseError("No game found in PGN")
    if game.errors:
        raise PgnParseError(f"Invalid PGN: {game.errors[0]}")

    try:
        board = game.board()
    except ValueError as exc:
        raise PgnParseError(f"Unsupported variant: {exc}") from exc
    if board.uci_variant != chess.Board.uci_variant:
        raise PgnParseError(
            f"Unsupported variant: {game.headers.get('Variant', board.uci_variant)}"
        )
    start_fen = board.fen()
    white_first = board.turn == chess.WHITE
    plies: list[Ply] = []
    for move in game.mainline_moves():
        san = board.san(move)
        board.push(move)
        plies.append(
            Ply(
                from_square=chess.square_name(move.from_square),
                to_square=chess.square_name(move.to_square),
                san=san,
                fen_after=board.fen(),
            )
        )
    return ParsedGame(
        start_fen=start_fen,
        plies=tuple(plies),
        white_first=white_first,
        headers=dict(game.headers),
    )


def position_in_check(fen: str) -> CheckStatus:
    """Report whether the side to move in *fen* is in check, and where its king is."""
    board = chess.Board(fen)
    side = board.turn
    if not board.is_check():
        return CheckStatus(in_check=False, side_to_move=side)
    king = board.king(side)
    return CheckStatus(
        in_check=True,
        side_to_move=side,
        king_square=chess.square_name(king) if king is not None else None,
    )
