"""Pure result/opening filtering of a fetched game list."""

from __future__ import annotations

from collections.abc import Iterable

from chessreel.core.enums import DRAW_RESULTS, LOSS_RESULTS, PlayerResult, ResultCategory
from chessreel.core.models import Game, SearchFilters


def filter_games(
    games: Iterable[Game],
    username: str,
    filters: SearchFilters,
) -> list[Game]:
    """Games of *username* that pass *filters*, in input order."""
    return [game for game in games if matches(game, username, filters)]


def matches(game: Game, username: str, filters: SearchFilters) -> bool:
    opening = filters.opening.strip().lower()
    if opening and opening not in game.pgn.lower():
        return False
    return result_matches(game.side_of(username).result, filters.result)


def result_matches(result: str, wanted: str) -> bool:
    """Match a side's raw *result* against a category or a literal result code."""
    if wanted == ResultCategory.ALL:
        return True
    if wanted == ResultCategory.WIN:
        return result == PlayerResult.WIN
    if wanted == ResultCategory.LOSS:
        return result in LOSS_RESULTS
    if wanted == ResultCategory.DRAW:
        return result in DRAW_RESULTS
    return result == wanted
