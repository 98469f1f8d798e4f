"""Immutable records for archive games, date ranges and replay plies."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from chessreel.core.enums import ResultCategory


@dataclass(frozen=True, slots=True)
class PartitionKey:
    """One month of a player's archive, the smallest retrievable unit."""

    year: int
    month: int

    @property
    def ordinal(self) -> int:
        return self.year * 12 + self.month

    @property
    def path(self) -> str:
        """``YYYY/MM`` as used in archive URLs."""
        return f"{self.year:04d}/{self.month:02d}"

    def next(self) -> PartitionKey:
        if self.month == 12:
            return PartitionKey(self.year + 1, 1)
        return PartitionKey(self.year, self.month + 1)

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive month range; an inverted range simply selects nothing."""

    start_year: int
    start_month: int
    end_year: int
    end_month: int

    def __post_init__(self) -> None:
        for name in ("start_month", "end_month"):
            month = getattr(self, name)
            if not 1 <= month <= 12:
                raise ValueError(f"{name} must be in 1..12, got {month}")

    @classmethod
    def single_month(cls, year: int, month: int) -> DateRange:
        return cls(year, month, year, month)

    @property
    def start(self) -> PartitionKey:
        return PartitionKey(self.start_year, self.start_month)

    @property
    def end(self) -> PartitionKey:
        return PartitionKey(self.end_year, self.end_month)

    @property
    def is_inverted(self) -> bool:
        return self.start.ordinal > self.end.ordinal

    @property
    def month_count(self) -> int:
        if self.is_inverted:
            return 0
        return self.end.ordinal - self.start.ordinal + 1

    def partitions(self) -> Iterator[PartitionKey]:
        """Yield every month from start to end inclusive."""
        key = self.start
        last = self.end.ordinal
        while key.ordinal <= last:
            yield key
            key = key.next()


@dataclass(frozen=True, slots=True)
class PlayerSide:
    """One player's view of a finished game."""

    username: str
    rating: int = 0
    result: str = ""
    uuid: str = ""

    @classmethod
    def from_api(cls, payload: Mapping[str, Any] | None) -> PlayerSide:
        if payload is not None and not isinstance(payload, Mapping):
            raise TypeError(
                f"Player record must be an object, got {type(payload).__name__}"
            )
        data = payload or {}
        return cls(
            username=str(data.get("username", "")),
            rating=int(data.get("rating") or 0),
            result=str(data.get("result", "")),
            uuid=str(data.get("uuid", "")),
        )


@dataclass(frozen=True, slots=True)
class Game:
    """A finished game as delivered by a monthly archive partition.

    ``url`` is the unique id. Fields the archive omits default to empty
    values so that older or variant records still load.
    """

    url: str
    pgn: str
    end_time: int
    time_class: str
    white: PlayerSide
    black: PlayerSide
    time_control: str = ""
    rated: bool = False
    rules: str = "chess"
    initial_setup: str = ""
    fen: str = ""
    uuid: str = ""

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> Game:
        return cls(
            url=str(payload.get("url", "")),
            pgn=str(payload.get("pgn", "")),
            end_time=int(payload.get("end_time") or 0),
            time_class=str(payload.get("time_class", "")),
            white=PlayerSide.from_api(payload.get("white")),
            black=PlayerSide.from_api(payload.get("black")),
            time_control=str(payload.get("time_control", "")),
            rated=bool(payload.get("rated", False)),
            rules=str(payload.get("rules", "chess")),
            initial_setup=str(payload.get("initial_setup", "")),
            fen=str(payload.get("fen", "")),
            uuid=str(payload.get("uuid", "")),
        )

    def plays_white(self, username: str) -> bool:
        return self.white.username.lower() == username.lower()

    def side_of(self, username: str) -> PlayerSide:
        """Side of *username*; falls back to black when white does not match."""
        return self.white if self.plays_white(username) else self.black

    def opponent_of(self, username: str) -> PlayerSide:
        return self.black if self.plays_white(username) else self.white


@dataclass(frozen=True, slots=True)
class Ply:
    """One half-move with the position it leads to."""

    from_square: str
    to_square: str
    san: str
    fen_after: str


@dataclass(frozen=True, slots=True)
class ParsedGame:
    """Ply sequence of one game plus the position it starts from."""

    start_fen: str
    plies: tuple[Ply, ...] = field(default_factory=tuple)
    white_first: bool = True
    headers: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.plies)


@dataclass(frozen=True, slots=True)
class SearchFilters:
    """Filters for one search; ``result`` is a category or a raw result code."""

    opening: str = ""
    result: str = ResultCategory.ALL.value
