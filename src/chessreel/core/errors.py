"""Exception hierarchy shared by the archive, rules and replay layers."""

from __future__ import annotations


class ChessReelError(Exception):
    """Base class for all application errors."""


class ArchiveError(ChessReelError):
    """A partition or profile request failed for a reason other than 404."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ArchiveNotFoundError(ArchiveError):
    """The archive answered 404: no games for that month or unknown player."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=404)


class PgnParseError(ChessReelError):
    """PGN text could not be turned into a legal move sequence."""
