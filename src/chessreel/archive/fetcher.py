"""Month-partitioned history retrieval with graceful degradation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from chessreel.archive.client import ArchiveClient
from chessreel.config import AppSettings
from chessreel.core.errors import ArchiveError, ArchiveNotFoundError
from chessreel.core.models import DateRange, Game, PartitionKey

_LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[], ArchiveClient]


class PartitionStatus(StrEnum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PartitionResult:
    """Contribution of one month to a search."""

    key: PartitionKey
    games: tuple[Game, ...] = field(default_factory=tuple)
    status: PartitionStatus = PartitionStatus.OK
    error: str | None = None


def iter_partitions(date_range: DateRange) -> list[PartitionKey]:
    """Every month from ``date_range.start`` to ``date_range.end``; empty if inverted."""
    return list(date_range.partitions())


def merge_partitions(results: Iterable[PartitionResult]) -> list[Game]:
    """Concatenate partition contributions, newest game first.

    The sort is stable, so games sharing an ``end_time`` keep their
    concatenation order.
    """
    games: list[Game] = []
    for result in results:
        games.extend(result.games)
    games.sort(key=lambda game: game.end_time, reverse=True)
    return games


class HistoryFetcher:
    """Collects a player's games over a month range.

    Every partition is requested concurrently. A 404 is an ordinary empty
    month; any other failure is logged and also contributes nothing, so one
    bad month never sinks the search.
    """

    __slots__ = ("_settings", "_client_factory")

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client_factory = client_factory or (
            lambda: ArchiveClient(self._settings)
        )

    async def fetch(self, username: str, date_range: DateRange) -> list[Game]:
        """Return every game of *username* in *date_range*, newest first."""
        results = await self.fetch_report(username, date_range)
        return merge_partitions(results)

    async def fetch_report(
        self,
        username: str,
        date_range: DateRange,
    ) -> list[PartitionResult]:
        """Per-partition results in partition order (not completion order)."""
        keys = iter_partitions(date_range)
        if not keys:
            _LOGGER.debug("Inverted range %s, nothing to fetch", date_range)
            return []

        semaphore = asyncio.Semaphore(max(1, self._settings.max_concurrency))
        async with self._client_factory() as client:
            results = await asyncio.gather(
                *(
                    self._retrieve(client, semaphore, username, key)
                    for key in keys
                )
            )

        failed = sum(1 for r in results if r.status == PartitionStatus.FAILED)
        _LOGGER.info(
            "Fetched %d partitions for %s (%d failed)",
            len(results),
            username,
            failed,
        )
        return list(results)

    async def player_exists(self, username: str) -> bool:
        async with self._client_factory() as client:
            return await client.player_exists(username)

    async def _retrieve(
        self,
        client: ArchiveClient,
        semaphore: asyncio.Semaphore,
        username: str,
        key: PartitionKey,
    ) -> PartitionResult:
        async with semaphore:
            try:
                games = await client.fetch_partition(username, key)
            except ArchiveNotFoundError:
                _LOGGER.debug("No archive for %s in %s", username, key)
                return PartitionResult(key, status=PartitionStatus.NOT_FOUND)
            except ArchiveError as exc:
                _LOGGER.warning("Partition %s for %s failed: %s", key, username, exc)
                return PartitionResult(
                    key,
                    status=PartitionStatus.FAILED,
                    error=str(exc),
                )
        return PartitionResult(key, games=tuple(games))
