"""Archive retrieval: HTTP client, partitioned fetcher and result filter."""

from chessreel.archive.client import ArchiveClient
from chessreel.archive.fetcher import (
    HistoryFetcher,
    PartitionResult,
    PartitionStatus,
    iter_partitions,
    merge_partitions,
)
from chessreel.archive.filters import filter_games, matches, result_matches

__all__ = [
    "ArchiveClient",
    "HistoryFetcher",
    "PartitionResult",
    "PartitionStatus",
    "filter_games",
    "iter_partitions",
    "matches",
    "merge_partitions",
    "result_matches",
]
