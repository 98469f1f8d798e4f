"""Async HTTP client for the Chess.com public archive."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from chessreel.config import AppSettings
from chessreel.core.errors import ArchiveError, ArchiveNotFoundError
from chessreel.core.models import Game, PartitionKey

_LOGGER = logging.getLogger(__name__)


class ArchiveClient:
    """Issues partition and profile requests against the archive API.

    Use as an async context manager so the underlying connection pool is
    closed once a search completes::

        async with ArchiveClient(settings) as client:
            games = await client.fetch_partition("alice", PartitionKey(2024, 3))
    """

    __slots__ = ("_settings", "_transport", "_client")

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ArchiveClient:
        self._client = httpx.AsyncClient(
            base_url=self._settings.api_base,
            headers={"User-Agent": self._settings.user_agent},
            timeout=self._settings.request_timeout_s,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ── Requests ─────────────────────────────────────────────────────────

    async def fetch_partition(self, username: str, key: PartitionKey) -> list[Game]:
        """Return the games of one month.

        Raises:
            ArchiveNotFoundError: the archive has nothing for that month.
            ArchiveError: any other failure (status, transport, payload).
        """
        path = f"/player/{_user_path(username)}/games/{key.path}"
        payload = await self._get_json(path)
        games = payload.get("games") if isinstance(payload, dict) else None
        if games is None:
            return []
        if not isinstance(games, list):
            raise ArchiveError(f"Malformed archive payload for {key}")
        try:
            return [Game.from_api(item) for item in games if isinstance(item, dict)]
        except (AttributeError, TypeError, ValueError) as exc:
            raise ArchiveError(f"Malformed game record in {key}: {exc}") from exc

    async def player_exists(self, username: str) -> bool:
        """Probe the player profile endpoint; any failure counts as absent."""
        if not username.strip():
            return False
        try:
            await self._get_json(f"/player/{_user_path(username)}")
        except ArchiveError as exc:
            _LOGGER.debug("Profile probe for %r failed: %s", username, exc)
            return False
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    async def _get_json(self, path: str) -> Any:
        if self._client is None:
            raise RuntimeError("ArchiveClient used outside 'async with'")
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            raise ArchiveError(f"Request to {path} failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise ArchiveNotFoundError(f"{path} not found")
        if not response.is_success:
            raise ArchiveError(
                f"{path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ArchiveError(f"{path} returned invalid JSON") from exc


def _user_path(username: str) -> str:
    return username.strip().lower()
