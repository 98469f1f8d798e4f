"""Application settings with environment overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

_LOGGER = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.chess.com/pub"
# Chess.com rejects requests without a descriptive User-Agent.
DEFAULT_USER_AGENT = "chessreel/0.1 (desktop archive viewer)"


@dataclass(frozen=True)
class AppSettings:
    """All user-configurable settings."""

    # Archive
    api_base: str = DEFAULT_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout_s: float = 30.0
    max_concurrency: int = 8
    verify_username: bool = True

    # Sound
    sound_enabled: bool = True
    sound_volume: int = 80  # 0–100

    # Analysis
    engine_path: str | None = None
    analysis_time_ms: int = 150

    # Interface
    language: str = "English"

    # Diagnostics
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Build settings from defaults overridden by ``CHESSREEL_*`` variables."""
        env = os.environ if environ is None else environ
        settings = cls()
        overrides: dict[str, object] = {}

        if env.get("CHESSREEL_API_BASE"):
            overrides["api_base"] = env["CHESSREEL_API_BASE"].rstrip("/")
        if env.get("CHESSREEL_USER_AGENT"):
            overrides["user_agent"] = env["CHESSREEL_USER_AGENT"]
        if env.get("CHESSREEL_LOG_LEVEL"):
            overrides["log_level"] = env["CHESSREEL_LOG_LEVEL"].upper()
        if env.get("CHESSREEL_LANGUAGE"):
            overrides["language"] = env["CHESSREEL_LANGUAGE"]
        if env.get("STOCKFISH_PATH"):
            overrides["engine_path"] = env["STOCKFISH_PATH"]

        timeout = _parse_number(env, "CHESSREEL_TIMEOUT", float)
        if timeout is not None and timeout > 0:
            overrides["request_timeout_s"] = timeout
        concurrency = _parse_number(env, "CHESSREEL_MAX_CONCURRENCY", int)
        if concurrency is not None and concurrency > 0:
            overrides["max_concurrency"] = concurrency

        return replace(settings, **overrides) if overrides else settings


def _parse_number(
    env: Mapping[str, str],
    name: str,
    kind: type[int] | type[float],
) -> int | float | None:
    raw = env.get(name)
    if not raw:
        return None
    try:
        return kind(raw)
    except ValueError:
        _LOGGER.warning("Ignoring invalid %s=%r", name, raw)
        return None
