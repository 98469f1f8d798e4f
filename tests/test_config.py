"""Tests for settings defaults and environment overrides."""

from __future__ import annotations

import logging

import pytest

from chessreel.config import DEFAULT_API_BASE, AppSettings


def test_defaults() -> None:
    settings = AppSettings.from_env({})

    assert settings == AppSettings()
    assert settings.api_base == DEFAULT_API_BASE
    assert settings.max_concurrency == 8
    assert settings.verify_username is True


def test_environment_overrides() -> None:
    settings = AppSettings.from_env(
        {
            "CHESSREEL_API_BASE": "http://localhost:8080/pub/",
            "CHESSREEL_USER_AGENT": "me@example.org",
            "CHESSREEL_TIMEOUT": "2.5",
            "CHESSREEL_MAX_CONCURRENCY": "3",
            "CHESSREEL_LOG_LEVEL": "debug",
            "CHESSREEL_LANGUAGE": "Russian",
            "STOCKFISH_PATH": "/opt/stockfish",
        }
    )

    assert settings.api_base == "http://localhost:8080/pub"
    assert settings.user_agent == "me@example.org"
    assert settings.request_timeout_s == 2.5
    assert settings.max_concurrency == 3
    assert settings.log_level == "DEBUG"
    assert settings.language == "Russian"
    assert settings.engine_path == "/opt/stockfish"


@pytest.mark.parametrize("raw", ["abc", "0", "-4"])
def test_invalid_numbers_keep_defaults(raw: str, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="chessreel.config"):
        settings = AppSettings.from_env({"CHESSREEL_MAX_CONCURRENCY": raw})

    assert settings.max_concurrency == 8
    if raw == "abc":
        assert "CHESSREEL_MAX_CONCURRENCY" in caplog.text
