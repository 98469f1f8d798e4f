"""Replay sound cues and their Qt multimedia player."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Protocol

from PyQt6.QtCore import QUrl
from PyQt6.QtMultimedia import QSoundEffect

from chessreel.runtime_assets import asset_path

_LOGGER = logging.getLogger(__name__)


class SoundCue(StrEnum):
    MOVE = "move"
    CAPTURE = "capture"
    CHECK = "check"
    CASTLE = "castle"
    END = "end"


def classify_cue(san: str | None) -> SoundCue:
    """Pick the cue for a SAN string.

    Priority (highest first): checkmate > check > capture > castle > move.
    ``None`` stands for the start position and gets the plain move cue.
    """
    if not san:
        return SoundCue.MOVE
    if "#" in san:
        return SoundCue.END
    if "+" in san:
        return SoundCue.CHECK
    if "x" in san:
        return SoundCue.CAPTURE
    if "O-O" in san:
        return SoundCue.CASTLE
    return SoundCue.MOVE


class CuePlayer(Protocol):
    """What the replay engine needs from a sound backend."""

    def play(self, cue: SoundCue) -> None: ...

    def release(self) -> None: ...


class SoundPlayer:
    """Plays replay cues (WAV via QSoundEffect).

    Effects are pre-loaded once so playback starts immediately. A new cue
    always interrupts the previous one.
    """

    _NAMES: dict[SoundCue, str] = {
        SoundCue.MOVE: "move.wav",
        SoundCue.CAPTURE: "capture.wav",
        SoundCue.CHECK: "check.wav",
        SoundCue.CASTLE: "castle.wav",
        SoundCue.END: "end.wav",
    }

    def __init__(self, volume: int = 80) -> None:
        self._volume = max(0, min(100, volume)) / 100.0
        self._effects: dict[SoundCue, QSoundEffect] = {}
        self._current: QSoundEffect | None = None

        for cue, filename in self._NAMES.items():
            path = asset_path("sounds", filename)
            if not path.is_file():
                _LOGGER.warning("Sound file not found: %s", path)
                continue
            effect = QSoundEffect()
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[cue] = effect

    # ── Public API ────────────────────────────────────────────────────────

    def set_volume(self, volume: int) -> None:
        """Set volume in range 0–100."""
        self._volume = max(0, min(100, volume)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def play(self, cue: SoundCue) -> None:
        effect = self._effects.get(cue)
        if effect is None:
            return
        if self._current is not None and self._current.isPlaying():
            self._current.stop()
        self._current = effect
        effect.play()

    def release(self) -> None:
        """Stop playback and drop every loaded effect."""
        if self._current is not None:
            self._current.stop()
        self._current = None
        for effect in self._effects.values():
            effect.deleteLater()
        self._effects.clear()
