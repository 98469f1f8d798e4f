"""Replay layer: cursor state machine, input adapters and sound cues.

Quick start::

    from chessreel.replay import ReplayEngine

    engine = ReplayEngine()
    engine.load_game(game)
    engine.step_forward()
"""

from chessreel.replay.engine import ReplayEngine
from chessreel.replay.input import (
    KEY_COMMANDS,
    ReplayCommand,
    ScrollThrottle,
    command_for_key,
    command_for_wheel,
)
from chessreel.replay.sounds import CuePlayer, SoundCue, SoundPlayer, classify_cue

__all__ = [
    "CuePlayer",
    "KEY_COMMANDS",
    "ReplayCommand",
    "ReplayEngine",
    "ScrollThrottle",
    "SoundCue",
    "SoundPlayer",
    "classify_cue",
    "command_for_key",
    "command_for_wheel",
]
