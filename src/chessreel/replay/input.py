"""Input adapters: every source resolves to a :class:`ReplayCommand`."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import Enum, auto

from PyQt6.QtCore import Qt


class ReplayCommand(Enum):
    STEP_FORWARD = auto()
    STEP_BACKWARD = auto()
    JUMP_TO_START = auto()
    JUMP_TO_END = auto()
    TOGGLE_PLAY = auto()


# Keyed by int because QKeyEvent.key() returns a plain int in PyQt6.
KEY_COMMANDS: dict[int, ReplayCommand] = {
    Qt.Key.Key_Right.value: ReplayCommand.STEP_FORWARD,
    Qt.Key.Key_Left.value: ReplayCommand.STEP_BACKWARD,
    Qt.Key.Key_Up.value: ReplayCommand.JUMP_TO_START,
    Qt.Key.Key_Down.value: ReplayCommand.JUMP_TO_END,
    Qt.Key.Key_Space.value: ReplayCommand.TOGGLE_PLAY,
}


def command_for_key(key: int | Qt.Key) -> ReplayCommand | None:
    value = key.value if isinstance(key, Qt.Key) else int(key)
    return KEY_COMMANDS.get(value)


def command_for_wheel(delta_y: float) -> ReplayCommand | None:
    """Wheel up steps back, wheel down steps forward."""
    if delta_y < 0:
        return ReplayCommand.STEP_BACKWARD
    if delta_y > 0:
        return ReplayCommand.STEP_FORWARD
    return None


class ScrollThrottle:
    """Accepts at most one wheel event per window.

    The window opens at the accepted event, so a burst of events from one
    physical gesture counts once.
    """

    __slots__ = ("_window_s", "_clock", "_last_accepted")

    def __init__(
        self,
        window_ms: int = 30,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window_s = window_ms / 1000.0
        self._clock = clock
        self._last_accepted: float | None = None

    def accept(self) -> bool:
        now = self._clock()
        if self._last_accepted is not None and now - self._last_accepted < self._window_s:
            return False
        self._last_accepted = now
        return True

    def reset(self) -> None:
        self._last_accepted = None
