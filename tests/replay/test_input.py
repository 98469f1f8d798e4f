"""Tests for key/wheel mapping and the scroll throttle."""

from __future__ import annotations

from PyQt6.QtCore import Qt

from chessreel.replay.input import (
    ReplayCommand,
    ScrollThrottle,
    command_for_key,
    command_for_wheel,
)


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_keys_map_to_commands() -> None:
    assert command_for_key(Qt.Key.Key_Right) is ReplayCommand.STEP_FORWARD
    assert command_for_key(Qt.Key.Key_Left.value) is ReplayCommand.STEP_BACKWARD
    assert command_for_key(Qt.Key.Key_Up) is ReplayCommand.JUMP_TO_START
    assert command_for_key(Qt.Key.Key_Down) is ReplayCommand.JUMP_TO_END
    assert command_for_key(Qt.Key.Key_Space) is ReplayCommand.TOGGLE_PLAY
    assert command_for_key(Qt.Key.Key_A) is None


def test_wheel_direction() -> None:
    assert command_for_wheel(-120) is ReplayCommand.STEP_BACKWARD
    assert command_for_wheel(120) is ReplayCommand.STEP_FORWARD
    assert command_for_wheel(0) is None


def test_throttle_accepts_once_per_window() -> None:
    clock = _Clock()
    throttle = ScrollThrottle(30, clock=clock)

    accepted = []
    for _ in range(10):
        accepted.append(throttle.accept())
        clock.now += 0.002

    assert accepted.count(True) == 1
    assert accepted[0] is True


def test_throttle_reopens_after_window() -> None:
    clock = _Clock()
    throttle = ScrollThrottle(30, clock=clock)

    assert throttle.accept()
    clock.now += 0.029
    assert not throttle.accept()
    clock.now += 0.002
    assert throttle.accept()


def test_throttle_reset_forgets_last_event() -> None:
    clock = _Clock()
    throttle = ScrollThrottle(30, clock=clock)

    assert throttle.accept()
    throttle.reset()
    assert throttle.accept()
