"""ReplayEngine: cursor state machine behind the replay board.

Owns the ply sequence of the selected game, the cursor into it and the
autoplay flag. Buttons, keys, the scroll wheel and the autoplay timer all
go through the same navigation primitives; nothing else moves the cursor.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal

from chessreel.core.errors import PgnParseError
from chessreel.core.models import ParsedGame, Ply
from chessreel.core.rules import STARTING_FEN, parse_pgn, position_in_check
from chessreel.replay.input import (
    ReplayCommand,
    ScrollThrottle,
    command_for_key,
    command_for_wheel,
)
from chessreel.replay.sounds import CuePlayer, SoundPlayer, classify_cue

if TYPE_CHECKING:
    from chessreel.core.models import Game


class ReplayEngine(QObject):
    """Navigable, interruptible replay of one game.

    Cursor ``-1`` is the start position; ``0..N-1`` is the position after
    that ply. Methods must be called from the thread owning the engine.
    """

    AUTOPLAY_INTERVAL_MS = 800
    SCROLL_THROTTLE_MS = 30

    position_changed = pyqtSignal(int, str)  # cursor, fen
    playing_changed = pyqtSignal(bool)
    check_square_changed = pyqtSignal(object)  # square name or None
    game_loaded = pyqtSignal(int)  # ply count
    cue_played = pyqtSignal(str)

    def __init__(
        self,
        sound_player: CuePlayer | None = None,
        *,
        muted: bool = False,
        clock: Callable[[], float] = time.monotonic,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._sound_player: CuePlayer | None = (
            sound_player if sound_player is not None else SoundPlayer()
        )
        self._muted = muted
        self._parsed = ParsedGame(start_fen=STARTING_FEN)
        self._cursor = -1
        self._playing = False
        self._fen = STARTING_FEN
        self._check_square: str | None = None
        self._selection_id = 0

        self._scroll_throttle = ScrollThrottle(self.SCROLL_THROTTLE_MS, clock=clock)
        self._timer = QTimer(self)
        self._timer.setInterval(self.AUTOPLAY_INTERVAL_MS)
        self._timer.timeout.connect(self._on_autoplay_tick)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_muted(self) -> bool:
        return self._muted

    @property
    def plies(self) -> tuple[Ply, ...]:
        return self._parsed.plies

    @property
    def ply_count(self) -> int:
        return len(self._parsed.plies)

    @property
    def last_index(self) -> int:
        return len(self._parsed.plies) - 1

    @property
    def start_fen(self) -> str:
        return self._parsed.start_fen

    @property
    def fen(self) -> str:
        return self._fen

    @property
    def check_square(self) -> str | None:
        return self._check_square

    @property
    def current_ply(self) -> Ply | None:
        if self._cursor < 0:
            return None
        return self._parsed.plies[self._cursor]

    @property
    def selection_id(self) -> int:
        """Increments on every :meth:`reset`; identifies the active selection."""
        return self._selection_id

    # ── Selection ────────────────────────────────────────────────────────

    def load_game(self, game: Game) -> ParsedGame:
        """Parse *game* and install its plies.

        Raises:
            PgnParseError: the PGN is malformed or not standard chess; the
                current replay is kept.
        """
        parsed = parse_pgn(game.pgn)
        try:
            self.reset(parsed)
        except ValueError as exc:
            raise PgnParseError(f"Unreadable position: {exc}") from exc
        return parsed

    def reset(self, parsed: ParsedGame) -> None:
        """Install a new ply sequence and rewind to the start position.

        The start position is read before anything changes, so an
        unreadable FEN leaves the current replay in place.
        """
        fen, check_square = _position_at(parsed, -1)
        self._set_playing(False)
        self._parsed = parsed
        self._selection_id += 1
        self._scroll_throttle.reset()
        self._cursor = -1
        self._apply_position(fen, check_square)
        self.game_loaded.emit(len(parsed.plies))

    # ── Navigation primitives ────────────────────────────────────────────

    def goto(self, index: int) -> bool:
        """Move the cursor to *index*; ignored outside ``[-1, N-1]``."""
        if index < -1 or index >= len(self._parsed.plies):
            return False

        fen, check_square = _position_at(self._parsed, index)
        previous = self._cursor
        self._cursor = index
        self._apply_position(fen, check_square)
        if abs(index - previous) == 1:
            self._play_cue()
        if self._playing and self._cursor >= self.last_index:
            self._set_playing(False)
        return True

    def step_forward(self) -> bool:
        return self.goto(self._cursor + 1)

    def step_backward(self) -> bool:
        """Step one ply back; autoplay keeps running from the new position."""
        return self.goto(self._cursor - 1)

    def jump_to_start(self) -> bool:
        self._set_playing(False)
        return self.goto(-1)

    def jump_to_end(self) -> bool:
        self._set_playing(False)
        return self.goto(self.last_index)

    def toggle_play(self) -> None:
        """Start or pause autoplay; at the final ply, restart from the beginning."""
        if not self._parsed.plies:
            return
        if self._cursor >= self.last_index:
            self.jump_to_start()
            self._set_playing(True)
            return
        self._set_playing(not self._playing)

    # ── Input fan-in ─────────────────────────────────────────────────────

    def execute(self, command: ReplayCommand) -> None:
        if command is ReplayCommand.STEP_FORWARD:
            self.step_forward()
        elif command is ReplayCommand.STEP_BACKWARD:
            self.step_backward()
        elif command is ReplayCommand.JUMP_TO_START:
            self.jump_to_start()
        elif command is ReplayCommand.JUMP_TO_END:
            self.jump_to_end()
        elif command is ReplayCommand.TOGGLE_PLAY:
            self.toggle_play()

    def handle_key(self, key: int | Qt.Key) -> bool:
        """Run the command bound to *key*; ``False`` if the key is unbound."""
        command = command_for_key(key)
        if command is None:
            return False
        self.execute(command)
        return True

    def handle_wheel(self, delta_y: float) -> bool:
        """Step once per throttle window in the wheel's direction."""
        command = command_for_wheel(delta_y)
        if command is None or not self._scroll_throttle.accept():
            return False
        self.execute(command)
        return True

    # ── Sound ────────────────────────────────────────────────────────────

    def set_muted(self, muted: bool) -> None:
        self._muted = muted

    def shutdown(self) -> None:
        """Stop autoplay and release sound handles."""
        self._set_playing(False)
        if self._sound_player is not None:
            self._sound_player.release()
            self._sound_player = None

    # ── Internal helpers ─────────────────────────────────────────────────

    def _apply_position(self, fen: str, check_square: str | None) -> None:
        self._fen = fen
        self.position_changed.emit(self._cursor, self._fen)
        if check_square != self._check_square:
            self._check_square = check_square
            self.check_square_changed.emit(check_square)

    def _play_cue(self) -> None:
        if self._muted:
            return
        ply = self.current_ply
        cue = classify_cue(ply.san if ply is not None else None)
        if self._sound_player is not None:
            self._sound_player.play(cue)
        self.cue_played.emit(cue.value)

    def _set_playing(self, playing: bool) -> None:
        if playing:
            self._timer.start()
        else:
            self._timer.stop()
        if playing == self._playing:
            return
        self._playing = playing
        self.playing_changed.emit(playing)

    def _on_autoplay_tick(self) -> None:
        if not self._playing:
            return
        if not self.step_forward() or self._cursor >= self.last_index:
            self._set_playing(False)



def _position_at(parsed: ParsedGame, index: int) -> tuple[str, str | None]:
    """FEN at cursor *index* and the square of a king in check there."""
    fen = parsed.start_fen if index < 0 else parsed.plies[index].fen_after
    status = position_in_check(fen)
    return fen, status.king_square if status.in_check else None
