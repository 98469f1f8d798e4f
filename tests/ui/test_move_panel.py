"""Tests for move list panel behavior."""

from __future__ import annotations

from chessreel.core.models import Ply
from chessreel.ui.panels.move_panel import MovePanel, figurine_san


def _ply(san: str) -> Ply:
    return Ply(from_square="e2", to_square="e4", san=san, fen_after="")


def test_figurine_san_replaces_leading_piece_and_promotion() -> None:
    assert figurine_san("Nf3", white=True) == "♘f3"
    assert figurine_san("e8=Q+", white=True) == "e8=♕+"
    assert figurine_san("exd1=N", white=False) == "exd1=♞"
    assert figurine_san("O-O", white=False) == "O-O"


def test_set_plies_builds_one_button_per_ply() -> None:
    panel = MovePanel()
    panel.set_plies([_ply("Nf3"), _ply("Nc6"), _ply("e4")])

    assert panel._move_buttons[0].text() == "♘f3"
    assert panel._move_buttons[1].text() == "♞c6"
    assert panel._list.count() == 2


def test_black_first_game_shifts_columns() -> None:
    panel = MovePanel()
    panel.set_plies([_ply("Kd7"), _ply("e4")], white_first=False)

    assert panel._move_buttons[0].text() == "♚d7"
    assert panel._move_buttons[1].text() == "e4"
    assert panel._list.count() == 2


def test_clicking_move_emits_ply() -> None:
    panel = MovePanel()
    panel.set_plies([_ply("e4"), _ply("e5"), _ply("Nf3")])
    clicked: list[int] = []
    panel.move_clicked.connect(clicked.append)

    panel._move_buttons[1].click()

    assert clicked == [1]


def test_set_active_ply_marks_one_button() -> None:
    panel = MovePanel()
    panel.set_plies([_ply("e4"), _ply("e5")])

    panel.set_active_ply(1)
    assert panel.active_ply == 1
    assert panel._move_buttons[1].property("activeMove") is True
    assert panel._move_buttons[0].property("activeMove") is False

    panel.set_active_ply(-1)
    assert panel.active_ply is None
    assert panel._move_buttons[1].property("activeMove") is False


def test_clear_empties_list() -> None:
    panel = MovePanel()
    panel.set_plies([_ply("e4")])

    panel.clear()

    assert panel._list.count() == 0
    assert panel._move_buttons == {}
