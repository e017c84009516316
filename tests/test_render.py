from __future__ import annotations

from reverse_tetris.board import Board
from reverse_tetris.placement import Placement
from reverse_tetris.render import OVERLAY_VALUE, render_ascii, render_grid
from reverse_tetris.tetromino import TetrominoType


def test_overlay_does_not_touch_board() -> None:
    board = Board(width=4, height=3)
    board.set_cell(2, 0, 1)
    grid = render_grid(board, TetrominoType.O, Placement(0, 2, 1))
    assert grid[1][2:] == [OVERLAY_VALUE, OVERLAY_VALUE]
    assert grid[2] == [1, 0, OVERLAY_VALUE, OVERLAY_VALUE]
    assert board.get_cell(1, 2) == 0


def test_render_ascii() -> None:
    board = Board(width=4, height=3)
    board.set_cell(2, 0, 5)
    text = render_ascii(board, TetrominoType.I, Placement(1, 3, 0))
    assert text.splitlines() == ["...@", "...@", "#..@"]
