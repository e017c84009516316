from __future__ import annotations

import random

from reverse_tetris.board import Board
from reverse_tetris.collision import drop_row
from reverse_tetris.placement import Placement, enumerate_placements
from reverse_tetris.tetromino import TetrominoType, rotation_states


def test_candidate_counts_on_empty_board() -> None:
    board = Board()
    assert len(enumerate_placements(board, TetrominoType.O)) == 9
    assert len(enumerate_placements(board, TetrominoType.I)) == 7 + 10
    assert len(enumerate_placements(board, TetrominoType.T)) == 8 + 9 + 8 + 9


def test_o_piece_placements_are_bottom_aligned() -> None:
    placements = enumerate_placements(Board(), TetrominoType.O)
    assert placements == [Placement(rotation=0, x=x, y=18) for x in range(9)]


def test_placements_are_ordered_by_rotation_then_column() -> None:
    placements = enumerate_placements(Board(), TetrominoType.L)
    keys = [(p.rotation, p.x) for p in placements]
    assert keys == sorted(keys)


def test_no_placement_when_entry_is_blocked() -> None:
    board = Board()
    for col in range(0, board.width, 2):
        board.set_cell(0, col, 1)
    assert enumerate_placements(board, TetrominoType.O) == []
    # A vertical I still fits through the odd columns.
    assert enumerate_placements(board, TetrominoType.I)


def test_non_empty_whenever_any_drop_succeeds() -> None:
    rng = random.Random(5)
    for _ in range(40):
        rows = [[0] * 10 for _ in range(20)]
        for col in range(10):
            height = rng.randrange(15, 21)
            for row in range(20 - height, 20):
                rows[row][col] = 1 if rng.random() < 0.9 else 0
        board = Board.from_rows(rows)
        for t_type in TetrominoType:
            possible = any(
                drop_row(board, shape, x) is not None
                for _, shape in rotation_states(t_type)
                for x in range(10 - len(shape[0]) + 1)
            )
            assert bool(enumerate_placements(board, t_type)) == possible


def test_returned_lists_are_independent() -> None:
    board = Board()
    first = enumerate_placements(board, TetrominoType.S)
    first.clear()
    assert enumerate_placements(board, TetrominoType.S)


def test_custom_shapes_are_enumerated() -> None:
    placements = enumerate_placements(Board(width=3, height=2), [[1]])
    assert placements == [Placement(0, x, 1) for x in range(3)]
