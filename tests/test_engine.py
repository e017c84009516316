from __future__ import annotations

import logging
import random

import numpy as np
import pytest

from reverse_tetris import (
    Board,
    DifficultyProfile,
    HeuristicWeights,
    MalformedPieceError,
    Placement,
    SelectionPolicy,
    TetrominoType,
    UnknownDifficultyError,
    rank_placements,
    select_move,
)
from reverse_tetris.collision import fits
from reverse_tetris.difficulty import Difficulty
from reverse_tetris.tetromino import BASE_SHAPES, rotate


def _random_board(rng: random.Random) -> Board:
    board = Board()
    for col in range(board.width):
        height = rng.randrange(0, 14)
        for row in range(board.height - height, board.height):
            if rng.random() < 0.85:
                board.set_cell(row, col, 1)
    return board


@pytest.mark.parametrize("difficulty", [d.value for d in Difficulty])
def test_selected_moves_are_legal(difficulty: str) -> None:
    rng = random.Random(2024)
    for _ in range(25):
        board = _random_board(rng)
        for t_type in TetrominoType:
            placement = select_move(board, t_type, difficulty, rng=rng)
            assert placement is not None
            shape = rotate(BASE_SHAPES[t_type], placement.rotation)
            assert fits(board, shape, placement.x, placement.y)
            assert not fits(board, shape, placement.x, placement.y + 1)


def test_optimal_profile_is_deterministic() -> None:
    board = _random_board(random.Random(9))
    first = select_move(board, TetrominoType.T, "hard")
    for _ in range(5):
        assert select_move(board, TetrominoType.T, "hard") == first


def test_ties_break_on_lowest_column() -> None:
    # x=0 and x=8 leave identical boards; the lower column wins.
    assert select_move(Board(), TetrominoType.O, Difficulty.HARD) == Placement(0, 0, 18)


def test_ties_break_on_lowest_rotation_before_column() -> None:
    # With every weight at zero all candidates tie.  Column 1 is full, so the
    # horizontal I cannot start left of x=2 while the vertical one fits at x=0.
    board = Board()
    for row in range(board.height):
        board.set_cell(row, 1, 1)
    flat = DifficultyProfile(name="flat", weights=HeuristicWeights(0.0, 0.0, 0.0, 0.0))

    assert select_move(board, TetrominoType.I, flat) == Placement(0, 2, 19)

    ranked = [item.placement for item in rank_placements(board, "I", flat.weights)]
    assert Placement(1, 0, 16) in ranked
    assert ranked == sorted(ranked, key=lambda p: (p.rotation, p.x))


def test_single_cell_fills_the_gap() -> None:
    board = Board()
    for col in range(board.width - 1):
        board.set_cell(board.height - 1, col, 1)
    assert select_move(board, [[1]], "hard") == Placement(0, 9, 19)


def test_i_piece_completes_bottom_line() -> None:
    board = Board()
    for col in range(4, board.width):
        board.set_cell(board.height - 1, col, 1)
    assert select_move(board, "I", "hard") == Placement(0, 0, 19)


def test_no_legal_placement_returns_none() -> None:
    board = Board()
    for col in range(0, board.width, 2):
        board.set_cell(0, col, 1)
    assert select_move(board, TetrominoType.O, "hard") is None


def test_select_move_does_not_mutate_board() -> None:
    board = _random_board(random.Random(1))
    snapshot = board.grid.copy()
    select_move(board, TetrominoType.Z, "normal", rng=random.Random(0))
    assert np.array_equal(board.grid, snapshot)


def test_unknown_difficulty_fails_fast() -> None:
    with pytest.raises(UnknownDifficultyError):
        select_move(Board(), TetrominoType.O, "impossible")
    with pytest.raises(ValueError):
        select_move(Board(), TetrominoType.O, "impossible")


def test_malformed_piece_is_rejected() -> None:
    with pytest.raises(MalformedPieceError):
        select_move(Board(), [[1, 0], [1]], "hard")


def test_ranking_is_best_first() -> None:
    ranked = rank_placements(_random_board(random.Random(4)), TetrominoType.L, HeuristicWeights())
    scores = [item.score for item in ranked]
    assert scores == sorted(scores, reverse=True)


def test_degraded_profile_picks_from_worst_pool() -> None:
    board = _random_board(random.Random(6))
    profile = DifficultyProfile(
        name="sloppy",
        policy=SelectionPolicy(blunder_rate=1.0, pool_size=3, from_worst=True),
    )
    worst = {item.placement for item in rank_placements(board, "J", profile.weights)[-3:]}
    rng = random.Random(0)
    for _ in range(10):
        assert select_move(board, "J", profile, rng=rng) in worst


def test_choice_is_logged(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="reverse_tetris.engine"):
        select_move(Board(), TetrominoType.O, "hard")
    assert "hard: chose" in caplog.text
