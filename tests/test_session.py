from __future__ import annotations

import logging

import pytest

from reverse_tetris import Board, GameSession, Placement, TetrominoType
from reverse_tetris.board import PIECE_VALUES
from reverse_tetris.difficulty import get_profile
from reverse_tetris.errors import MalformedPieceError, UnknownDifficultyError


def _hard_session(board: Board | None = None) -> GameSession:
    session = GameSession(difficulty=get_profile("hard"), board=board or Board())
    session.start()
    return session


def test_pieces_are_ignored_until_started() -> None:
    session = GameSession()
    result = session.send_piece(TetrominoType.O)
    assert result.accepted is False
    assert session.pieces_sent == 0
    assert not session.board.grid.any()


def test_sending_a_piece_locks_it_and_scores() -> None:
    session = _hard_session()
    result = session.send_piece("o")
    assert result.accepted
    assert result.placement == Placement(0, 0, 18)
    assert result.score_delta == 10
    assert session.score == 10
    assert session.pieces_sent == 1
    assert session.max_height == 2
    assert session.board.get_cell(19, 0) == PIECE_VALUES[TetrominoType.O]
    assert session.history == [result]


def test_line_clear_scores_with_penalty(caplog) -> None:
    board = Board()
    for col in range(4, board.width):
        board.set_cell(board.height - 1, col, 1)
    session = _hard_session(board)
    with caplog.at_level(logging.INFO, logger="reverse_tetris.session"):
        result = session.send_piece(TetrominoType.I)
    assert result.lines_cleared == 1
    assert result.score_delta == 10 + 80
    assert session.lines_cleared == 1
    assert not session.board.grid.any()
    assert "cleared 1 line" in caplog.text


def test_no_legal_placement_ends_the_game() -> None:
    board = Board()
    for col in range(0, board.width, 2):
        board.set_cell(0, col, 1)
    session = _hard_session(board)
    result = session.send_piece(TetrominoType.O)
    assert result.game_over
    assert result.placement is None
    assert session.game_over
    assert not session.playing
    assert session.send_piece(TetrominoType.I).accepted is False


def test_reaching_the_top_row_ends_the_game() -> None:
    session = _hard_session(Board(width=4, height=2))
    result = session.send_piece(TetrominoType.O)
    assert result.placement == Placement(0, 0, 0)
    assert result.game_over
    assert session.score == 10


def test_pause_blocks_pieces() -> None:
    session = _hard_session()
    session.toggle_pause()
    assert session.send_piece(TetrominoType.T).accepted is False
    session.toggle_pause()
    assert session.send_piece(TetrominoType.T).accepted is True


def test_reset_clears_board_and_counters() -> None:
    session = _hard_session(Board(width=6, height=8))
    session.send_piece(TetrominoType.L)
    session.reset()
    assert session.score == 0
    assert session.pieces_sent == 0
    assert session.history == []
    assert not session.playing
    assert session.board.grid.shape == (8, 6)
    assert not session.board.grid.any()


def test_set_difficulty() -> None:
    session = GameSession()
    session.set_difficulty("easy")
    assert session.difficulty.name == "easy"
    with pytest.raises(UnknownDifficultyError):
        session.set_difficulty("insane")
    assert session.difficulty.name == "easy"


def test_unknown_piece_name_is_rejected() -> None:
    session = _hard_session()
    with pytest.raises(MalformedPieceError):
        session.send_piece("X")
    assert session.pieces_sent == 0
    assert session.playing
