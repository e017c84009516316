from __future__ import annotations

import pytest

from reverse_tetris.__main__ import main, parse_pieces
from reverse_tetris.tetromino import TetrominoType


def test_parse_pieces() -> None:
    assert parse_pieces("i, o t") == [TetrominoType.I, TetrominoType.O, TetrominoType.T]


def test_main_plays_listed_pieces(capsys) -> None:
    assert main(["--pieces", "OO", "--difficulty", "hard"]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[19] == "####......"
    assert "score=20 pieces=2 lines=0 max_height=2" in lines[-1]


def test_main_random_pieces(capsys) -> None:
    assert main(["--random", "5", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "pieces=5" in out


def test_main_rejects_unknown_piece() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--pieces", "IX"])
    assert excinfo.value.code == 2
