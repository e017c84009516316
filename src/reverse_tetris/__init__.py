"""Reverse Tetris: the player picks the pieces, the engine places them."""

from .board import Board, PIECE_VALUES
from .difficulty import Difficulty, DifficultyProfile, SelectionPolicy, get_profile
from .engine import ScoredPlacement, rank_placements, select_move
from .errors import (
    InvalidPlacementError,
    MalformedPieceError,
    ReverseTetrisError,
    UnknownDifficultyError,
)
from .evaluator import BoardFeatures, HeuristicWeights, score
from .placement import Placement, enumerate_placements
from .collision import drop_row, fits
from .render import render_ascii, render_grid
from .session import GameSession, TurnResult
from .tetromino import TetrominoType, as_shape, rotate, rotation_states

__all__ = [
    "Board",
    "BoardFeatures",
    "Difficulty",
    "DifficultyProfile",
    "GameSession",
    "HeuristicWeights",
    "InvalidPlacementError",
    "MalformedPieceError",
    "PIECE_VALUES",
    "Placement",
    "ReverseTetrisError",
    "ScoredPlacement",
    "SelectionPolicy",
    "TetrominoType",
    "TurnResult",
    "UnknownDifficultyError",
    "as_shape",
    "drop_row",
    "enumerate_placements",
    "fits",
    "get_profile",
    "rank_placements",
    "render_ascii",
    "render_grid",
    "rotate",
    "rotation_states",
    "score",
    "select_move",
]
