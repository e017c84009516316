"""Move selection: the public entry point of the placement engine.

:func:`select_move` is a pure function of ``(board, piece, difficulty)``.  It
never mutates the board; it returns the chosen :class:`Placement` (or
``None`` when the piece cannot enter the board) and leaves locking, line
clears and game-over checks to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import random
from typing import Dict, List, Optional

import numpy as np

from .board import BoardLike, occupancy
from .difficulty import DifficultyLike, get_profile
from .evaluator import (
    BoardFeatures,
    HeuristicWeights,
    apply_placement_mask,
    evaluate,
    weighted_sum,
)
from .placement import Placement, enumerate_placements
from .tetromino import PieceLike, rotation_states


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredPlacement:
    """A candidate placement together with its evaluation."""

    placement: Placement
    score: float
    features: BoardFeatures


def rank_placements(
    board: BoardLike, piece: PieceLike, weights: HeuristicWeights
) -> List[ScoredPlacement]:
    """Score every legal placement of ``piece`` and return them best first.

    Equal scores are ordered by rotation index, then column, so the ranking is
    reproducible for identical inputs.
    """

    occ = occupancy(board)
    masks: Dict[int, np.ndarray] = {
        rotation: np.asarray(shape, dtype=bool)
        for rotation, shape in rotation_states(piece)
    }
    scored: List[ScoredPlacement] = []
    for placement in enumerate_placements(occ, piece):
        after = apply_placement_mask(occ, masks[placement.rotation], placement.x, placement.y)
        features = evaluate(after, occ)
        scored.append(
            ScoredPlacement(
                placement=placement,
                score=weighted_sum(features, weights),
                features=features,
            )
        )
    scored.sort(key=lambda item: (-item.score, item.placement.rotation, item.placement.x))
    return scored


def select_move(
    board: BoardLike,
    piece: PieceLike,
    difficulty: DifficultyLike,
    *,
    rng: Optional[random.Random] = None,
) -> Optional[Placement]:
    """Choose where ``piece`` goes on ``board`` under ``difficulty``.

    Parameters
    ----------
    board:
        Read-only board snapshot (a :class:`~reverse_tetris.board.Board` or a
        2D grid where non-zero cells are occupied).
    piece:
        A :class:`~reverse_tetris.tetromino.TetrominoType`, its name, or an
        occupancy matrix in base orientation.
    difficulty:
        A registered difficulty name or a
        :class:`~reverse_tetris.difficulty.DifficultyProfile`.
    rng:
        Random source for degraded selection policies.  Ignored by
        deterministic profiles.

    Returns ``None`` when no legal placement exists.

    Raises:
        MalformedPieceError: If ``piece`` is not a valid shape.
        UnknownDifficultyError: If ``difficulty`` is not registered.
    """

    profile = get_profile(difficulty)
    ranked = rank_placements(board, piece, profile.weights)
    if not ranked:
        LOGGER.debug("No legal placement for piece %r", piece)
        return None

    index = profile.policy.pick(len(ranked), rng or random.Random())
    choice = ranked[index]
    LOGGER.debug(
        "%s: chose %s (score=%.4f, rank %d of %d)",
        profile.name,
        choice.placement,
        choice.score,
        index + 1,
        len(ranked),
    )
    return choice.placement


__all__ = ["ScoredPlacement", "rank_placements", "select_move"]
