"""Board evaluation heuristic.

A candidate placement is judged by the board it would leave behind.  The
post-placement board is materialised as a copy, completed rows are counted and
cleared, and a handful of structural features are combined linearly using a
:class:`HeuristicWeights` vector.  Lower height, fewer holes and a flatter
surface are good; completed lines are rewarded.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, List, Optional

import numpy as np

from .board import BoardLike, Occupancy, occupancy
from .collision import fits_mask
from .errors import InvalidPlacementError
from .placement import Placement
from .tetromino import PieceShape, rotate


@dataclass(frozen=True)
class HeuristicWeights:
    """Weights applied to each board feature.

    The four core weights follow the well known height/lines/holes/bumpiness
    heuristic.  The remaining ones default to ``0`` and are available to
    profiles that want a finer evaluation.
    """

    aggregate_height: float = -0.510066
    completed_lines: float = 0.760666
    holes: float = -0.35663
    bumpiness: float = -0.184483
    max_height: float = 0.0
    well_sum: float = 0.0
    row_transitions: float = 0.0
    col_transitions: float = 0.0


@dataclass(frozen=True)
class BoardFeatures:
    """Structural features of a (hypothetical) board."""

    aggregate_height: int
    completed_lines: int
    holes: int
    bumpiness: int
    max_height: int
    well_sum: int
    row_transitions: int
    col_transitions: int

    def as_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


FEATURE_NAMES = [f.name for f in fields(BoardFeatures)]


def column_heights(occ: Occupancy) -> np.ndarray:
    """Return the height of every column, ``0`` for empty columns."""

    height = occ.shape[0]
    any_col = occ.any(axis=0)
    first_occ = np.where(any_col, np.argmax(occ, axis=0), height)
    return height - first_occ


def aggregate_height(heights: np.ndarray) -> int:
    return int(heights.sum())


def count_holes(occ: Occupancy) -> int:
    """Count empty cells with at least one occupied cell above them."""

    covered = np.logical_or.accumulate(occ, axis=0)
    return int(np.count_nonzero(covered & ~occ))


def bumpiness(heights: np.ndarray) -> int:
    return int(np.abs(np.diff(heights)).sum())


def completed_lines(occ: Occupancy) -> int:
    return int(np.count_nonzero(occ.all(axis=1)))


def well_sum(heights: np.ndarray, wall_height: int) -> int:
    """Sum of well depths; the board walls count as columns of ``wall_height``."""

    padded = np.concatenate(([wall_height], heights, [wall_height]))
    neighbours = np.minimum(padded[:-2], padded[2:])
    depths = neighbours - heights
    return int(depths[depths > 0].sum())


def row_transitions(occ: Occupancy) -> int:
    """Count filled/empty changes along each row, walls counting as empty."""

    padded = np.pad(occ, ((0, 0), (1, 1)), constant_values=False)
    return int(np.count_nonzero(padded[:, 1:] != padded[:, :-1]))


def col_transitions(occ: Occupancy) -> int:
    """Count filled/empty changes down each column, the ceiling counting as empty."""

    padded = np.pad(occ, ((1, 0), (0, 0)), constant_values=False)
    return int(np.count_nonzero(padded[1:, :] != padded[:-1, :]))


def clear_lines(occ: Occupancy) -> Occupancy:
    """Return a copy of ``occ`` with completed rows removed and empty rows on top."""

    full = occ.all(axis=1)
    cleared = int(np.count_nonzero(full))
    if not cleared:
        return occ.copy()
    empty = np.zeros((cleared, occ.shape[1]), dtype=bool)
    return np.vstack((empty, occ[~full]))


def board_features(occ: Occupancy, lines: int = 0) -> BoardFeatures:
    """Compute :class:`BoardFeatures` for ``occ``.

    ``lines`` is the number of rows the placement completed; ``occ`` is
    expected to already have those rows removed.
    """

    heights = column_heights(occ)
    return BoardFeatures(
        aggregate_height=aggregate_height(heights),
        completed_lines=int(lines),
        holes=count_holes(occ),
        bumpiness=bumpiness(heights),
        max_height=int(heights.max()) if heights.size else 0,
        well_sum=well_sum(heights, occ.shape[0]),
        row_transitions=row_transitions(occ),
        col_transitions=col_transitions(occ),
    )


def weighted_sum(features: BoardFeatures, weights: HeuristicWeights) -> float:
    return float(
        sum(getattr(weights, name) * getattr(features, name) for name in FEATURE_NAMES)
    )


def apply_placement_mask(occ: Occupancy, mask: np.ndarray, x: int, y: int) -> Occupancy:
    """Return a copy of ``occ`` with ``mask`` written at ``(x, y)``."""

    if not fits_mask(occ, mask, x, y):
        raise InvalidPlacementError(f"Placement at x={x}, y={y} does not fit")
    after = occ.copy()
    h, w = mask.shape
    after[y : y + h, x : x + w] |= mask
    return after


def apply_placement(board: BoardLike, shape: PieceShape, placement: Placement) -> Occupancy:
    """Materialise the board as it would be after ``placement``.

    ``shape`` is the piece in its base orientation; it is rotated according to
    ``placement.rotation``.  The returned occupancy array is a new object and
    ``board`` is left untouched.

    Raises:
        InvalidPlacementError: If the rotated piece does not fit at
            ``(placement.x, placement.y)``.
    """

    mask = np.asarray(rotate(shape, placement.rotation), dtype=bool)
    return apply_placement_mask(occupancy(board), mask, placement.x, placement.y)


def evaluate(after: Occupancy, before: Optional[Occupancy] = None) -> BoardFeatures:
    """Count lines completed on ``after``, clear every full row and compute features.

    When ``before`` is given, rows that were already full on it do not count
    as completed by the placement.
    """

    full = after.all(axis=1)
    if before is not None:
        full &= ~before.all(axis=1)
    lines = int(np.count_nonzero(full))
    return board_features(clear_lines(after), lines)


def score(
    board: BoardLike,
    shape: PieceShape,
    placement: Placement,
    weights: HeuristicWeights,
) -> float:
    """Return the heuristic score of ``board`` after ``placement``. Higher is better."""

    before = occupancy(board)
    mask = np.asarray(rotate(shape, placement.rotation), dtype=bool)
    after = apply_placement_mask(before, mask, placement.x, placement.y)
    return weighted_sum(evaluate(after, before), weights)


__all__: List[str] = [
    "BoardFeatures",
    "FEATURE_NAMES",
    "HeuristicWeights",
    "aggregate_height",
    "apply_placement",
    "apply_placement_mask",
    "board_features",
    "bumpiness",
    "clear_lines",
    "col_transitions",
    "column_heights",
    "completed_lines",
    "count_holes",
    "evaluate",
    "row_transitions",
    "score",
    "weighted_sum",
    "well_sum",
]
