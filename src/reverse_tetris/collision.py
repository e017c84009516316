"""Collision checks and gravity resolution for rotated pieces.

``fits``
    Return whether a footprint can occupy a given position.

``drop_row``
    Compute the resting row of a footprint dropped from the top of the board
    at a given column.  All collision checks for the drop are evaluated at
    once with a sliding window over the affected board columns.

Both helpers accept anything :func:`~reverse_tetris.board.occupancy`
understands and never modify the board they are given.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .board import BoardLike, Occupancy, occupancy
from .tetromino import PieceShape


def _shape_mask(shape: PieceShape) -> np.ndarray:
    return np.asarray(shape, dtype=bool)


def fits_mask(occ: Occupancy, mask: np.ndarray, x: int, y: int) -> bool:
    """Return ``True`` if ``mask`` placed at ``(x, y)`` is legal on ``occ``."""

    h, w = mask.shape
    height, width = occ.shape
    if x < 0 or x + w > width:
        return False
    if y < 0 or y + h > height:
        return False
    window = occ[y : y + h, x : x + w]
    return not bool(np.any(window & mask))


def drop_row_mask(occ: Occupancy, mask: np.ndarray, x: int) -> Optional[int]:
    """Return the resting row for ``mask`` dropped at column ``x`` or ``None``."""

    h, w = mask.shape
    height, width = occ.shape
    if x < 0 or x + w > width or h > height:
        return None
    # windows[y] is the (h, w) board region the piece covers at row y.
    windows = sliding_window_view(occ[:, x : x + w], h, axis=0).transpose(0, 2, 1)
    blocked = np.flatnonzero(np.any(windows & mask, axis=(1, 2)))
    if blocked.size == 0:
        return height - h
    first_blocked = int(blocked[0])
    if first_blocked == 0:
        return None
    return first_blocked - 1


def fits(board: BoardLike, shape: PieceShape, x: int, y: int) -> bool:
    """Return ``True`` if ``shape`` at ``(x, y)`` is in bounds and overlaps nothing."""

    return fits_mask(occupancy(board), _shape_mask(shape), x, y)


def drop_row(board: BoardLike, shape: PieceShape, x: int) -> Optional[int]:
    """Return the row where ``shape`` comes to rest when dropped at column ``x``.

    The piece enters at row ``0`` and falls until the next row down would
    overlap a settled cell or leave the board.  ``None`` is returned when
    ``x`` does not leave room for the shape's width, or when the shape already
    collides at row ``0`` and therefore cannot enter the board at all.
    """

    return drop_row_mask(occupancy(board), _shape_mask(shape), x)


__all__ = ["drop_row", "drop_row_mask", "fits", "fits_mask"]
