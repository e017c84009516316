"""Legal placement enumeration.

Every distinct rotation of the incoming piece is tried at every column where
its bounding box fits, and the gravity drop from
:mod:`reverse_tetris.collision` decides the resting row.  Quality of the
resulting board is not considered here.

Enumeration results are cached keyed by the board occupancy so repeated
queries against the same snapshot (e.g. the game loop re-asking after a
difficulty change) are cheap.  The cache stores primitive tuples and fresh
:class:`Placement` lists are built for every caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

import numpy as np

from .board import BoardLike, Occupancy, occupancy
from .collision import drop_row_mask
from .tetromino import PieceLike, RotationState, rotation_states, shape_width


@dataclass(frozen=True, order=True)
class Placement:
    """Resting position of a piece.

    ``rotation`` counts clockwise quarter turns from the base shape, ``x`` is
    the left edge column and ``y`` the top edge row.  Ordering follows
    ``(rotation, x, y)``.
    """

    rotation: int
    x: int
    y: int


BoardKey = Tuple[int, int, bytes]


def board_key(occ: Occupancy) -> BoardKey:
    """Return an immutable cache key for ``occ``."""

    height, width = occ.shape
    return (height, width, np.packbits(occ).tobytes())


def _unpack(key: BoardKey) -> Occupancy:
    height, width, packed = key
    bits = np.unpackbits(np.frombuffer(packed, dtype=np.uint8), count=height * width)
    return bits.reshape(height, width).astype(bool)


@lru_cache(maxsize=2048)
def cached_placements(
    key: BoardKey, states: Tuple[RotationState, ...]
) -> Tuple[Tuple[int, int, int], ...]:
    """Return ``(rotation, x, y)`` tuples for ``states`` on the board ``key``."""

    occ = _unpack(key)
    width = occ.shape[1]
    actions: List[Tuple[int, int, int]] = []
    for rotation, shape in states:
        mask = np.asarray(shape, dtype=bool)
        for x in range(width - shape_width(shape) + 1):
            y = drop_row_mask(occ, mask, x)
            if y is None:
                continue
            actions.append((rotation, x, y))
    return tuple(actions)


def enumerate_placements(board: BoardLike, piece: PieceLike) -> List[Placement]:
    """Return every legal placement of ``piece`` on ``board``.

    Placements are ordered by rotation index, then column.  An empty list
    means the piece cannot enter the board in any rotation, which the caller
    treats as the end of the game.

    Raises:
        MalformedPieceError: If ``piece`` is not a valid shape.
    """

    states = rotation_states(piece)
    key = board_key(occupancy(board))
    return [Placement(rotation=r, x=x, y=y) for (r, x, y) in cached_placements(key, states)]


__all__ = [
    "Placement",
    "board_key",
    "cached_placements",
    "enumerate_placements",
]
