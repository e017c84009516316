"""Board representation for the Tetris playfield."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidPlacementError
from .tetromino import PieceShape, TetrominoType


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]
Occupancy = NDArray[np.bool_]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  The
# specific numeric values are not important as long as ``0`` represents an empty
# cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Tetris board holding the occupied cells.

    The grid shape is fixed at construction; only cell contents change.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Board dimensions must be positive")
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from a list of rows (row 0 at the top)."""

        grid = np.asarray(rows, dtype=np.uint8)
        if grid.ndim != 2:
            raise ValueError("Board rows must form a rectangular grid")
        board = cls(width=grid.shape[1], height=grid.shape[0])
        board.grid[:, :] = grid
        return board

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == 0)
        return False

    def lock_shape(self, shape: PieceShape, x: int, y: int, value: int = 1) -> None:
        """Write the occupied cells of ``shape`` into the grid at ``(x, y)``.

        Raises:
            InvalidPlacementError: If the footprint leaves the board or
                overlaps an occupied cell.
        """

        mask = np.asarray(shape, dtype=bool)
        h, w = mask.shape
        if x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            raise InvalidPlacementError("Block out of bounds")
        region = self.grid[y : y + h, x : x + w]
        if np.any((region != 0) & mask):
            raise InvalidPlacementError("Block overlaps an occupied cell")
        region[mask] = np.uint8(value)

    def full_rows(self) -> NDArray[np.bool_]:
        return np.all(self.grid != 0, axis=1)

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed."""

        full_rows = self.full_rows()
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def max_height(self) -> int:
        """Return the height of the tallest column (``0`` for an empty board)."""

        occupied_rows = np.flatnonzero(np.any(self.grid != 0, axis=1))
        if occupied_rows.size == 0:
            return 0
        return self.height - int(occupied_rows[0])


BoardLike = Union[Board, Sequence[Sequence[int]], NDArray]


def occupancy(board: BoardLike) -> Occupancy:
    """Return a boolean occupancy array for ``board``.

    Accepts a :class:`Board`, a NumPy array or any rectangular nested
    sequence.  The result is always a fresh array; callers may modify it
    without touching ``board``.
    """

    grid = board.grid if isinstance(board, Board) else board
    occ = np.array(grid, copy=True) != 0
    if occ.ndim != 2 or occ.shape[0] == 0 or occ.shape[1] == 0:
        raise ValueError("Board must be a non-empty rectangular grid")
    return occ


__all__ = [
    "Board",
    "BoardLike",
    "Grid",
    "HEIGHT",
    "Occupancy",
    "PIECE_VALUES",
    "VALUE_PIECES",
    "WIDTH",
    "create_empty_grid",
    "occupancy",
]
