"""Text rendering helpers for boards and placements."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .placement import Placement
from .tetromino import BASE_SHAPES, TetrominoType, rotate, shape_cells

# Value used for cells of an overlaid placement in ``render_grid``.
OVERLAY_VALUE = -1


def render_grid(
    board: Board,
    piece: Optional[TetrominoType] = None,
    placement: Optional[Placement] = None,
) -> List[List[int]]:
    """Return a copy of the board grid with ``piece`` overlaid at ``placement``.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board.  Cells covered by the overlay hold
    :data:`OVERLAY_VALUE` so they can be told apart from settled blocks.
    """

    grid = [[int(v) for v in row] for row in board.grid]
    if piece is not None and placement is not None:
        shape = rotate(BASE_SHAPES[piece], placement.rotation)
        for dr, dc in shape_cells(shape):
            r, c = placement.y + dr, placement.x + dc
            if 0 <= r < board.height and 0 <= c < board.width:
                grid[r][c] = OVERLAY_VALUE
    return grid


def render_ascii(
    board: Board,
    piece: Optional[TetrominoType] = None,
    placement: Optional[Placement] = None,
) -> str:
    """Return the board as text: ``#`` settled, ``@`` overlay, ``.`` empty."""

    lines = []
    for row in render_grid(board, piece, placement):
        lines.append("".join("@" if v < 0 else "#" if v else "." for v in row))
    return "\n".join(lines)


__all__ = ["OVERLAY_VALUE", "render_ascii", "render_grid"]
