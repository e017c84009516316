"""Tetromino definitions and the shape transformer.

Pieces are described as small occupancy matrices (tuples of tuples holding
``0`` or ``1``) in the orientation the player picks them.  Rotations are
derived by turning the matrix 90 degrees clockwise.  The distinct rotation
states of the seven standard tetrominoes are computed once at import time and
stored in :data:`ROTATION_TABLE`; arbitrary custom shapes are memoised on
first use.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .errors import MalformedPieceError

PieceShape = Tuple[Tuple[int, ...], ...]
RotationState = Tuple[int, PieceShape]
PieceLike = Union[str, Sequence[Sequence[int]]]

# Largest bounding box accepted for a piece in either dimension.
MAX_PIECE_SIZE = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# Spawn orientation of every piece, as shown in the piece selector.
BASE_SHAPES: Dict[TetrominoType, PieceShape] = {
    TetrominoType.I: ((1, 1, 1, 1),),
    TetrominoType.O: ((1, 1), (1, 1)),
    TetrominoType.T: ((0, 1, 0), (1, 1, 1)),
    TetrominoType.S: ((0, 1, 1), (1, 1, 0)),
    TetrominoType.Z: ((1, 1, 0), (0, 1, 1)),
    TetrominoType.J: ((1, 0, 0), (1, 1, 1)),
    TetrominoType.L: ((0, 0, 1), (1, 1, 1)),
}


def _rotate_once(shape: PieceShape) -> PieceShape:
    """Return ``shape`` turned 90 degrees clockwise."""

    return tuple(tuple(row) for row in zip(*shape[::-1]))


def rotate(shape: PieceShape, times: int) -> PieceShape:
    """Return ``shape`` rotated ``times`` quarter turns clockwise.

    The input is never modified.  Only ``times % 4`` turns are performed, so
    four rotations reproduce the original pattern and a count of ``0`` returns
    an equal shape.  For non-square pieces the row and column counts swap on
    every odd turn.

    Raises:
        ValueError: If ``times`` is negative.
    """

    if times < 0:
        raise ValueError("Rotation count must be non-negative")
    result = tuple(tuple(row) for row in shape)
    for _ in range(times % 4):
        result = _rotate_once(result)
    return result


def shape_width(shape: PieceShape) -> int:
    return len(shape[0])


def shape_height(shape: PieceShape) -> int:
    return len(shape)


def shape_cells(shape: PieceShape) -> List[Tuple[int, int]]:
    """Return the ``(row, col)`` offsets of every occupied cell in ``shape``."""

    return [
        (r, c)
        for r, row in enumerate(shape)
        for c, cell in enumerate(row)
        if cell
    ]


def _lookup_type(piece: object) -> Optional[TetrominoType]:
    if isinstance(piece, TetrominoType):
        return piece
    if isinstance(piece, str):
        try:
            return TetrominoType(piece.upper())
        except ValueError as exc:
            raise MalformedPieceError(f"Unknown tetromino type: {piece!r}") from exc
    return None


def resolve_type(piece: object) -> TetrominoType:
    """Return the :class:`TetrominoType` named by ``piece``.

    Raises:
        MalformedPieceError: If ``piece`` does not name a tetromino type.
    """

    t_type = _lookup_type(piece)
    if t_type is None:
        raise MalformedPieceError(f"Unknown tetromino type: {piece!r}")
    return t_type


def validate_shape(matrix: Sequence[Sequence[int]]) -> PieceShape:
    """Return ``matrix`` as a :data:`PieceShape` after checking it is well formed.

    A valid shape is a non-empty rectangular matrix of ``0``/``1`` values no
    larger than 4x4 whose bounding box is tight, i.e. every row and every
    column holds at least one occupied cell.

    Raises:
        MalformedPieceError: If any of the above does not hold.
    """

    rows = [list(row) for row in matrix]
    if not rows or not rows[0]:
        raise MalformedPieceError("Piece shape is empty")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise MalformedPieceError("Piece shape rows have different lengths")
    if len(rows) > MAX_PIECE_SIZE or width > MAX_PIECE_SIZE:
        raise MalformedPieceError(
            f"Piece shape exceeds {MAX_PIECE_SIZE}x{MAX_PIECE_SIZE}"
        )
    for row in rows:
        for cell in row:
            if cell not in (0, 1):
                raise MalformedPieceError(f"Piece cell must be 0 or 1, got {cell!r}")
    if not all(any(row) for row in rows):
        raise MalformedPieceError("Piece shape has an empty row")
    if not all(any(row[c] for row in rows) for c in range(width)):
        raise MalformedPieceError("Piece shape has an empty column")
    return tuple(tuple(int(cell) for cell in row) for row in rows)


def as_shape(piece: PieceLike) -> PieceShape:
    """Normalise a tetromino type, type name or matrix into a :data:`PieceShape`."""

    t_type = _lookup_type(piece)
    if t_type is not None:
        return BASE_SHAPES[t_type]
    return validate_shape(piece)  # type: ignore[arg-type]


def _distinct_rotations(shape: PieceShape) -> Tuple[RotationState, ...]:
    """Return ``(rotation_index, shape)`` for each distinct rotation of ``shape``.

    When several rotation counts produce the same occupancy pattern only the
    lowest index is kept.
    """

    states: List[RotationState] = []
    seen: set[PieceShape] = set()
    for index in range(4):
        rotated = rotate(shape, index)
        if rotated in seen:
            continue
        seen.add(rotated)
        states.append((index, rotated))
    return tuple(states)


ROTATION_TABLE: Dict[TetrominoType, Tuple[RotationState, ...]] = {
    t_type: _distinct_rotations(shape) for t_type, shape in BASE_SHAPES.items()
}


@lru_cache(maxsize=256)
def _custom_rotations(shape: PieceShape) -> Tuple[RotationState, ...]:
    return _distinct_rotations(shape)


def rotation_states(piece: PieceLike) -> Tuple[RotationState, ...]:
    """Return the distinct rotation states for ``piece``.

    Standard tetrominoes are served from :data:`ROTATION_TABLE`; other shapes
    are validated and memoised.
    """

    t_type = _lookup_type(piece)
    if t_type is not None:
        return ROTATION_TABLE[t_type]
    return _custom_rotations(validate_shape(piece))  # type: ignore[arg-type]


__all__ = [
    "BASE_SHAPES",
    "MAX_PIECE_SIZE",
    "PieceLike",
    "PieceShape",
    "ROTATION_TABLE",
    "RotationState",
    "TetrominoType",
    "as_shape",
    "resolve_type",
    "rotate",
    "rotation_states",
    "shape_cells",
    "shape_height",
    "shape_width",
    "validate_shape",
]
