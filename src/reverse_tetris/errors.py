"""Exception types raised by the placement engine."""

from __future__ import annotations


class ReverseTetrisError(Exception):
    """Base class for all engine errors."""


class MalformedPieceError(ReverseTetrisError, ValueError):
    """Raised when a piece matrix is empty, ragged or otherwise invalid."""


class UnknownDifficultyError(ReverseTetrisError, ValueError):
    """Raised when a difficulty name does not match a registered profile."""


class InvalidPlacementError(ReverseTetrisError):
    """Raised when a placement cannot be applied to a board."""


__all__ = [
    "ReverseTetrisError",
    "MalformedPieceError",
    "UnknownDifficultyError",
    "InvalidPlacementError",
]
