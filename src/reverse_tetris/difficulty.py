"""Difficulty profiles for the placement engine.

A profile bundles the heuristic weights used to score candidate placements
with a :class:`SelectionPolicy` deciding how a move is picked from the ranked
candidates.  Adding a difficulty means registering a new profile; the engine
itself has no per-difficulty branches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import random
from typing import Dict, Union

from .errors import UnknownDifficultyError
from .evaluator import HeuristicWeights


class Difficulty(str, Enum):
    """Names of the registered difficulty profiles."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


@dataclass(frozen=True)
class SelectionPolicy:
    """How a move is chosen from candidates ranked best first.

    With ``blunder_rate == 0`` the best candidate is always returned.
    Otherwise, with probability ``blunder_rate`` the choice is drawn uniformly
    from the ``pool_size`` best candidates, or the ``pool_size`` worst ones
    when ``from_worst`` is set.
    """

    blunder_rate: float = 0.0
    pool_size: int = 1
    from_worst: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.blunder_rate <= 1.0:
            raise ValueError("blunder_rate must be within [0, 1]")
        if self.pool_size < 1:
            raise ValueError("pool_size must be at least 1")

    @property
    def deterministic(self) -> bool:
        return self.blunder_rate == 0.0 or (self.pool_size == 1 and not self.from_worst)

    def pick(self, count: int, rng: random.Random) -> int:
        """Return the index of the chosen candidate among ``count`` ranked ones."""

        if count <= 0:
            raise ValueError("Cannot pick from an empty candidate list")
        if self.deterministic or rng.random() >= self.blunder_rate:
            return 0
        pool = min(self.pool_size, count)
        offset = rng.randrange(pool)
        return count - 1 - offset if self.from_worst else offset


@dataclass(frozen=True)
class DifficultyProfile:
    """Named bundle of heuristic weights and a selection policy."""

    name: str
    weights: HeuristicWeights = field(default_factory=HeuristicWeights)
    policy: SelectionPolicy = field(default_factory=SelectionPolicy)


PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.HARD: DifficultyProfile(
        name=Difficulty.HARD.value,
        weights=HeuristicWeights(),
        policy=SelectionPolicy(),
    ),
    Difficulty.NORMAL: DifficultyProfile(
        name=Difficulty.NORMAL.value,
        weights=HeuristicWeights(),
        policy=SelectionPolicy(blunder_rate=0.2, pool_size=3),
    ),
    Difficulty.EASY: DifficultyProfile(
        name=Difficulty.EASY.value,
        weights=HeuristicWeights(
            aggregate_height=-0.3,
            completed_lines=0.3,
            holes=-0.15,
            bumpiness=-0.1,
        ),
        policy=SelectionPolicy(blunder_rate=0.35, pool_size=5, from_worst=True),
    ),
}

DEFAULT_DIFFICULTY = Difficulty.NORMAL

DifficultyLike = Union[DifficultyProfile, Difficulty, str]


def get_profile(difficulty: DifficultyLike) -> DifficultyProfile:
    """Resolve ``difficulty`` into a :class:`DifficultyProfile`.

    Profiles are returned unchanged; enum members and their string values are
    looked up in :data:`PROFILES`.

    Raises:
        UnknownDifficultyError: If the name is not registered.
    """

    if isinstance(difficulty, DifficultyProfile):
        return difficulty
    try:
        key = Difficulty(difficulty.lower() if isinstance(difficulty, str) else difficulty)
    except ValueError as exc:
        raise UnknownDifficultyError(f"Unknown difficulty: {difficulty!r}") from exc
    return PROFILES[key]


__all__ = [
    "DEFAULT_DIFFICULTY",
    "Difficulty",
    "DifficultyLike",
    "DifficultyProfile",
    "PROFILES",
    "SelectionPolicy",
    "get_profile",
]
