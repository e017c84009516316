"""Compare how long each difficulty survives a stream of random pieces.

Run with::

    PYTHONPATH=src python examples/benchmark_difficulties.py --games 5

Every registered difficulty plays the same seeded piece sequences; the number
of pieces placed before topping out (capped by ``--max-pieces``) and the lines
cleared are logged per difficulty.
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass

from reverse_tetris.difficulty import Difficulty, get_profile
from reverse_tetris.session import GameSession
from reverse_tetris.tetromino import TetrominoType


LOGGER = logging.getLogger(__name__)


@dataclass
class DifficultyResult:
    name: str
    games: int = 0
    pieces: int = 0
    lines: int = 0
    top_outs: int = 0

    @property
    def average_pieces(self) -> float:
        return self.pieces / self.games if self.games else 0.0


def play_game(difficulty: Difficulty, seed: int, max_pieces: int) -> GameSession:
    pieces_rng = random.Random(seed)
    session = GameSession(difficulty=get_profile(difficulty), rng=random.Random(seed))
    session.start()
    types = list(TetrominoType)
    for _ in range(max_pieces):
        session.send_piece(pieces_rng.choice(types))
        if session.game_over:
            break
    return session


def run_benchmark(games: int, max_pieces: int, seed: int) -> list[DifficultyResult]:
    results: list[DifficultyResult] = []
    for difficulty in Difficulty:
        result = DifficultyResult(name=difficulty.value)
        for game in range(games):
            session = play_game(difficulty, seed + game, max_pieces)
            result.games += 1
            result.pieces += session.pieces_sent
            result.lines += session.lines_cleared
            result.top_outs += int(session.game_over)
        LOGGER.info(
            "%s: avg_pieces=%.1f lines=%d top_outs=%d/%d",
            result.name,
            result.average_pieces,
            result.lines,
            result.top_outs,
            result.games,
        )
        results.append(result)
    return results


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--games", type=int, default=3, help="Games per difficulty.")
    parser.add_argument(
        "--max-pieces", type=int, default=300, help="Piece cap for a single game."
    )
    parser.add_argument("--seed", type=int, default=0, help="Base random seed.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    run_benchmark(args.games, args.max_pieces, args.seed)


if __name__ == "__main__":
    main()
