"""Command line demo for the reverse Tetris engine.

Run with: `python -m reverse_tetris --pieces IOTSZJL --difficulty hard`

Each listed piece is sent to the placement engine in turn; the final board and
the session counters are printed.  Pass ``--help`` for all options.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional, Sequence

from . import GameSession, render_ascii
from .difficulty import DEFAULT_DIFFICULTY, Difficulty, get_profile
from .tetromino import TetrominoType


LOGGER = logging.getLogger(__name__)


def parse_pieces(text: str) -> List[TetrominoType]:
    """Parse a string of piece letters such as ``"IOT"``."""

    pieces: List[TetrominoType] = []
    for letter in text.replace(",", "").replace(" ", ""):
        try:
            pieces.append(TetrominoType(letter.upper()))
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"Unknown piece: {letter!r}") from exc
    return pieces


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=DEFAULT_DIFFICULTY.value,
        help="Engine difficulty profile.",
    )
    parser.add_argument(
        "--pieces",
        type=parse_pieces,
        default=[],
        help="Pieces to send, e.g. IOTSZJL.",
    )
    parser.add_argument(
        "--random",
        type=int,
        default=0,
        help="Number of random pieces to send after --pieces.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
    )

    rng = random.Random(args.seed)
    pieces = list(args.pieces)
    pieces.extend(rng.choice(list(TetrominoType)) for _ in range(max(0, args.random)))

    session = GameSession(difficulty=get_profile(args.difficulty), rng=rng)
    session.start()
    for piece in pieces:
        session.send_piece(piece)
        if session.game_over:
            break

    print(render_ascii(session.board))
    print(
        f"difficulty={session.difficulty.name} score={session.score} "
        f"pieces={session.pieces_sent} lines={session.lines_cleared} "
        f"max_height={session.max_height} game_over={session.game_over}"
    )
    if session.game_over:
        LOGGER.info("The engine topped out")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
