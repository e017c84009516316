"""High level game session for reverse Tetris.

The player chooses which tetromino to send; the placement engine decides
where it lands.  The session owns the live board and the bookkeeping around
each decision: locking the piece, clearing lines, scoring and detecting the
end of the game.  The player wins when the engine runs out of room.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
from typing import List, Optional

from .board import Board, PIECE_VALUES
from .difficulty import DEFAULT_DIFFICULTY, DifficultyLike, DifficultyProfile, get_profile
from .engine import select_move
from .placement import Placement
from .tetromino import BASE_SHAPES, TetrominoType, resolve_type, rotate


LOGGER = logging.getLogger(__name__)

# Points for every piece sent to the engine.
PIECE_POINTS = 10
# Points per cleared line; clearing helps the engine so part is taken back.
LINE_POINTS = 100
LINE_PENALTY = 20


@dataclass(frozen=True)
class TurnResult:
    """Outcome of sending one piece."""

    piece: TetrominoType
    accepted: bool
    placement: Optional[Placement] = None
    lines_cleared: int = 0
    score_delta: int = 0
    game_over: bool = False


@dataclass
class GameSession:
    """Mutable state for a reverse Tetris game session."""

    difficulty: DifficultyProfile = field(
        default_factory=lambda: get_profile(DEFAULT_DIFFICULTY)
    )
    board: Board = field(default_factory=Board)
    rng: random.Random = field(default_factory=random.Random)
    score: int = 0
    pieces_sent: int = 0
    lines_cleared: int = 0
    playing: bool = False
    paused: bool = False
    game_over: bool = False
    history: List[TurnResult] = field(default_factory=list)

    @property
    def max_height(self) -> int:
        return self.board.max_height()

    @property
    def accepting(self) -> bool:
        """``True`` while the session takes new pieces."""

        return self.playing and not self.paused

    def start(self) -> None:
        """Begin play.  Has no effect while a game is running."""

        if self.playing:
            return
        self.playing = True
        self.paused = False
        self.game_over = False

    def toggle_pause(self) -> None:
        if not self.playing:
            return
        self.paused = not self.paused

    def set_difficulty(self, difficulty: DifficultyLike) -> None:
        """Switch the engine's difficulty for subsequent pieces.

        Raises:
            UnknownDifficultyError: If ``difficulty`` is not registered.
        """

        self.difficulty = get_profile(difficulty)
        LOGGER.info("Difficulty set to %s", self.difficulty.name)

    def reset(self) -> None:
        """Reset the board and counters for a new game."""

        self.board = Board(self.board.width, self.board.height)
        self.score = 0
        self.pieces_sent = 0
        self.lines_cleared = 0
        self.playing = False
        self.paused = False
        self.game_over = False
        self.history = []

    def send_piece(self, piece: TetrominoType | str) -> TurnResult:
        """Hand ``piece`` to the engine and apply its chosen placement.

        The request is ignored unless a game is running and not paused.  When
        the engine finds no legal placement, or the locked piece reaches the
        top row, the game ends.

        Raises:
            MalformedPieceError: If ``piece`` does not name a tetromino type.
        """

        t_type = resolve_type(piece)
        if not self.accepting:
            return TurnResult(piece=t_type, accepted=False)

        placement = select_move(self.board, t_type, self.difficulty, rng=self.rng)
        if placement is None:
            self._end_game()
            result = TurnResult(piece=t_type, accepted=True, game_over=True)
            self.history.append(result)
            return result
        return self.commit_placement(t_type, placement)

    def commit_placement(self, piece: TetrominoType, placement: Placement) -> TurnResult:
        """Lock ``piece`` at ``placement`` and update the counters.

        Front-ends that animate the drop call this once the animation ends.

        Raises:
            InvalidPlacementError: If the placement does not fit the board.
        """

        t_type = resolve_type(piece)
        shape = rotate(BASE_SHAPES[t_type], placement.rotation)
        self.board.lock_shape(shape, placement.x, placement.y, PIECE_VALUES[t_type])
        self.pieces_sent += 1
        score_delta = PIECE_POINTS

        cleared = self.board.clear_full_rows()
        if cleared:
            self.lines_cleared += cleared
            score_delta += cleared * (LINE_POINTS - LINE_PENALTY)
            LOGGER.info("Engine cleared %d line(s)", cleared)
        self.score += score_delta

        if any(cell != 0 for cell in self.board.grid[0]):
            self._end_game()

        result = TurnResult(
            piece=t_type,
            accepted=True,
            placement=placement,
            lines_cleared=cleared,
            score_delta=score_delta,
            game_over=self.game_over,
        )
        self.history.append(result)
        return result

    def _end_game(self) -> None:
        self.playing = False
        self.game_over = True
        LOGGER.info(
            "Game over after %d piece(s); final score %d", self.pieces_sent, self.score
        )


__all__ = [
    "GameSession",
    "LINE_PENALTY",
    "LINE_POINTS",
    "PIECE_POINTS",
    "TurnResult",
]
