"""Simple pygame front-end for reverse Tetris.

The player sends pieces with the letter keys ``I O T S Z J L``; the engine
picks the placement and the piece is animated dropping into place before it is
locked by the :class:`~reverse_tetris.session.GameSession`.

Other keys: ``Space`` start, ``P`` pause, ``R`` reset, ``1/2/3`` select the
easy/normal/hard difficulty.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

import pygame

from .board import VALUE_PIECES
from .difficulty import Difficulty
from .engine import select_move
from .placement import Placement
from .session import GameSession
from .tetromino import BASE_SHAPES, PieceShape, TetrominoType, rotate, shape_cells


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Milliseconds between animation steps of a dropping piece
DROP_STEP_MS = 50
# Frames per second to run the game loop at
FPS = 60

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 240, 240),
    TetrominoType.O: (240, 240, 0),
    TetrominoType.T: (160, 0, 240),
    TetrominoType.S: (0, 240, 0),
    TetrominoType.Z: (240, 0, 0),
    TetrominoType.J: (0, 0, 240),
    TetrominoType.L: (240, 160, 0),
}

PIECE_KEYS = {
    pygame.K_i: TetrominoType.I,
    pygame.K_o: TetrominoType.O,
    pygame.K_t: TetrominoType.T,
    pygame.K_s: TetrominoType.S,
    pygame.K_z: TetrominoType.Z,
    pygame.K_j: TetrominoType.J,
    pygame.K_l: TetrominoType.L,
}

DIFFICULTY_KEYS = {
    pygame.K_1: Difficulty.EASY,
    pygame.K_2: Difficulty.NORMAL,
    pygame.K_3: Difficulty.HARD,
}


@dataclass
class DropAnimation:
    """Visual drop of a piece towards the engine's chosen placement.

    Each step turns the piece one more quarter (until the target rotation is
    reached) and moves it one row down.  The animation is purely visual; the
    session locks the piece once :attr:`done` is set.
    """

    piece: TetrominoType
    target: Placement
    rotation: int = 0
    row: int = 0
    done: bool = False

    @property
    def shape(self) -> PieceShape:
        return rotate(BASE_SHAPES[self.piece], self.rotation)

    def step(self) -> None:
        if self.done:
            return
        if self.rotation < self.target.rotation:
            self.rotation += 1
        if self.row < self.target.y:
            self.row += 1
        else:
            self.rotation = self.target.rotation
            self.done = True


def draw_board(screen: pygame.Surface, session: GameSession) -> None:
    """Render the settled cells of the session board."""

    board = session.board
    for r in range(board.height):
        for c in range(board.width):
            value = int(board.grid[r][c])
            color = SHAPE_COLORS[VALUE_PIECES[value]] if value else (17, 17, 17)
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, (51, 51, 51), rect, 1)


def draw_animation(screen: pygame.Surface, animation: DropAnimation) -> None:
    """Render the piece currently dropping."""

    color = SHAPE_COLORS[animation.piece]
    for dr, dc in shape_cells(animation.shape):
        rect = pygame.Rect(
            (animation.target.x + dc) * CELL_SIZE,
            (animation.row + dr) * CELL_SIZE,
            CELL_SIZE,
            CELL_SIZE,
        )
        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, (51, 51, 51), rect, 1)


class GameRunner:
    """Manage the window, input and the drop animation."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()
        self.animation: Optional[DropAnimation] = None
        self._running = False
        self._step_timer = 0

    @property
    def running(self) -> bool:
        return self._running

    def request_piece(self, piece: TetrominoType) -> Optional[DropAnimation]:
        """Ask the engine where ``piece`` goes and start animating it.

        Ignored while another piece is dropping or the session is not
        accepting pieces.  When the engine has no legal placement the piece is
        sent straight to the session, which ends the game.
        """

        session = self.session
        if self.animation is not None or not session.accepting:
            return None
        target = select_move(session.board, piece, session.difficulty, rng=session.rng)
        if target is None:
            session.send_piece(piece)
            return None
        self.animation = DropAnimation(piece=piece, target=target)
        return self.animation

    def advance(self, dt: int) -> None:
        """Advance the animation by ``dt`` milliseconds and lock it when done."""

        if self.animation is None or self.session.paused:
            return
        self._step_timer += dt
        while self._step_timer >= DROP_STEP_MS and self.animation is not None:
            self._step_timer -= DROP_STEP_MS
            self.animation.step()
            if self.animation.done:
                self._finish_animation()

    def _finish_animation(self) -> None:
        animation = self.animation
        if animation is None:
            return
        self.animation = None
        self._step_timer = 0
        self.session.commit_placement(animation.piece, animation.target)

    def handle_key(self, key: int) -> None:
        """Process a key press."""

        session = self.session
        if key in PIECE_KEYS:
            self.request_piece(PIECE_KEYS[key])
        elif key in DIFFICULTY_KEYS:
            session.set_difficulty(DIFFICULTY_KEYS[key])
        elif key == pygame.K_SPACE:
            session.start()
        elif key == pygame.K_p:
            session.toggle_pause()
        elif key == pygame.K_r:
            self.animation = None
            session.reset()

    def caption(self) -> str:
        session = self.session
        status = "Game over" if session.game_over else "Paused" if session.paused else ""
        return (
            f"Reverse Tetris [{session.difficulty.name}] {status} "
            f"Score: {session.score} Pieces: {session.pieces_sent} "
            f"Lines: {session.lines_cleared} Height: {session.max_height}"
        )

    def run(self) -> None:
        pygame.init()
        board = self.session.board
        screen = pygame.display.set_mode((board.width * CELL_SIZE, board.height * CELL_SIZE))
        clock = pygame.time.Clock()
        LOGGER.info("Game window opened")

        self._running = True
        while self._running:
            dt = clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)

            self.advance(dt)

            screen.fill((17, 17, 17))
            draw_board(screen, self.session)
            if self.animation is not None:
                draw_animation(screen, self.animation)
            pygame.display.set_caption(self.caption())
            pygame.display.flip()

        pygame.quit()
        LOGGER.info("Game window closed")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    GameRunner().run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
