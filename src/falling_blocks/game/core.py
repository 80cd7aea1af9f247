from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional

import numpy as np

from .grid import BOARD_HEIGHT, BOARD_WIDTH, Board
from .pieces import SHAPES, Shape, TetrominoType, rotate_clockwise, shape_cells
from .rng import RandomSource, make_rng


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    NONE = 4


class GameState(Enum):
    NO_PIECE = "no_piece"
    FALLING = "falling"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class ActivePiece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)


class FallingBlockGame:
    """One game session: a board, the falling piece, score and game-over flag.

    Every public operation either applies fully or does nothing. Illegal
    moves are ignored; the only terminal outcome is `GameState.GAME_OVER`,
    after which all operations are no-ops.
    """

    def __init__(self, rng: Optional[RandomSource] = None, seed: Optional[int] = None) -> None:
        self.rng = rng if rng is not None else make_rng(seed)
        self.board = Board(BOARD_WIDTH, BOARD_HEIGHT)
        self.score = 0
        self.game_over = False
        self.current_piece: Optional[ActivePiece] = None
        self.pieces_spawned = 0

    @property
    def state(self) -> GameState:
        if self.game_over:
            return GameState.GAME_OVER
        if self.current_piece is None:
            return GameState.NO_PIECE
        return GameState.FALLING

    @property
    def lines_cleared_total(self) -> int:
        return self.score

    def _random_kind(self) -> TetrominoType:
        return TetrominoType(self.rng.randrange(len(SHAPES)) + 1)

    def generate_piece(self) -> None:
        if self.state is not GameState.NO_PIECE:
            return
        kind = self._random_kind()
        shape = SHAPES[kind]
        x = self.board.width // 2 - shape.shape[1] // 2
        y = 0
        if not self.board.can_place(shape, x, y):
            self.game_over = True
            return
        self.current_piece = ActivePiece(kind=kind, shape=shape, x=x, y=y)
        self.pieces_spawned += 1

    def _shift(self, dx: int, dy: int) -> bool:
        piece = self.current_piece
        if self.game_over or piece is None:
            return False
        if not self.board.can_place(piece.shape, piece.x + dx, piece.y + dy):
            return False
        self.current_piece = piece.moved(dx, dy)
        return True

    def move_left(self) -> None:
        self._shift(-1, 0)

    def move_right(self) -> None:
        self._shift(1, 0)

    def move_down(self) -> None:
        if self.game_over or self.current_piece is None:
            return
        if self._shift(0, 1):
            return
        self._lock_piece()
        if not self.game_over:
            self.generate_piece()

    def _lock_piece(self) -> int:
        piece = self.current_piece
        assert piece is not None
        result = self.board.lock(piece.shape, piece.x, piece.y)
        if result.reached_top:
            # Top-out: no line clear on this lock.
            self.game_over = True
            self.current_piece = None
            return 0
        lines = self.board.clear_full_rows()
        self.score += lines
        self.current_piece = None
        return lines

    def rotate(self) -> None:
        piece = self.current_piece
        if self.game_over or piece is None:
            return
        rotated = rotate_clockwise(piece.shape)
        if self.board.can_place(rotated, piece.x, piece.y):
            self.current_piece = replace(piece, shape=rotated)

    def cell_at(self, row: int, col: int) -> bool:
        piece = self.current_piece
        if piece is not None:
            h, w = piece.shape.shape
            if piece.y <= row < piece.y + h and piece.x <= col < piece.x + w:
                if piece.shape[row - piece.y, col - piece.x]:
                    return True
        return self.board.cell(row, col)

    def step(self, action: Action) -> bool:
        """Apply one controller action and return the game-over flag."""
        action = Action(action)
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.SOFT_DROP:
            self.move_down()
        elif action == Action.ROTATE:
            self.rotate()
        return self.game_over

    def get_state(self) -> np.ndarray:
        # Locked cells are 1, the falling piece is overlaid as -1
        state = self.board.clone_state().astype(np.int8)
        piece = self.current_piece
        if piece is not None:
            for x, y in shape_cells(piece.shape, piece.x, piece.y):
                if self.board.is_inside(x, y):
                    state[y, x] = -1
        return state
