"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Board: Grid of locked cells, collision checks and line clearing
- TetrominoType / SHAPES / rotate_clockwise: The seven piece shapes and rotation
- FallingBlockGame: Active piece, score and game-over state
- GravityTicker: Interval-driven gravity for an external event loop
"""

from .grid import BOARD_HEIGHT, BOARD_WIDTH, Board, LockResult
from .pieces import SHAPES, Shape, TetrominoType, rotate_clockwise, shape_cells
from .rng import RandomSource, make_rng
from .core import Action, ActivePiece, FallingBlockGame, GameState
from .ticker import GravityTicker

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "Board",
    "LockResult",
    "SHAPES",
    "Shape",
    "TetrominoType",
    "rotate_clockwise",
    "shape_cells",
    "RandomSource",
    "make_rng",
    "Action",
    "ActivePiece",
    "FallingBlockGame",
    "GameState",
    "GravityTicker",
]
