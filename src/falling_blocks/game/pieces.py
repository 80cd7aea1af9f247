from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    Z = 6
    S = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    shape = np.array(rows, dtype=np.bool_)
    shape.setflags(write=False)
    return shape


SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[1, 1, 1], [0, 1, 0]]),
    TetrominoType.L: _frozen([[1, 1, 1], [1, 0, 0]]),
    TetrominoType.J: _frozen([[1, 1, 1], [0, 0, 1]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
}


def rotate_clockwise(shape: Shape) -> Shape:
    """Return a new read-only matrix rotated 90 degrees clockwise.

    Transpose, then reverse each resulting row. A (h, w) shape becomes (w, h).
    """
    rotated = np.ascontiguousarray(shape.T[:, ::-1])
    rotated.setflags(write=False)
    return rotated


def shape_cells(shape: Shape, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
    cells: List[Tuple[int, int]] = []
    h, w = shape.shape
    for dy in range(h):
        for dx in range(w):
            if shape[dy, dx]:
                cells.append((origin_x + dx, origin_y + dy))
    return cells
