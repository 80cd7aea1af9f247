from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .pieces import Shape, shape_cells


BOARD_WIDTH = 10
BOARD_HEIGHT = 20


@dataclass(frozen=True)
class LockResult:
    reached_top: bool


class Board:
    """Grid of locked cells.

    Row 0 is the top. Cells are booleans: True means occupied. The grid keeps
    its (height, width) shape for the whole session; clearing rows shifts the
    rows above down and refills from the top.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.bool_)

    def reset(self) -> None:
        self.grid.fill(False)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, row: int, col: int) -> bool:
        return bool(self.grid[row, col])

    def can_place(self, shape: Shape, x: int, y: int) -> bool:
        # Cells above the top edge are allowed; walls and floor are not.
        for gx, gy in shape_cells(shape, x, y):
            if gx < 0 or gx >= self.width or gy >= self.height:
                return False
            if gy >= 0 and self.grid[gy, gx]:
                return False
        return True

    def lock(self, shape: Shape, x: int, y: int) -> LockResult:
        """Write the set cells of `shape` at (x, y) into the grid.

        The caller checks legality first. Only cells written by this call are
        considered when reporting `reached_top`.
        """
        reached_top = False
        for gx, gy in shape_cells(shape, x, y):
            if gy < 0:
                continue
            self.grid[gy, gx] = True
            if gy == 0:
                reached_top = True
        return LockResult(reached_top=reached_top)

    def clear_full_rows(self) -> int:
        full = np.all(self.grid, axis=1)
        num = int(np.count_nonzero(full))
        if num == 0:
            return 0
        kept = self.grid[~full]
        new_rows = np.zeros((num, self.width), dtype=np.bool_)
        self.grid = np.vstack((new_rows, kept))
        return num

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
