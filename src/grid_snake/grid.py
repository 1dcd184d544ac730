"""Board geometry for the snake game."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

Position = tuple[int, int]


class Grid:
    """Fixed-size board addressed by (row, col).

    Row 0 is the top row and column 0 the leftmost column, matching NumPy
    indexing. The grid itself holds no snake or food state; it only answers
    geometric questions about the board.
    """

    def __init__(self, width: int = 50, height: int = 50) -> None:
        if width < 2 or height < 2:
            raise ValueError("Grid dimensions must be at least 2×2.")
        self.width = width
        self.height = height

    @property
    def size(self) -> int:
        """Total number of cells on the board."""
        return self.width * self.height

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= row < self.height and 0 <= col < self.width

    def is_out_of_bounds(self, position: Position) -> bool:
        """Return True iff *position* falls outside the board."""
        row, col = position
        return not self.in_bounds(row, col)

    def free_cells(self, occupied: Iterable[Position]) -> list[Position]:
        """Return every in-bounds cell not in *occupied*, in row-major order."""
        mask = np.ones((self.height, self.width), dtype=bool)
        for row, col in occupied:
            if self.in_bounds(row, col):
                mask[row, col] = False
        rows, cols = np.nonzero(mask)
        return list(zip(rows.tolist(), cols.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
