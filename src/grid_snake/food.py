"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from grid_snake.grid import Grid, Position

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places the single food cell on the board.

    Candidates come from an explicit free-cell list, so an occupied cell can
    never be chosen. Uses a NumPy RNG for reproducible placement.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def place(self, occupied: Iterable[Position]) -> Position | None:
        """Pick a cell uniformly among those not in *occupied*.

        Returns ``None`` when the board has no free cell left.
        """
        free = self.grid.free_cells(occupied)
        if not free:
            logger.warning("No free cells available for food placement.")
            return None
        pos = free[int(self.rng.integers(len(free)))]
        logger.debug("Food placed at %s (%d free cells).", pos, len(free))
        return pos
