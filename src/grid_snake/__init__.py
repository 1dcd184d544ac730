"""Grid Snake: single-player snake game state engine."""

from grid_snake.config import GameConfig
from grid_snake.engine import (
    GameState,
    Outcome,
    init_game,
    occupies_snake,
    set_direction,
    snapshot,
    tick,
)
from grid_snake.grid import Grid
from grid_snake.snake import Direction, Snake, col_delta, row_delta

__all__ = [
    "Direction",
    "GameConfig",
    "GameState",
    "Grid",
    "Outcome",
    "Snake",
    "col_delta",
    "init_game",
    "occupies_snake",
    "row_delta",
    "set_direction",
    "snapshot",
    "tick",
]
