"""Step-based game state engine composing grid, snake, and food logic.

The engine is a set of functions over an explicitly passed
:class:`GameState`. A scheduler calls :func:`tick` once per interval, an
input handler calls :func:`set_direction` between ticks, and a renderer
reads :func:`snapshot`.

When a tick is lethal the state is left exactly as it was before the call
(head, body, and food untouched) and only marked as terminated.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.food import FoodSpawner
from grid_snake.grid import Grid, Position
from grid_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """Result of a single tick."""

    ALIVE = "alive"
    ATE = "ate"
    DEAD = "dead"


@dataclass
class GameState:
    """All mutable state for one game session."""

    grid: Grid
    snake: Snake
    food: Position | None
    spawner: FoodSpawner
    tick: int = 0
    terminated: bool = False
    last_outcome: Outcome | None = None

    @property
    def head(self) -> Position:
        return self.snake.head

    @property
    def body(self) -> list[Position]:
        """Body segments, oldest first."""
        return list(self.snake.body)

    @property
    def direction(self) -> Direction:
        return self.snake.direction

    @property
    def score(self) -> int:
        """Number of food items eaten, equal to the body length."""
        return len(self.snake.body)


def init_game(
    config: GameConfig | None = None,
    rng: np.random.Generator | None = None,
) -> GameState:
    """Create a fresh game: head at the origin, empty body, food placed."""
    config = config if config is not None else GameConfig()
    if rng is None:
        rng = np.random.default_rng(config.seed)

    grid = Grid(width=config.board_width, height=config.board_height)
    snake = Snake(
        tuple(config.origin),
        Direction[config.initial_direction.upper()],
    )
    spawner = FoodSpawner(grid, rng=rng)
    if config.food is not None:
        food: Position | None = tuple(config.food)
    else:
        food = spawner.place(snake.cells())

    logger.info(
        "Game started on %dx%d board, head at %s, food at %s.",
        grid.width, grid.height, snake.head, food,
    )
    return GameState(grid=grid, snake=snake, food=food, spawner=spawner)


def occupies_snake(state: GameState, position: Position) -> bool:
    """Return True iff *position* is the head or any body segment."""
    return state.snake.occupies(position)


def set_direction(state: GameState, direction: Direction) -> bool:
    """Record the direction the next tick will move in.

    The most recent call before a tick wins. Reversals are allowed; moving
    back into the body is resolved as a collision by :func:`tick`. Returns
    False without changing anything once the game is terminated.
    """
    if state.terminated:
        return False
    state.snake.direction = direction
    return True


def tick(state: GameState) -> Outcome:
    """Advance the game by one step and report what happened.

    Once DEAD has been returned the state is terminal and every further
    call returns DEAD without touching it.
    """
    if state.terminated:
        return Outcome.DEAD

    next_head = state.snake.next_head()

    if state.grid.is_out_of_bounds(next_head) or occupies_snake(state, next_head):
        state.terminated = True
        state.last_outcome = Outcome.DEAD
        logger.info(
            "Snake died at tick %d moving %s into %s with score %d.",
            state.tick, state.snake.direction.name, next_head, state.score,
        )
        return Outcome.DEAD

    ate = next_head == state.food
    state.snake.advance(next_head, grow=ate)
    if ate:
        state.food = state.spawner.place(state.snake.cells())
        outcome = Outcome.ATE
    else:
        outcome = Outcome.ALIVE

    state.tick += 1
    state.last_outcome = outcome
    return outcome


def snapshot(state: GameState) -> dict:
    """Return a consistent, JSON-serializable copy of the game state."""
    return {
        "tick": state.tick,
        "score": state.score,
        "terminated": state.terminated,
        "outcome": (
            state.last_outcome.value if state.last_outcome is not None else None
        ),
        "grid": state.grid.to_dict(),
        "snake": state.snake.to_dict(),
        "food": list(state.food) if state.food is not None else None,
    }
