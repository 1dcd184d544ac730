"""Keyboard input mapping."""

from __future__ import annotations

from grid_snake.engine import GameState, set_direction
from grid_snake.snake import Direction

_KEY_MAP: dict[str, Direction] = {
    "a": Direction.LEFT,
    "w": Direction.UP,
    "d": Direction.RIGHT,
    "s": Direction.DOWN,
    "left": Direction.LEFT,
    "up": Direction.UP,
    "right": Direction.RIGHT,
    "down": Direction.DOWN,
}


def direction_for_key(key: object) -> Direction | None:
    """Map a raw key symbol to a direction, or ``None`` if unrecognized."""
    if not isinstance(key, str):
        return None
    return _KEY_MAP.get(key.strip().lower())


def apply_key(state: GameState, key: object) -> bool:
    """Set the pending direction from *key*.

    Returns False for unknown keys and for finished games, which are ignored.
    """
    direction = direction_for_key(key)
    if direction is None:
        return False
    return set_direction(state, direction)
