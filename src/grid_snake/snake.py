"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque

from grid_snake.grid import Position


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values.

    Row 0 is the top of the board, so UP decreases the row.
    """

    LEFT = (0, -1)
    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)


def row_delta(direction: Direction) -> int:
    """Return the row offset of a single step in *direction*."""
    return direction.value[0]


def col_delta(direction: Direction) -> int:
    """Return the column offset of a single step in *direction*."""
    return direction.value[1]


def step(position: Position, direction: Direction) -> Position:
    """Return the cell one step from *position* in *direction*."""
    row, col = position
    return row + row_delta(direction), col + col_delta(direction)


class Snake:
    """A snake made of a head plus an ordered deque of trailing segments.

    ``body[0]`` is the oldest segment (the tail end) and ``body[-1]`` the
    newest, directly behind the head. The head is never stored in ``body``.
    """

    def __init__(
        self,
        head: Position,
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.head: Position = head
        self.body: deque[Position] = deque()
        self.direction = direction

    def __len__(self) -> int:
        return len(self.body) + 1

    def next_head(self) -> Position:
        """Compute the next head position without moving."""
        return step(self.head, self.direction)

    def advance(self, new_head: Position, grow: bool = False) -> Position | None:
        """Move the head to *new_head*, leaving the old head as a segment.

        Returns the vacated cell, or ``None`` if the snake grew.
        """
        self.body.append(self.head)
        self.head = new_head
        if grow:
            return None
        return self.body.popleft()

    def occupies(self, position: Position) -> bool:
        """Check whether the head or any body segment is at *position*."""
        return position == self.head or position in self.body

    def cells(self) -> list[Position]:
        """Return every occupied cell, head first."""
        return [self.head, *self.body]

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "head": list(self.head),
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
            "length": len(self),
        }
