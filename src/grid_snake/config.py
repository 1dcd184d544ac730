"""Game configuration shared by the engine, renderer, and scheduler."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_DIRECTION_NAMES = ("left", "up", "right", "down")

MIN_STEP_DELAY_MS = 10
MAX_STEP_DELAY_MS = 2000


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions, timing, and starting layout for one game.

    ``food`` fixes the initial food cell; ``None`` places it randomly.
    Supports JSON serialization for reproducibility.
    """

    board_width: int = 50
    board_height: int = 50
    step_delay_ms: int = 150
    origin: tuple[int, int] = (0, 0)
    initial_direction: str = "right"
    food: tuple[int, int] | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.board_width < 2 or self.board_height < 2:
            raise ValueError("board_width and board_height must be at least 2.")
        if not MIN_STEP_DELAY_MS <= self.step_delay_ms <= MAX_STEP_DELAY_MS:
            raise ValueError(
                f"step_delay_ms must be between {MIN_STEP_DELAY_MS} "
                f"and {MAX_STEP_DELAY_MS}."
            )
        if self.initial_direction not in _DIRECTION_NAMES:
            raise ValueError(
                f"initial_direction must be one of {', '.join(_DIRECTION_NAMES)}."
            )
        if not self._fits(self.origin):
            raise ValueError("origin lies outside the board.")
        if self.food is not None:
            if not self._fits(self.food):
                raise ValueError("food lies outside the board.")
            if tuple(self.food) == tuple(self.origin):
                raise ValueError("food must not start on the snake's head.")

    def _fits(self, position: tuple[int, int]) -> bool:
        row, col = position
        return 0 <= row < self.board_height and 0 <= col < self.board_width

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        d = asdict(self)
        d["origin"] = list(self.origin)
        if self.food is not None:
            d["food"] = list(self.food)
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        """Build a config from a plain dict, restoring tuple fields."""
        data = dict(raw)
        if "origin" in data:
            data["origin"] = tuple(data["origin"])
        if data.get("food") is not None:
            data["food"] = tuple(data["food"])
        return cls(**data)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
