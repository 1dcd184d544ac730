"""Tick throughput benchmarking."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.engine import Outcome, init_game, set_direction, tick
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    total_food: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, {self.total_ticks} ticks, "
            f"{self.total_food} food eaten in {self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    board_width: int = 20,
    board_height: int = 20,
    max_ticks: int = 200,
    turn_probability: float = 0.2,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw engine throughput with random direction changes.

    Runs *num_games* games to death or *max_ticks* and reports games/second
    and ticks/second.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    rng = np.random.default_rng(seed)

    total_ticks = 0
    total_food = 0
    start = time.perf_counter()

    for _ in range(num_games):
        config = GameConfig(
            board_width=board_width,
            board_height=board_height,
            seed=int(rng.integers(2**31)),
        )
        state = init_game(config)
        while state.tick < max_ticks:
            if rng.random() < turn_probability:
                set_direction(state, _DIRECTIONS[int(rng.integers(4))])
            outcome = tick(state)
            if outcome is Outcome.DEAD:
                break
            total_ticks += 1
            if outcome is Outcome.ATE:
                total_food += 1

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        total_food=total_food,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
