"""Fixed-interval scheduler driving the engine from a key source."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.controls import apply_key
from grid_snake.engine import GameState, Outcome, init_game, snapshot, tick

logger = logging.getLogger(__name__)

KeySource = Callable[[GameState], str | None]
FrameSink = Callable[[dict], None]

_RANDOM_KEYS = ("w", "a", "s", "d")


def random_keys(
    rng: np.random.Generator,
    turn_probability: float = 0.2,
) -> KeySource:
    """Key source that presses a random WASD key on some ticks."""
    if not 0.0 <= turn_probability <= 1.0:
        raise ValueError("turn_probability must be between 0 and 1.")

    def _source(state: GameState) -> str | None:
        if rng.random() < turn_probability:
            return _RANDOM_KEYS[int(rng.integers(len(_RANDOM_KEYS)))]
        return None

    return _source


def scripted_keys(keys: list[str | None]) -> KeySource:
    """Key source replaying *keys* in order, then pressing nothing."""
    it: Iterator[str | None] = iter(keys)

    def _source(state: GameState) -> str | None:
        return next(it, None)

    return _source


@dataclass
class RunResult:
    """Summary of a finished run."""

    ticks: int
    score: int
    outcome: Outcome
    final_state: dict

    def summary(self) -> str:
        return (
            f"Run finished after {self.ticks} ticks with score {self.score} "
            f"({self.outcome.value})."
        )


def run(
    config: GameConfig | None = None,
    key_source: KeySource | None = None,
    on_frame: FrameSink | None = None,
    *,
    max_ticks: int | None = None,
    realtime: bool = False,
) -> RunResult:
    """Play one game until the snake dies or *max_ticks* is reached.

    Each iteration reads at most one key, ticks once, and hands a snapshot
    to *on_frame*. With *realtime* the loop sleeps ``step_delay_ms``
    between ticks.
    """
    config = config if config is not None else GameConfig()
    state = init_game(config)
    if key_source is None:
        key_source = random_keys(state.spawner.rng)
    delay = config.step_delay_ms / 1000.0

    if on_frame is not None:
        on_frame(snapshot(state))

    outcome = Outcome.ALIVE
    while max_ticks is None or state.tick < max_ticks:
        if realtime:
            time.sleep(delay)
        key = key_source(state)
        if key is not None:
            apply_key(state, key)
        outcome = tick(state)
        if on_frame is not None:
            on_frame(snapshot(state))
        if outcome is Outcome.DEAD:
            break

    result = RunResult(
        ticks=state.tick,
        score=state.score,
        outcome=outcome,
        final_state=snapshot(state),
    )
    logger.info(result.summary())
    return result
