"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from grid_snake.config import MAX_STEP_DELAY_MS, MIN_STEP_DELAY_MS


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game session."""

    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    board_width: int = Field(default=50, ge=2, le=200)
    board_height: int = Field(default=50, ge=2, le=200)
    step_delay_ms: int = Field(
        default=150, ge=MIN_STEP_DELAY_MS, le=MAX_STEP_DELAY_MS,
    )
    initial_direction: str = "right"
    seed: int | None = None


class StartRequest(BaseModel):
    """Request body for POST /games/{game_id}/start."""

    token: str


class DirectionRequest(BaseModel):
    """Request body for POST /games/{game_id}/direction.

    ``direction`` accepts direction names and WASD keys.
    """

    token: str
    direction: str


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    status: GameStatus
    board_width: int
    board_height: int
    step_delay_ms: int
    score: int


class CreateGameResponse(GameSummary):
    """Response for a newly created game, carrying its control token."""

    token: str


class DirectionResponse(BaseModel):
    """Whether a direction request was recognized and applied."""

    accepted: bool
