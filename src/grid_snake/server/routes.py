"""REST API route handlers for game session management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.server.models import (
    CreateGameRequest,
    CreateGameResponse,
    DirectionRequest,
    DirectionResponse,
    GameSummary,
    StartRequest,
)
from grid_snake.server.session_manager import SessionManager

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_game(
    body: CreateGameRequest, request: Request,
) -> CreateGameResponse:
    """Create a new game session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            board_width=body.board_width,
            board_height=body.board_height,
            step_delay_ms=body.step_delay_ms,
            initial_direction=body.initial_direction,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CreateGameResponse(
        **session.summary().model_dump(), token=session.token,
    )


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List waiting and active games."""
    return _get_manager(request).list_sessions()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get session metadata and the current game snapshot."""
    manager = _get_manager(request)
    session = manager.get_session(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    result = session.summary().model_dump(mode="json")
    result["state"] = await manager.snapshot(game_id)
    return result


@router.post("/{game_id}/start", status_code=200)
async def start_game(
    game_id: str, body: StartRequest, request: Request,
) -> dict:
    """Start the game's tick loop."""
    manager = _get_manager(request)
    try:
        manager.start_session(game_id, body.token)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "started", "game_id": game_id}


@router.post("/{game_id}/direction")
async def set_direction(
    game_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Change the snake's direction; unrecognized directions are ignored."""
    manager = _get_manager(request)
    try:
        accepted = await manager.steer(game_id, body.token, body.direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return DirectionResponse(accepted=accepted)
