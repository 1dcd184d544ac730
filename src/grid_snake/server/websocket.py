"""WebSocket handlers for real-time play and spectating."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _extract_key(raw: str) -> str | None:
    """Pull a direction or key out of a client message, if any."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None
    key = msg.get("direction") or msg.get("key")
    return key if isinstance(key, str) else None


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str, token: str = "") -> None:
    """Player WebSocket: send directions, receive a snapshot each tick."""
    manager = _get_manager(websocket)
    session = manager.get_session(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return
    if token != session.token:
        await websocket.close(code=4001, reason="Invalid token.")
        return

    await websocket.accept()

    # Only one controlling socket per session.
    previous_ws = session.player
    if previous_ws is not None and previous_ws is not websocket:
        try:
            await previous_ws.close(code=4008, reason="Replaced by new connection.")
        except Exception:
            logger.warning(
                "Failed closing previous player socket in session %s.", game_id,
            )
    session.player = websocket
    logger.info("Player connected to session %s.", game_id)

    snap = await manager.snapshot(game_id)
    await websocket.send_text(json.dumps(snap, separators=(",", ":")))

    try:
        while True:
            key = _extract_key(await websocket.receive_text())
            if key is None:
                continue
            await manager.steer(game_id, token, key)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", game_id)
    finally:
        # A newer connection may have replaced this socket already.
        if session.player is websocket:
            session.player = None


@ws_router.websocket("/games/{game_id}/spectate")
async def spectate(websocket: WebSocket, game_id: str) -> None:
    """Spectator WebSocket: receive-only snapshot stream."""
    manager = _get_manager(websocket)
    session = manager.get_session(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    session.spectators.append(websocket)
    logger.info("Spectator connected to session %s.", game_id)

    snap = await manager.snapshot(game_id)
    await websocket.send_text(json.dumps(snap, separators=(",", ":")))

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from session %s.", game_id)
    finally:
        if websocket in session.spectators:
            session.spectators.remove(websocket)
