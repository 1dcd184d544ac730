"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import GameConfig
from grid_snake.controls import apply_key
from grid_snake.engine import GameState, Outcome, init_game, snapshot, tick
from grid_snake.server.models import GameStatus, GameSummary

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100


@dataclass
class Session:
    """All state for a single game session.

    ``lock`` serializes ticks and direction changes; snapshots handed to
    clients are always taken while holding it.
    """

    game_id: str
    config: GameConfig
    token: str
    state: GameState
    status: GameStatus = GameStatus.WAITING
    player: WebSocket | None = None
    spectators: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> GameSummary:
        return GameSummary(
            game_id=self.game_id,
            status=self.status,
            board_width=self.config.board_width,
            board_height=self.config.board_height,
            step_delay_ms=self.config.step_delay_ms,
            score=self.state.score,
        )


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(
        self, max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self._sessions: dict[str, Session] = {}
        self._max_finished_sessions = max_finished_sessions

    def create_session(
        self,
        board_width: int = 50,
        board_height: int = 50,
        step_delay_ms: int = 150,
        initial_direction: str = "right",
        seed: int | None = None,
    ) -> Session:
        """Create a new session in the waiting state and return it."""
        config = GameConfig(
            board_width=board_width,
            board_height=board_height,
            step_delay_ms=step_delay_ms,
            initial_direction=initial_direction,
            seed=seed,
        )
        game_id = uuid.uuid4().hex[:12]
        session = Session(
            game_id=game_id,
            config=config,
            token=uuid.uuid4().hex,
            state=init_game(config),
        )
        self._sessions[game_id] = session
        logger.info(
            "Session %s created (%dx%d, %d ms).",
            game_id, board_width, board_height, step_delay_ms,
        )
        return session

    def get_session(self, game_id: str) -> Session | None:
        return self._sessions.get(game_id)

    def _require(self, game_id: str, token: str | None = None) -> Session:
        session = self._sessions.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        if token is not None and token != session.token:
            raise PermissionError("Invalid token.")
        return session

    def list_sessions(self) -> list[GameSummary]:
        """Return summaries of non-finished sessions."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status != GameStatus.FINISHED
        ]

    def start_session(self, game_id: str, token: str) -> None:
        """Start the tick loop. Only the token holder can start."""
        session = self._require(game_id, token)
        if session.status != GameStatus.WAITING:
            raise ValueError("Game is not in waiting state.")

        session.status = GameStatus.ACTIVE
        session._task = asyncio.create_task(self._tick_loop(session))
        logger.info("Session %s started.", game_id)

    async def steer(self, game_id: str, token: str, key: object) -> bool:
        """Apply a direction or key press; unknown input is ignored."""
        session = self._require(game_id, token)
        async with session.lock:
            return apply_key(session.state, key)

    async def snapshot(self, game_id: str) -> dict:
        """Return a consistent snapshot of the session's game state."""
        session = self._require(game_id)
        async with session.lock:
            return snapshot(session.state)

    async def _tick_loop(self, session: Session) -> None:
        """Tick once per step delay, broadcasting a snapshot each tick."""
        interval = session.config.step_delay_ms / 1000.0
        try:
            while session.status == GameStatus.ACTIVE:
                await asyncio.sleep(interval)
                async with session.lock:
                    outcome = tick(session.state)
                    snap = snapshot(session.state)
                    if outcome is Outcome.DEAD:
                        self._mark_finished(session)
                await self._broadcast(session, snap)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", session.game_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.game_id)
            self._mark_finished(session)
        finally:
            if session.status == GameStatus.FINISHED:
                await self._close_connections(session)
                self._prune_finished()

    def _mark_finished(self, session: Session) -> None:
        """Transition a session to finished exactly once."""
        if session.status != GameStatus.FINISHED:
            session.status = GameStatus.FINISHED
            session.finished_at = time.monotonic()
            logger.info(
                "Session %s finished with score %d after %d ticks.",
                session.game_id, session.state.score, session.state.tick,
            )

    async def _close_connections(self, session: Session) -> None:
        """Close the player and spectator sockets of a finished session."""
        sockets = list(session.spectators)
        if session.player is not None:
            sockets.append(session.player)
        session.player = None
        session.spectators.clear()

        for ws in sockets:
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game finished.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.game_id,
                )

    def _prune_finished(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [
            s for s in self._sessions.values()
            if s.status == GameStatus.FINISHED
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.game_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow, self._max_finished_sessions,
        )

    async def _broadcast(self, session: Session, snap: dict) -> None:
        """Send a snapshot to the player and all spectators."""
        payload = json.dumps(snap, separators=(",", ":"))

        ws = session.player
        if ws is not None:
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                session.player = None

        dead: list[WebSocket] = []
        # Iterate over a copy; disconnect handlers may mutate the list.
        for ws in list(session.spectators):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.spectators:
                session.spectators.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
