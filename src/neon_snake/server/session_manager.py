"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Protocol

from starlette.websockets import WebSocket, WebSocketState

from neon_snake.commentary import fallback_commentary
from neon_snake.config import GameConfig
from neon_snake.engine import DeathCause, GameEngine, GameStatus
from neon_snake.highscore import HighScoreStore, MemoryHighScoreStore
from neon_snake.snake import Direction

logger = logging.getLogger(__name__)


class Commentator(Protocol):
    async def get_commentary(
        self, score: int, death_cause: DeathCause | None,
    ) -> str: ...


@dataclass
class GameSession:
    """All state for a single player's game."""

    session_id: str
    engine: GameEngine
    created_at: float = field(default_factory=time.monotonic)
    commentary: str | None = None
    game_number: int = 0
    clients: list[WebSocket] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)
    _commentary_task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    @property
    def ticking(self) -> bool:
        return self._task is not None and not self._task.done()


class SessionManager:
    """Central registry managing all game sessions.

    Each playing session owns one tick task. The task sleeps for the
    engine's *current* interval after every tick, so a speed-up from eating
    applies to the very next delay. Pausing cancels the task and resuming
    starts a new one.
    """

    def __init__(
        self,
        store: HighScoreStore | None = None,
        commentator: Commentator | None = None,
    ) -> None:
        self.store = store if store is not None else MemoryHighScoreStore()
        self.commentator = commentator
        self._sessions: dict[str, GameSession] = {}

    # -- registry ----------------------------------------------------------

    def create_session(self, config: GameConfig | None = None) -> GameSession:
        """Create a new idle session and return it."""
        session_id = uuid.uuid4().hex[:12]
        engine = GameEngine(config, store=self.store)
        session = GameSession(session_id=session_id, engine=engine)
        self._sessions[session_id] = session
        logger.info("Session %s created.", session_id)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[GameSession]:
        return list(self._sessions.values())

    async def remove_session(self, session_id: str) -> None:
        """Stop a session's tasks, close its sockets and forget it."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        await self._cancel_tasks([session])
        await self._close_connections(session)
        logger.info("Session %s removed.", session_id)

    # -- lifecycle ---------------------------------------------------------

    async def start(self, session: GameSession) -> dict:
        """Start or restart a game. Only valid from IDLE or GAME_OVER."""
        async with session.lock:
            if not session.engine.start():
                raise ValueError("Game is already in progress.")
            session.game_number += 1
            session.commentary = None
            state = session.engine.get_state()
        self._arm(session)
        await self.broadcast_state(session, state)
        return state

    async def pause(self, session: GameSession) -> dict:
        async with session.lock:
            if not session.engine.pause():
                raise ValueError("Game is not being played.")
            state = session.engine.get_state()
            self._disarm(session)
        await self.broadcast_state(session, state)
        return state

    async def resume(self, session: GameSession) -> dict:
        async with session.lock:
            if not session.engine.resume():
                raise ValueError("Game is not paused.")
            state = session.engine.get_state()
        self._arm(session)
        await self.broadcast_state(session, state)
        return state

    async def toggle(self, session: GameSession) -> dict:
        """Start when idle or over, otherwise flip pause."""
        if session.status in (GameStatus.IDLE, GameStatus.GAME_OVER):
            return await self.start(session)
        if session.status == GameStatus.PAUSED:
            return await self.resume(session)
        return await self.pause(session)

    async def set_direction(
        self, session: GameSession, direction: Direction,
    ) -> bool:
        async with session.lock:
            return session.engine.set_direction(direction)

    # -- tick loop ---------------------------------------------------------

    def _arm(self, session: GameSession) -> None:
        """Schedule the tick loop, replacing any leftover task."""
        if session.ticking:
            session._task.cancel()
        session._task = asyncio.create_task(self._tick_loop(session))

    def _disarm(self, session: GameSession) -> None:
        if session.ticking:
            session._task.cancel()
        session._task = None

    async def _tick_loop(self, session: GameSession) -> None:
        """Tick until the game leaves PLAYING, re-arming after every tick."""
        try:
            while True:
                await asyncio.sleep(session.engine.interval_ms / 1000.0)
                async with session.lock:
                    if session.engine.status != GameStatus.PLAYING:
                        break
                    state = session.engine.step()
                    finished = session.engine.game_over
                    game_number = session.game_number
                await self.broadcast_state(session, state)
                if finished:
                    self._on_game_over(session, game_number)
                    break
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.session_id)

    def _on_game_over(self, session: GameSession, game_number: int) -> None:
        """Kick off commentary without holding up the session."""
        session.commentary = fallback_commentary()
        if self.commentator is None:
            return
        session._commentary_task = asyncio.create_task(
            self._fetch_commentary(
                session,
                game_number,
                session.engine.score,
                session.engine.death_cause,
            )
        )

    async def _fetch_commentary(
        self,
        session: GameSession,
        game_number: int,
        score: int,
        death_cause: DeathCause | None,
    ) -> None:
        commentator = self.commentator
        if commentator is None:
            return
        try:
            text = await commentator.get_commentary(score, death_cause)
        except asyncio.CancelledError:
            return
        except Exception:
            logger.exception(
                "Commentary failed for session %s.", session.session_id,
            )
            return
        # A restart makes the result stale.
        if session.game_number != game_number:
            return
        session.commentary = text
        await self._broadcast(session, {"type": "commentary", "text": text})

    # -- fan-out -----------------------------------------------------------

    async def broadcast_state(self, session: GameSession, state: dict) -> None:
        await self._broadcast(session, {"type": "state", "state": state})

    async def _broadcast(self, session: GameSession, message: dict) -> None:
        """Send a message to every connected client of the session."""
        payload = json.dumps(message, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.clients):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.clients:
                session.clients.remove(ws)

    async def _close_connections(self, session: GameSession) -> None:
        for ws in list(session.clients):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.clients.clear()

    async def _cancel_tasks(self, sessions: list[GameSession]) -> None:
        tasks = []
        for session in sessions:
            for task in (session._task, session._commentary_task):
                if task is not None and not task.done():
                    task.cancel()
                    tasks.append(task)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def cleanup(self) -> None:
        """Cancel all running tick loops and commentary fetches."""
        await self._cancel_tasks(list(self._sessions.values()))
        logger.info("SessionManager cleanup complete.")
