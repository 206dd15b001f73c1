"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from neon_snake.controls import Action, key_to_input, parse_action, parse_direction
from neon_snake.server.session_manager import GameSession, SessionManager
from neon_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _decode(msg: dict) -> Direction | Action | None:
    """Pick the first recognised field out of a client message."""
    key = msg.get("key")
    if isinstance(key, str):
        return key_to_input(key)
    direction = msg.get("direction")
    if isinstance(direction, str):
        return parse_direction(direction)
    action = msg.get("action")
    if isinstance(action, str):
        return parse_action(action)
    return None


async def _apply_action(
    manager: SessionManager, session: GameSession, action: Action,
) -> None:
    handlers = {
        Action.START: manager.start,
        Action.PAUSE: manager.pause,
        Action.RESUME: manager.resume,
        Action.TOGGLE: manager.toggle,
    }
    try:
        await handlers[action](session)
    except ValueError:
        # Illegal transitions (e.g. pausing a finished game) are ignored.
        pass


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send keys/directions/actions, receive state."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.clients.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    # Send initial state snapshot so the client gets immediate feedback.
    await websocket.send_text(
        json.dumps(
            {"type": "state", "state": session.engine.get_state()},
            separators=(",", ":"),
        ),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            command = _decode(msg)
            if isinstance(command, Direction):
                await manager.set_direction(session, command)
            elif isinstance(command, Action):
                await _apply_action(manager, session, command)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in session.clients:
            session.clients.remove(websocket)
