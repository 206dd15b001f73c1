"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from neon_snake.config import GameConfig
from neon_snake.snake import Direction


@pytest.fixture()
def tc(app):
    """Starlette sync TestClient; a WebSocket keeps its event loop alive."""
    return TestClient(app)


def _create_session(tc, **config):
    manager = tc.app.state.session_manager
    config.setdefault("seed", 0)
    return manager.create_session(GameConfig(**config))


def _receive(ws) -> dict:
    return json.loads(ws.receive_text())


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        session = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session.session_id}/play") as ws:
            msg = _receive(ws)
            assert msg["type"] == "state"
            assert msg["state"]["status"] == "IDLE"
            assert msg["state"]["snake"] == [[10, 10], [10, 11], [10, 12]]

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ):
            pass

    def test_space_starts_game(self, tc):
        session = _create_session(tc, initial_speed=1000)
        with tc.websocket_connect(f"/sessions/{session.session_id}/play") as ws:
            _receive(ws)
            ws.send_text(json.dumps({"key": " "}))
            msg = _receive(ws)
            assert msg["state"]["status"] == "PLAYING"
            ws.send_text(json.dumps({"action": "pause"}))
            msg = _receive(ws)
            assert msg["state"]["status"] == "PAUSED"

    def test_key_direction_buffered(self, tc):
        session = _create_session(tc, initial_speed=1000)
        with tc.websocket_connect(f"/sessions/{session.session_id}/play") as ws:
            _receive(ws)
            ws.send_text(json.dumps({"action": "start"}))
            _receive(ws)
            ws.send_text(json.dumps({"key": "ArrowLeft"}))
            ws.send_text(json.dumps({"action": "pause"}))
            msg = _receive(ws)
            assert msg["state"]["status"] == "PAUSED"
            assert session.engine.direction_buffer.pending == Direction.LEFT

    def test_plays_to_game_over_with_commentary(self, tc):
        session = _create_session(tc, initial_speed=5, min_speed=1)
        with tc.websocket_connect(f"/sessions/{session.session_id}/play") as ws:
            _receive(ws)
            ws.send_text(json.dumps({"action": "start"}))
            statuses = []
            commentary = None
            for _ in range(200):
                msg = _receive(ws)
                if msg["type"] == "commentary":
                    commentary = msg["text"]
                    break
                statuses.append(msg["state"]["status"])
            assert statuses[0] == "PLAYING"
            assert statuses[-1] == "GAME_OVER"
            assert commentary == "Ouch."
            assert session.commentary == "Ouch."

    def test_invalid_messages_ignored(self, tc):
        session = _create_session(tc, initial_speed=1000)
        with tc.websocket_connect(f"/sessions/{session.session_id}/play") as ws:
            _receive(ws)
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text("123")
            ws.send_text(json.dumps({"direction": "invalid_dir"}))
            ws.send_text(json.dumps({"key": "q"}))
            ws.send_text(json.dumps({"action": "resume"}))
            ws.send_text(json.dumps({"no_command": True}))
            ws.send_text(json.dumps({"action": "start"}))
            msg = _receive(ws)
            assert msg["state"]["status"] == "PLAYING"

    def test_disconnect_removes_client(self, tc):
        session = _create_session(tc)
        with tc.websocket_connect(f"/sessions/{session.session_id}/play") as ws:
            _receive(ws)
            assert len(session.clients) == 1
        assert session.clients == []
