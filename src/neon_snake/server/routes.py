"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from neon_snake.config import GameConfig
from neon_snake.controls import parse_direction
from neon_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    HighScoreResponse,
    SessionSummary,
)
from neon_snake.server.session_manager import GameSession, SessionManager

router = APIRouter(prefix="/sessions", tags=["sessions"])
highscore_router = APIRouter(tags=["highscore"])


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _get_session(request: Request, session_id: str) -> GameSession:
    try:
        return _get_manager(request).require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


def _summary(session: GameSession) -> SessionSummary:
    engine = session.engine
    return SessionSummary(
        session_id=session.session_id,
        status=engine.status,
        score=engine.score,
        high_score=engine.high_score,
        interval_ms=engine.interval_ms,
    )


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new idle session."""
    try:
        config = GameConfig(**body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    session = _get_manager(request).create_session(config)
    return _summary(session)


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    return [_summary(s) for s in _get_manager(request).list_sessions()]


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get full session state and the latest commentary."""
    session = _get_session(request, session_id)
    result = _summary(session).model_dump(mode="json")
    result["state"] = session.engine.get_state()
    result["commentary"] = session.commentary
    return result


@router.post("/{session_id}/start")
async def start_session(session_id: str, request: Request) -> dict:
    """Start a fresh game (also used to restart after game over)."""
    session = _get_session(request, session_id)
    try:
        return await _get_manager(request).start(session)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.post("/{session_id}/pause")
async def pause_session(session_id: str, request: Request) -> dict:
    session = _get_session(request, session_id)
    try:
        return await _get_manager(request).pause(session)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.post("/{session_id}/resume")
async def resume_session(session_id: str, request: Request) -> dict:
    session = _get_session(request, session_id)
    try:
        return await _get_manager(request).resume(session)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.post("/{session_id}/direction")
async def change_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Queue a heading for the next tick."""
    session = _get_session(request, session_id)
    direction = parse_direction(body.direction)
    if direction is None:
        raise HTTPException(status_code=422, detail="Unknown direction.")
    accepted = await _get_manager(request).set_direction(session, direction)
    return DirectionResponse(accepted=accepted)


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    try:
        await _get_manager(request).remove_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return Response(status_code=204)


@highscore_router.get("/highscore")
async def get_high_score(request: Request) -> HighScoreResponse:
    return HighScoreResponse(
        high_score=_get_manager(request).store.load_high_score(),
    )
