"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from neon_snake.config import (
    GRID_SIZE,
    INITIAL_LENGTH,
    INITIAL_SPEED,
    MIN_SPEED,
    SPEED_DECREMENT,
)
from neon_snake.engine import GameStatus


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_size: int = Field(default=GRID_SIZE, ge=4, le=100)
    initial_speed: int = Field(default=INITIAL_SPEED, ge=1, le=2000)
    min_speed: int = Field(default=MIN_SPEED, ge=1, le=2000)
    speed_decrement: int = Field(default=SPEED_DECREMENT, ge=0)
    initial_length: int = Field(default=INITIAL_LENGTH, ge=1)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str = Field(min_length=1, max_length=16)


class DirectionResponse(BaseModel):
    accepted: bool


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: GameStatus
    score: int
    high_score: int
    interval_ms: int


class HighScoreResponse(BaseModel):
    high_score: int
