"""Neon Snake — single-player snake game engine."""

from neon_snake.config import CommentaryConfig, GameConfig
from neon_snake.direction_buffer import DirectionBuffer
from neon_snake.engine import DeathCause, GameEngine, GameStatus
from neon_snake.food import FoodPlacer
from neon_snake.grid import Grid
from neon_snake.highscore import (
    HighScoreStore,
    JsonFileHighScoreStore,
    MemoryHighScoreStore,
)
from neon_snake.snake import Direction, Snake

__all__ = [
    "CommentaryConfig",
    "DeathCause",
    "Direction",
    "DirectionBuffer",
    "FoodPlacer",
    "GameConfig",
    "GameEngine",
    "GameStatus",
    "Grid",
    "HighScoreStore",
    "JsonFileHighScoreStore",
    "MemoryHighScoreStore",
    "Snake",
]
