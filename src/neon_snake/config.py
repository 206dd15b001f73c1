"""Game and collaborator configuration."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GRID_SIZE = 20
INITIAL_SPEED = 150  # ms per tick
MIN_SPEED = 60  # fastest allowed interval
SPEED_DECREMENT = 2  # ms shaved off per food eaten
INITIAL_LENGTH = 3

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class GameConfig:
    """Tunable rules for a single game.

    Supports JSON serialization for reproducible sessions.
    """

    grid_size: int = GRID_SIZE
    initial_speed: int = INITIAL_SPEED
    min_speed: int = MIN_SPEED
    speed_decrement: int = SPEED_DECREMENT
    initial_length: int = INITIAL_LENGTH
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if self.min_speed < 1:
            raise ValueError("min_speed must be at least 1 ms.")
        if self.initial_speed < self.min_speed:
            raise ValueError("initial_speed must not be below min_speed.")
        if self.speed_decrement < 0:
            raise ValueError("speed_decrement must be >= 0.")
        if not 1 <= self.initial_length <= self.grid_size - self.grid_size // 2:
            raise ValueError(
                "initial_length does not fit the configured grid; increase "
                "grid_size or reduce initial_length."
            )

    def initial_body(self) -> list[tuple[int, int]]:
        """Vertical segment at the grid centre, head first, trailing down."""
        cx = cy = self.grid_size // 2
        return [(cx, cy + i) for i in range(self.initial_length)]

    def speed_level(self, interval_ms: int) -> int:
        """Human-facing speed number derived from the tick interval."""
        return max(1, (self.initial_speed - interval_ms + 10) // 2)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls(**json.loads(Path(path).read_text()))


@dataclass(frozen=True)
class CommentaryConfig:
    """Settings for the game-over commentary client."""

    api_key: str | None = None
    model: str = DEFAULT_GEMINI_MODEL
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> CommentaryConfig:
        """Read the API key and model from the environment."""
        api_key = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY")
        model = os.getenv("NEON_SNAKE_GEMINI_MODEL") or DEFAULT_GEMINI_MODEL
        return cls(api_key=_clean(api_key), model=model)


def _clean(value: str | None) -> str | None:
    """Strip whitespace and wrapping quotes some shells leave on env values."""
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
        cleaned = cleaned[1:-1].strip()
    return cleaned or None
