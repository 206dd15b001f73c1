"""High-score persistence backends."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".neon_snake" / "highscore.json"


def store_path_from_env() -> Path:
    """Return the high-score file path, honouring NEON_SNAKE_HIGHSCORE_PATH."""
    raw = os.getenv("NEON_SNAKE_HIGHSCORE_PATH", "").strip()
    return Path(raw).expanduser() if raw else DEFAULT_STORE_PATH


class HighScoreStore(Protocol):
    """Anything that can load and save a single high-score number."""

    def load_high_score(self) -> int: ...

    def save_high_score(self, score: int) -> None: ...


def _validate(score: int) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValueError("High score must be an integer.")
    if score < 0:
        raise ValueError("High score must be >= 0.")
    return score


class MemoryHighScoreStore:
    """Keeps the high score in process memory.

    ``saves`` counts writes, which makes it handy in tests.
    """

    def __init__(self, initial: int = 0) -> None:
        self._score = _validate(initial)
        self.saves = 0

    def load_high_score(self) -> int:
        return self._score

    def save_high_score(self, score: int) -> None:
        self._score = _validate(score)
        self.saves += 1


class JsonFileHighScoreStore:
    """Stores the high score as ``{"high_score": n}`` in a JSON file."""

    def __init__(self, path: str | Path = DEFAULT_STORE_PATH) -> None:
        self.path = Path(path)

    def load_high_score(self) -> int:
        """Read the stored score; missing or unreadable files count as 0."""
        if not self.path.exists():
            return 0
        try:
            raw = json.loads(self.path.read_text())
            return _validate(raw["high_score"])
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning(
                "Ignoring unreadable high-score file %s.", self.path,
            )
            return 0

    def save_high_score(self, score: int) -> None:
        """Write the score, creating parent directories as needed."""
        _validate(score)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"high_score": score}))
        logger.info("High score %d saved to %s", score, self.path)

    def reset(self) -> None:
        """Delete the stored score."""
        self.path.unlink(missing_ok=True)
