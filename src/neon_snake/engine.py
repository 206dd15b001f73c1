"""Tick-driven game engine composing grid, snake, food and score logic."""

from __future__ import annotations

import enum
import itertools
import logging
from collections import deque

import numpy as np

from neon_snake.config import GameConfig
from neon_snake.direction_buffer import DirectionBuffer
from neon_snake.food import FoodPlacer
from neon_snake.grid import Coordinate, Grid
from neon_snake.highscore import HighScoreStore, MemoryHighScoreStore
from neon_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Lifecycle states of a game."""

    IDLE = "IDLE"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


class DeathCause(str, enum.Enum):
    """Why the last game ended."""

    WALL = "WALL"
    SELF = "SELF"


class GameEngine:
    """Single-snake, tick-based game engine.

    The engine is the only writer of the authoritative game state. Input
    goes through :meth:`set_direction`, which only fills the direction
    buffer; each call to :meth:`step` consumes that buffer and advances the
    game by one tick.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(self.config.grid_size)
        self.rng = np.random.default_rng(self.config.seed)
        self.food_placer = FoodPlacer(self.grid, rng=self.rng)
        self.store = store if store is not None else MemoryHighScoreStore()
        self.high_score = self.store.load_high_score()
        self.direction_buffer = DirectionBuffer()
        self.status = GameStatus.IDLE
        self._reset()

    def _reset(self) -> None:
        """Lay out a fresh board; the high score is kept."""
        self.snake = Snake(self.config.initial_body(), Direction.UP)
        self.food: Coordinate | None = self.food_placer.place(self.snake.body)
        self.score = 0
        self.tick = 0
        self.interval_ms = self.config.initial_speed
        self.death_cause: DeathCause | None = None
        self.direction_buffer.clear()

    # -- lifecycle ---------------------------------------------------------

    @property
    def game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    def start(self) -> bool:
        """Start a fresh game from IDLE or GAME_OVER.

        Returns False (and changes nothing) from any other state.
        """
        if self.status not in (GameStatus.IDLE, GameStatus.GAME_OVER):
            return False
        self._reset()
        self.status = GameStatus.PLAYING
        logger.info("Game started (high score %d).", self.high_score)
        return True

    def pause(self) -> bool:
        if self.status != GameStatus.PLAYING:
            return False
        self.status = GameStatus.PAUSED
        return True

    def resume(self) -> bool:
        if self.status != GameStatus.PAUSED:
            return False
        self.status = GameStatus.PLAYING
        return True

    def toggle_pause(self) -> bool:
        return self.pause() or self.resume()

    def primary_action(self) -> bool:
        """Start when no game is running, otherwise toggle pause."""
        if self.status in (GameStatus.IDLE, GameStatus.GAME_OVER):
            return self.start()
        return self.toggle_pause()

    # -- input -------------------------------------------------------------

    def set_direction(self, direction: Direction) -> bool:
        """Buffer a heading for the next tick.

        Ignored unless a game is being played. Reversals are checked against
        the heading of the last committed tick.
        """
        if self.status != GameStatus.PLAYING:
            return False
        return self.direction_buffer.set_intended_heading(
            direction, self.snake.direction,
        )

    # -- simulation --------------------------------------------------------

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict. Collisions end
        the game without touching any other field.
        """
        if self.status != GameStatus.PLAYING:
            return self.get_state()

        move = self.direction_buffer.consume(self.snake.direction)
        new_head = self.snake.next_head(move)

        # --- boundary check ---
        if not self.grid.in_bounds(*new_head):
            self._end_game(DeathCause.WALL)
            return self.get_state()

        # --- self-collision check (look-ahead) ---
        # The current tail is exempt: it vacates its cell unless the snake
        # eats, which the checks after the move settle.
        body = self.snake.body
        tail = self.snake.tail
        if new_head != tail and new_head in body:
            self._end_game(DeathCause.SELF)
            return self.get_state()

        # --- move ---
        new_body = deque(body)
        new_body.appendleft(new_head)
        score = self.score
        food = self.food
        interval = self.interval_ms

        if new_head == self.food:
            # Growth: the tail stays, so landing on it is an overlap.
            if new_head == tail:
                self._end_game(DeathCause.SELF)
                return self.get_state()
            score += 1
            placed = self.food_placer.place(new_body)
            if placed is not None:
                food = placed
            interval = max(
                self.config.min_speed, interval - self.config.speed_decrement,
            )
        else:
            new_body.pop()
            if new_head in itertools.islice(new_body, 1, None):
                self._end_game(DeathCause.SELF)
                return self.get_state()

        # --- commit ---
        self.snake.body = new_body
        self.snake.direction = move
        self.food = food
        self.score = score
        self.interval_ms = interval
        self.tick += 1

        if self.score > self.high_score:
            self._record_high_score()

        return self.get_state()

    def _record_high_score(self) -> None:
        """Raise the high score to the current score and persist it.

        The store may be shared with other engines, so its value is re-read
        and the high score never goes down. A failing store is logged and
        the game carries on with the in-memory value.
        """
        best = max(self.high_score, self.store.load_high_score())
        if self.score <= best:
            self.high_score = best
            return
        self.high_score = self.score
        try:
            self.store.save_high_score(self.high_score)
        except (OSError, ValueError):
            logger.warning(
                "Could not persist high score %d.", self.high_score,
                exc_info=True,
            )
            return
        logger.info("New high score: %d.", self.high_score)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "status": self.status.value,
            "score": self.score,
            "high_score": self.high_score,
            "interval_ms": self.interval_ms,
            "speed_level": self.config.speed_level(self.interval_ms),
            "direction": self.snake.direction.name,
            "death_cause": (
                self.death_cause.value if self.death_cause is not None else None
            ),
            "grid_size": self.grid.size,
            "snake": [list(seg) for seg in self.snake.body],
            "food": list(self.food) if self.food is not None else None,
        }

    def _end_game(self, cause: DeathCause) -> None:
        """Mark the game as over with the given cause."""
        self.status = GameStatus.GAME_OVER
        self.death_cause = cause
        logger.info(
            "Snake died (%s) at tick %d with score %d.",
            cause.value, self.tick, self.score,
        )
