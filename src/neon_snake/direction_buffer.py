"""Single-slot buffer between input events and the tick loop."""

from __future__ import annotations

import threading

from neon_snake.snake import Direction


class DirectionBuffer:
    """Holds the next heading the snake should take.

    Each accepted input overwrites the slot, so only the last valid input
    before a tick takes effect. Set and consume run under one lock so the
    comparison against the current heading never tears with a tick.
    """

    def __init__(self) -> None:
        self._pending: Direction | None = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> Direction | None:
        return self._pending

    def set_intended_heading(
        self, requested: Direction, current: Direction,
    ) -> bool:
        """Queue *requested* unless it reverses *current*.

        *current* is the authoritative heading of the last committed tick,
        not the pending one. Returns True if the slot was written.
        """
        with self._lock:
            if requested.is_opposite(current):
                return False
            self._pending = requested
            return True

    def consume(self, default: Direction) -> Direction:
        """Take and clear the pending heading, or return *default*."""
        with self._lock:
            heading = self._pending if self._pending is not None else default
            self._pending = None
            return heading

    def clear(self) -> None:
        with self._lock:
            self._pending = None
