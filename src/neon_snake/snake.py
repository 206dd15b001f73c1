"""Snake representation and heading rules."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable

from neon_snake.grid import Coordinate


class Direction(enum.Enum):
    """Cardinal headings with ``(dx, dy)`` values; UP decreases ``y``."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    def is_opposite(self, other: Direction) -> bool:
        """True when *other* lies on the same axis with reversed sign."""
        return _OPPOSITES[self] is other


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake represented as an ordered deque of ``(x, y)`` segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        body: Iterable[Coordinate],
        direction: Direction = Direction.UP,
    ) -> None:
        self.body: deque[Coordinate] = deque(tuple(seg) for seg in body)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        self.direction = direction

    @property
    def head(self) -> Coordinate:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Coordinate:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def next_head(self, direction: Direction | None = None) -> Coordinate:
        """Compute the next head position without moving."""
        dx, dy = (direction or self.direction).value
        x, y = self.head
        return x + dx, y + dy

