"""Translate raw key names into game input."""

from __future__ import annotations

import enum

from neon_snake.snake import Direction


class Action(enum.Enum):
    """Non-directional commands a client can send."""

    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE = "toggle"


_KEY_MAP: dict[str, Direction | Action] = {
    "ArrowUp": Direction.UP,
    "w": Direction.UP,
    "W": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "s": Direction.DOWN,
    "S": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "a": Direction.LEFT,
    "A": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "d": Direction.RIGHT,
    "D": Direction.RIGHT,
    " ": Action.TOGGLE,
    "Space": Action.TOGGLE,
}

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def key_to_input(key: str) -> Direction | Action | None:
    """Map a keyboard key name to a direction or action.

    Key names follow the browser ``KeyboardEvent.key`` values. Unknown keys
    map to ``None``.
    """
    return _KEY_MAP.get(key)


def parse_direction(name: str) -> Direction | None:
    """Parse ``"up"``/``"Down"``/... into a :class:`Direction`."""
    return _DIRECTION_MAP.get(name.strip().lower())


def parse_action(name: str) -> Action | None:
    try:
        return Action(name.strip().lower())
    except ValueError:
        return None
