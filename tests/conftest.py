"""Shared fixtures for server tests."""

from __future__ import annotations

import asyncio

import pytest

from neon_snake.highscore import MemoryHighScoreStore
from neon_snake.server.app import create_app
from neon_snake.server.session_manager import SessionManager


class StubCommentator:
    """Returns canned commentary and records what it was asked.

    *delay* keeps the reply pending for that many seconds.
    """

    def __init__(self, text: str = "Ouch.", delay: float = 0.0) -> None:
        self.text = text
        self.delay = delay
        self.calls: list[tuple] = []

    async def get_commentary(self, score, death_cause) -> str:
        self.calls.append((score, death_cause))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.text


@pytest.fixture()
def make_commentator():
    return StubCommentator


@pytest.fixture()
def store():
    return MemoryHighScoreStore()


@pytest.fixture()
def app(store, make_commentator):
    application = create_app()
    application.state.session_manager = SessionManager(
        store=store, commentator=make_commentator(),
    )
    return application
