"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from neon_snake.commentary import CommentaryClient
from neon_snake.highscore import (
    HighScoreStore,
    JsonFileHighScoreStore,
    store_path_from_env,
)
from neon_snake.server.routes import highscore_router, router
from neon_snake.server.session_manager import Commentator, SessionManager
from neon_snake.server.websocket import ws_router


def create_app(
    store: HighScoreStore | None = None,
    commentator: Commentator | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Without an explicit *store* the high score is kept in the JSON file named
    by NEON_SNAKE_HIGHSCORE_PATH (default ~/.neon_snake/highscore.json), the
    same file the CLI reads. Without an explicit *commentator* the Gemini
    client is configured from the environment.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(
            store=(
                store if store is not None
                else JsonFileHighScoreStore(store_path_from_env())
            ),
            commentator=commentator if commentator is not None else CommentaryClient(),
        )
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Neon Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(highscore_router)
    app.include_router(ws_router)
    return app
