"""Game-over commentary from a remote language model."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from neon_snake.config import CommentaryConfig
from neon_snake.engine import DeathCause

logger = logging.getLogger(__name__)

MISSING_KEY_TEXT = "Gemini API key not found. Add API_KEY to env."
NETWORK_ERROR_TEXT = "The AI is speechless at your performance (Network Error)."
DEFAULT_TEXT = "Game over! Better luck next time."

_DEATH_DESCRIPTIONS = {
    DeathCause.WALL: "Crashed into a wall",
    DeathCause.SELF: "Bit my own tail",
}


def fallback_commentary() -> str:
    """Text shown while a request is pending or when none can be made."""
    return DEFAULT_TEXT


def build_prompt(score: int, death_cause: DeathCause | None) -> str:
    """Compose the commentator prompt for a finished game."""
    # No cause falls through to the self-collision wording.
    death = _DEATH_DESCRIPTIONS.get(death_cause, "Bit my own tail")
    return (
        "I just played a classic Snake game.\n"
        f"- Final Score: {score}\n"
        f"- Cause of Death: {death}\n"
        "\n"
        "Act as a witty, slightly sarcastic, but encouraging arcade game "
        "commentator.\n"
        "Give me a one-sentence reaction to my performance.\n"
        "If the score is low (< 5), roast me gently.\n"
        "If high (> 20), praise me.\n"
        "Keep it under 20 words."
    )


class CommentaryClient:
    """Fetches a one-line reaction to a finished game via the Gemini SDK.

    Every failure mode degrades to a fixed string; :meth:`get_commentary`
    never raises for network or API problems. *client* may be any object
    exposing ``aio.models.generate_content``, which is how tests stand in
    for the service.
    """

    def __init__(
        self,
        config: CommentaryConfig | None = None,
        client: Any | None = None,
    ) -> None:
        self.config = config if config is not None else CommentaryConfig.from_env()
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(
                api_key=self.config.api_key,
                http_options=types.HttpOptions(
                    timeout=int(self.config.timeout * 1000),
                ),
            )
        return self._client

    async def get_commentary(
        self, score: int, death_cause: DeathCause | None,
    ) -> str:
        if not self.config.api_key:
            logger.warning("API_KEY is missing from environment variables.")
            return MISSING_KEY_TEXT

        try:
            resp = await self._get_client().aio.models.generate_content(
                model=self.config.model,
                contents=build_prompt(score, death_cause),
            )
        except (errors.APIError, httpx.HTTPError, ValueError):
            logger.warning("Error fetching commentary.", exc_info=True)
            return NETWORK_ERROR_TEXT

        text = str(getattr(resp, "text", "") or "").strip()
        return text or DEFAULT_TEXT
