"""Command-line tools for Neon Snake."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from neon_snake.highscore import store_path_from_env

logger = logging.getLogger(__name__)

_CAUSES = {"wall": "WALL", "self": "SELF", "none": None}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neon-snake",
        description="Neon Snake high-score and commentary tools.",
    )
    parser.add_argument(
        "--store", type=str, default=str(store_path_from_env()),
        help="Path to the high-score JSON file.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- highscore ---
    hs_p = sub.add_parser("highscore", help="Inspect or reset the high score.")
    hs_p.add_argument("action", choices=["show", "reset"])

    # --- commentary ---
    com_p = sub.add_parser(
        "commentary", help="Ask the commentator about a finished game.",
    )
    com_p.add_argument("--score", type=int, required=True)
    com_p.add_argument("--cause", choices=sorted(_CAUSES), default="none")

    return parser


def _run_highscore(args: argparse.Namespace) -> int:
    from neon_snake.highscore import JsonFileHighScoreStore

    store = JsonFileHighScoreStore(args.store)
    if args.action == "reset":
        store.reset()
        logger.info("High score reset at %s", store.path)
        print(0)  # noqa: T201
        return 0
    print(store.load_high_score())  # noqa: T201
    return 0


def _run_commentary(args: argparse.Namespace) -> int:
    from neon_snake.commentary import CommentaryClient
    from neon_snake.engine import DeathCause

    if args.score < 0:
        logger.error("--score must be >= 0.")
        return 2
    cause_name = _CAUSES[args.cause]
    cause = DeathCause(cause_name) if cause_name is not None else None
    text = asyncio.run(CommentaryClient().get_commentary(args.score, cause))
    print(text)  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``neon-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "highscore": _run_highscore,
        "commentary": _run_commentary,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
