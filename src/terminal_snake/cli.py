"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from terminal_snake.config import GameConfig
from terminal_snake.errors import SnakeGameError
from terminal_snake.loop import play
from terminal_snake.terminal import CursesTerminal, Terminal

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terminal-snake",
        description="Play snake in the terminal. Arrow keys steer, q quits.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override it).",
    )
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument(
        "--fit", action="store_true",
        help="Size the board to fill the terminal.",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Write logs here; the screen belongs to the game.",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level),
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    else:
        # Nothing may write to the terminal while curses owns it.
        logging.basicConfig(handlers=[logging.NullHandler()])


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    flag_map = {
        "width": "board_width",
        "height": "board_height",
        "seed": "seed",
    }
    overrides = {
        cfg_name: getattr(args, cli_name)
        for cli_name, cfg_name in flag_map.items()
        if getattr(args, cli_name) is not None
    }
    return config.replace(**overrides) if overrides else config


def main(
    argv: list[str] | None = None,
    terminal: Terminal | None = None,
) -> int:
    """Entry point for the ``terminal-snake`` command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    try:
        config = _load_config(args)
    except (OSError, ValueError, TypeError) as exc:
        parser.error(f"invalid configuration: {exc}")

    terminal = terminal if terminal is not None else CursesTerminal()
    try:
        state = play(config, terminal, fit=args.fit)
    except SnakeGameError as exc:
        logger.error("Session aborted: %s", exc)
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 1

    print(f"Game Over! Your score is {state.score}")  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
