"""Entry point: ``python -m tilegame``.

Supports two modes:
  - ``python -m tilegame``         → Launch the FastAPI server
  - ``python -m tilegame cli``     → Headless scripted session
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

_STEP_KEYS = {"U": "up", "D": "down", "L": "left", "R": "right"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tile-grid goodie game")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--state-file", type=str, default="game_state.json")
    srv.add_argument("--strict", action="store_true", help="Reject invalid moves with an error")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a scripted headless session")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--width", type=int, default=20)
    cli.add_argument("--height", type=int, default=10)
    cli.add_argument("--goodies", type=int, default=10)
    cli.add_argument("--name", type=str, default="Player 1")
    cli.add_argument("--moves", type=str, default="RRRRDDDDLLLLUUUU", help="Steps as U/D/L/R letters")
    cli.add_argument("--state-file", type=str, default="game_state.json")
    cli.add_argument("--load", action="store_true", help="Restore the saved game before moving")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from tilegame.api.app import create_app
    from tilegame.config import GameConfig

    config = GameConfig(
        seed=args.seed,
        state_file=args.state_file,
        strict_moves=args.strict,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> int:
    from tilegame.config import GameConfig
    from tilegame.core.enums import Direction
    from tilegame.core.errors import SnapshotError
    from tilegame.core.game import Game
    from tilegame.persistence.store import FileStore
    from tilegame.utils.logging import setup_logging

    config = GameConfig(
        seed=args.seed,
        board_width=args.width,
        board_height=args.height,
        state_file=args.state_file,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    store = FileStore(config.state_file)
    game = Game(config)
    game.create_board(config.board_width, config.board_height)

    loaded = 0
    if args.load:
        try:
            loaded = game.load_game_state(store)
        except SnapshotError as exc:
            logger.error("Cannot restore %s: %s", config.state_file, exc)
            return 1
    if not loaded:
        game.add_goodies(args.goodies, visual="apple")
    if game.active_player is None:
        game.add_player(args.name, "hero")

    for key in args.moves.upper():
        if key not in _STEP_KEYS:
            logger.warning("Ignoring unknown step %r", key)
            continue
        outcome = game.move(Direction[_STEP_KEYS[key].upper()])
        player = game.active_player
        logger.info("%-5s %-13s pos=%s health=%d", key, outcome.name, player.pos, player.health)

    game.save_game_state(store)
    player = game.active_player
    logger.info(
        "Done. %s ended at %s with %d energy; %d goodies left. Saved to %s",
        player.name, player.pos, player.health, len(game.goodies), config.state_file,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
        return 0
    return _run_cli(args)


if __name__ == "__main__":
    sys.exit(main())
