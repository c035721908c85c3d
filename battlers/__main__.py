"""Entry point: ``python -m battlers``.

Supports two modes:
  - ``python -m battlers``          → Launch the FastAPI stepping server
  - ``python -m battlers cli``      → Headless run-to-completion battle
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from battlers.config import SimulationConfig

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 2


def _add_common(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--seed", type=int, default=None, help="RNG seed (random when omitted)")
    sub.add_argument("--players", type=int, default=2, help="Number of randomized players")
    sub.add_argument("--roster", type=str, default=None, help="YAML roster file (overrides --players)")
    sub.add_argument("--max-turns", type=int, default=256)
    sub.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn-based arena battle simulator")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI stepping server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--tick-rate", type=float, default=0.5, help="Seconds between auto-advanced turns")
    _add_common(srv)

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless battle to completion")
    cli.add_argument("--save-roster", type=str, default=None, help="Write the starting roster as YAML")
    _add_common(cli)

    return parser


def _config_from_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> SimulationConfig:
    defaults = SimulationConfig()
    if not args.roster and not 1 <= args.players <= defaults.max_players:
        parser.error(f"--players must be between 1 and {defaults.max_players}")
    if args.max_turns < 0:
        parser.error("--max-turns must not be negative")
    return SimulationConfig(
        seed=args.seed,
        max_turns=args.max_turns,
        player_count=args.players,
        roster_file=args.roster,
        tick_rate=getattr(args, "tick_rate", defaults.tick_rate),
        log_level=args.log_level,
    )


def _run_server(config: SimulationConfig, host: str, port: int) -> None:
    import uvicorn

    from battlers.api.app import create_app
    from battlers.systems.loader import load_simulation_config, players_from_config

    # Load eagerly so a bad roster fails before the server binds.
    players = None
    if config.roster_file:
        players = players_from_config(load_simulation_config(config.roster_file))

    app = create_app(config, players)
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower(), log_config=None)


def _run_cli(config: SimulationConfig, save_roster: str | None) -> None:
    from battlers.core.names import random_players
    from battlers.engine.game import simulate
    from battlers.systems.loader import dump_roster, load_simulation_config, players_from_config
    from battlers.systems.rng import DiceRNG

    rng = DiceRNG.from_seed(config.seed)
    if config.roster_file:
        players = players_from_config(load_simulation_config(config.roster_file))
    else:
        players = random_players(config.player_count, rng, config.arena_min, config.arena_max)
        for player in players:
            logger.info("%s", player.describe())

    if save_roster:
        Path(save_roster).write_text(dump_roster(players), encoding="utf-8")
        logger.info("Roster written to %s", save_roster)

    outcome = simulate(players, config, rng)

    print(f"Seed: {rng.seed}")
    print(f"Turns elapsed: {outcome.turns}")
    for player in outcome.survivors:
        print(f"  {player.describe()}")
    print(outcome.summary())


def main(argv: list[str] | None = None) -> int:
    from battlers.core.errors import ConfigError
    from battlers.utils.logging import setup_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])

    config = _config_from_args(args, parser)
    setup_logging(config.log_level)

    try:
        if args.command == "serve":
            _run_server(config, args.host, args.port)
        else:
            _run_cli(config, args.save_roster)
    except ConfigError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
