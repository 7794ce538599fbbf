"""Command-line entry points: the stdin/stdout game loop and helpers."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

import uvicorn

from . import config
from .controller import DecisionError
from .protocol import ProtocolError, format_action, read_turn
from .settings import EngineSettings
from .strategies.manager import MatchRunner
from .strategies.registry import default_registry
from .strategies.types import Strategy, StrategyInitContext
from .world import GameWorld

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Accountant tactical decision engine.")
    parser.add_argument("--log-level", type=str, default=config.LOG_LEVEL)
    parser.add_argument("--strategy", type=str, default=config.DEFAULT_STRATEGY)
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("play", help="Read turns from stdin and print one command per turn")

    simulate = sub.add_parser("simulate", help="Run one seeded simulated match")
    simulate.add_argument("--seed", type=int, default=1337)
    simulate.add_argument("--data-points", type=int, default=None)
    simulate.add_argument("--enemies", type=int, default=None)

    serve = sub.add_parser("serve", help="Run the HTTP decision service")
    serve.add_argument("--host", type=str, default=config.SERVER_HOST)
    serve.add_argument("--port", type=int, default=config.SERVER_PORT)
    return parser


def _create_strategy(name: str, settings: EngineSettings) -> Strategy:
    registry = default_registry()
    return registry.create(name, StrategyInitContext(strategy_name=name, settings=settings))


def play(strategy: Strategy, stdin: TextIO, stdout: TextIO) -> int:
    lines = iter(stdin)
    turns = 0
    while True:
        try:
            state = read_turn(lines)
        except ProtocolError:
            logger.exception("Malformed turn input after %d turn(s)", turns)
            return 2
        if state is None:
            return 0

        try:
            decision = strategy.decide(state)
        except DecisionError:
            logger.exception("No decision possible on turn %d", turns + 1)
            return 1
        turns += 1
        if config.VERBOSE_TURNS:
            logger.info("Turn %d: %s", turns, decision.reason)
        print(format_action(decision.action), file=stdout, flush=True)


def simulate(
    strategy: Strategy,
    strategy_name: str,
    *,
    seed: int,
    settings: EngineSettings,
    data_points: int | None,
    enemies: int | None,
) -> int:
    world = GameWorld.random(
        seed,
        settings=settings,
        data_point_count=data_points,
        enemy_count=enemies,
    )
    logger.info(
        "Simulating seed=%d with %d data point(s) and %d enemies",
        seed,
        len(world.data_points),
        len(world.enemies),
    )
    result = MatchRunner(world, strategy, strategy_name=strategy_name).run()
    print(
        f"score={result.score} turns={result.turns} kills={result.kills} "
        f"shots={result.shots_fired} data_points_left={result.data_points_left} "
        f"alive={'yes' if result.hunter_alive else 'no'}",
        flush=True,
    )
    return 1 if result.failed else 0


def serve(host: str, port: int) -> int:
    uvicorn.run("accountant.server:app", host=host, port=port, reload=False)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    command = args.command or "play"
    if command == "serve":
        return serve(args.host, args.port)

    settings = EngineSettings.from_env()
    strategy_name = args.strategy.strip().lower()
    strategy = _create_strategy(strategy_name, settings)
    if command == "simulate":
        return simulate(
            strategy,
            strategy_name,
            seed=args.seed,
            settings=settings,
            data_points=args.data_points,
            enemies=args.enemies,
        )
    return play(strategy, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
