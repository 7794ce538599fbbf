"""Batch evaluation of strategies over seeded simulated matches."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

import numpy as np
from tqdm.auto import tqdm

from . import config
from .settings import EngineSettings
from .strategies.manager import MatchResult, run_match
from .strategies.registry import StrategyRegistry, default_registry
from .strategies.types import StrategyInitContext
from .world import GameWorld


@dataclass(slots=True, frozen=True)
class EvaluationSummary:
    strategy: str
    games: int
    scores: np.ndarray
    deaths: int
    failures: int

    @property
    def mean(self) -> float:
        return float(np.mean(self.scores)) if self.scores.size else 0.0

    @property
    def median(self) -> float:
        return float(np.median(self.scores)) if self.scores.size else 0.0

    @property
    def std(self) -> float:
        return float(np.std(self.scores)) if self.scores.size else 0.0

    @property
    def best(self) -> int:
        return int(np.max(self.scores)) if self.scores.size else 0

    @property
    def worst(self) -> int:
        return int(np.min(self.scores)) if self.scores.size else 0

    @property
    def death_rate(self) -> float:
        return self.deaths / self.games if self.games else 0.0

    def describe(self) -> str:
        return (
            f"strategy={self.strategy} games={self.games} "
            f"mean={self.mean:.1f} median={self.median:.1f} std={self.std:.1f} "
            f"min={self.worst} max={self.best} "
            f"death_rate={self.death_rate:.2%} failures={self.failures}"
        )


def evaluate_strategy(
    strategy_name: str,
    *,
    games: int,
    seed: int,
    settings: EngineSettings | None = None,
    registry: StrategyRegistry | None = None,
    progress: bool = True,
) -> EvaluationSummary:
    settings = settings or EngineSettings()
    registry = registry or default_registry()
    init_ctx = StrategyInitContext(strategy_name=strategy_name, settings=settings)

    results: list[MatchResult] = []
    game_bar = tqdm(
        range(max(0, games)),
        desc=f"evaluating {strategy_name}",
        dynamic_ncols=True,
        disable=not progress,
    )
    for index in game_bar:
        world = GameWorld.random(seed + index, settings=settings)
        strategy = registry.create(strategy_name, init_ctx)
        result = run_match(world, strategy, strategy_name=strategy_name)
        results.append(result)
        game_bar.set_postfix(
            score=result.score,
            mean=f"{np.mean([r.score for r in results]):.1f}",
        )
    game_bar.close()

    return EvaluationSummary(
        strategy=strategy_name,
        games=len(results),
        scores=np.array([r.score for r in results], dtype=np.int64),
        deaths=sum(1 for r in results if not r.hunter_alive),
        failures=sum(1 for r in results if r.failed),
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate Accountant strategies on simulated matches.")
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--seed", type=int, default=1337)
    parser.add_argument(
        "--strategy",
        action="append",
        default=None,
        help="Strategy to evaluate (repeatable, defaults to the configured strategy)",
    )
    parser.add_argument("--no-progress", dest="progress", action="store_false")
    parser.set_defaults(progress=True)
    return parser


def main() -> None:
    args = _build_parser().parse_args()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    settings = EngineSettings.from_env()
    registry = default_registry()
    for name in args.strategy or [config.DEFAULT_STRATEGY]:
        summary = evaluate_strategy(
            name,
            games=args.games,
            seed=args.seed,
            settings=settings,
            registry=registry,
            progress=args.progress,
        )
        print(summary.describe(), flush=True)


if __name__ == "__main__":
    main()
