"""Drives a strategy through a simulated match."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .types import Strategy, TurnDecision

if TYPE_CHECKING:
    from ..world import GameWorld, TurnEvents

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MatchResult:
    score: int
    turns: int
    kills: int
    shots_fired: int
    data_points_left: int
    hunter_alive: bool
    failed: bool = False
    error: str | None = None


class MatchRunner:
    def __init__(self, world: GameWorld, strategy: Strategy, *, strategy_name: str = "strategy") -> None:
        self.world = world
        self.strategy = strategy
        self.strategy_name = strategy_name
        self.history: list[tuple[TurnDecision, TurnEvents]] = []

    def play_turn(self) -> tuple[TurnDecision, TurnEvents]:
        decision = self.strategy.decide(self.world.turn_state())
        events = self.world.step(decision.action)
        self.history.append((decision, events))
        logger.debug(
            "Turn %d: %s (%s) killed=%s captured=%s",
            events.turn,
            decision.action,
            decision.reason,
            events.killed,
            events.captured,
        )
        return decision, events

    def run(self) -> MatchResult:
        failed = False
        error: str | None = None
        while not self.world.is_over:
            try:
                self.play_turn()
            except Exception as exc:
                logger.exception(
                    "Strategy '%s' failed on turn %d",
                    self.strategy_name,
                    self.world.turn + 1,
                )
                failed = True
                error = f"{type(exc).__name__}: {exc}"
                break

        return MatchResult(
            score=0 if failed else self.world.score,
            turns=self.world.turn,
            kills=self.world.kills,
            shots_fired=self.world.shots_fired,
            data_points_left=len(self.world.data_points),
            hunter_alive=self.world.hunter_alive,
            failed=failed,
            error=error,
        )


def run_match(world: GameWorld, strategy: Strategy, *, strategy_name: str = "strategy") -> MatchResult:
    return MatchRunner(world, strategy, strategy_name=strategy_name).run()
