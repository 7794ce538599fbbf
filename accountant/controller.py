"""Per-turn decision orchestration for the hunter."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from .models import HunterAgent, ThreatModel, build_threats
from .settings import EngineSettings
from .strategies.types import MoveAction, ShootAction, TurnDecision, TurnState

logger = logging.getLogger(__name__)

T = TypeVar("T")

REASON_EVADE = "evade"
REASON_POINT_BLANK = "point_blank"
REASON_ATTACK = "attack"


class DecisionError(RuntimeError):
    """Raised when no action can be produced for a turn."""


def min_by(items: Sequence[T], key: Callable[[T], float]) -> T:
    """Smallest item by ``key``; the first one seen wins ties."""
    if not items:
        raise ValueError("min_by() requires at least one item")
    best = items[0]
    best_key = key(best)
    for item in items[1:]:
        value = key(item)
        if value < best_key:
            best = item
            best_key = value
    return best


class TurnDecisionController:
    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()

    def build(self, state: TurnState) -> tuple[HunterAgent, list[ThreatModel]]:
        if not state.enemies:
            raise DecisionError("No enemies left to act against")
        if not state.data_points:
            raise DecisionError("No data points left for enemies to pursue")
        hunter = HunterAgent.at(state.hunter, self.settings)
        data_points = [point.position for point in state.data_points]
        threats = build_threats(state.enemies, data_points, self.settings)
        return hunter, threats

    def decide(self, state: TurnState) -> TurnDecision:
        hunter, threats = self.build(state)
        return self.decide_for(hunter, threats)

    def decide_for(self, hunter: HunterAgent, threats: Sequence[ThreatModel]) -> TurnDecision:
        if not threats:
            raise DecisionError("No enemies left to act against")

        lethal = [threat for threat in threats if threat.nearly_in_range_of(hunter.position)]
        if lethal:
            plan = hunter.plan_evasion(threats)
            logger.info(
                "Evading %s -> %s (iterations=%d, converged=%s)",
                ", ".join(str(threat.id) for threat in lethal),
                plan.destination,
                plan.iterations,
                plan.converged,
            )
            return TurnDecision(action=MoveAction(plan.destination), reason=REASON_EVADE)

        vulnerable = [threat for threat in threats if threat.at_point_blank_of(hunter)]
        if vulnerable:
            target = min_by(vulnerable, key=lambda threat: hunter.distance_to(threat.position))
            logger.info("Shooting %d at point blank", target.id)
            return TurnDecision(action=ShootAction(target.id), reason=REASON_POINT_BLANK, target_id=target.id)

        target = min_by(threats, key=lambda threat: threat.turns_before_capture)
        action = hunter.plan_attack(target, threats)
        logger.info(
            "Planned attack on %d (%d turns before capture): %s",
            target.id,
            target.turns_before_capture,
            action.kind,
        )
        return TurnDecision(action=action, reason=REASON_ATTACK, target_id=target.id)
