"""Built-in strategy pack."""

from __future__ import annotations

from ..controller import REASON_EVADE, TurnDecisionController, min_by
from ..strategies.registry import StrategyRegistry
from ..strategies.types import MoveAction, ShootAction, StrategyInitContext, TurnDecision, TurnState

REASON_NEAREST = "nearest"


class TacticalStrategy:
    def __init__(self, init_ctx: StrategyInitContext) -> None:
        self.controller = TurnDecisionController(init_ctx.settings)

    def decide(self, state: TurnState) -> TurnDecision:
        return self.controller.decide(state)


class NearestTargetStrategy:
    """Baseline: evade when lethal, otherwise shoot whatever is closest."""

    def __init__(self, init_ctx: StrategyInitContext) -> None:
        self.controller = TurnDecisionController(init_ctx.settings)

    def decide(self, state: TurnState) -> TurnDecision:
        hunter, threats = self.controller.build(state)
        if any(threat.nearly_in_range_of(hunter.position) for threat in threats):
            return TurnDecision(action=MoveAction(hunter.safety_from(threats)), reason=REASON_EVADE)
        target = min_by(threats, key=lambda threat: hunter.distance_to(threat.position))
        return TurnDecision(action=ShootAction(target.id), reason=REASON_NEAREST, target_id=target.id)


def register(registry: StrategyRegistry) -> None:
    registry.register("tactical", lambda init_ctx: TacticalStrategy(init_ctx))
    registry.alias("wolff", "tactical")
    registry.register("nearest", lambda init_ctx: NearestTargetStrategy(init_ctx))
