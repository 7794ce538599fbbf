from __future__ import annotations

import pytest

from accountant.controller import REASON_EVADE, REASON_POINT_BLANK
from accountant.geometry import Vector2
from accountant.settings import EngineSettings
from accountant.strategies import (
    MoveAction,
    ShootAction,
    StrategyInitContext,
    StrategyRegistry,
    TurnDecision,
    default_registry,
    load_strategy_modules,
)
from accountant.strategy_plugins.core import REASON_NEAREST, NearestTargetStrategy, TacticalStrategy

from .helpers import make_state


def init_ctx(name: str = "test") -> StrategyInitContext:
    return StrategyInitContext(strategy_name=name, settings=EngineSettings())


class StandStill:
    def __init__(self, ctx: StrategyInitContext) -> None:
        self.ctx = ctx

    def decide(self, state):
        return TurnDecision(action=MoveAction(state.hunter), reason="idle")


def test_registry_normalizes_names_and_creates_strategies():
    registry = StrategyRegistry()
    registry.register("  Idle ", StandStill)
    assert registry.names == ("idle",)
    strategy = registry.create("IDLE", init_ctx("idle"))
    assert isinstance(strategy, StandStill)
    assert strategy.ctx.strategy_name == "idle"


def test_registry_rejects_empty_and_duplicate_names():
    registry = StrategyRegistry()
    registry.register("idle", StandStill)
    with pytest.raises(ValueError):
        registry.register("", StandStill)
    with pytest.raises(ValueError):
        registry.register("IDLE", StandStill)


def test_registry_aliases_resolve_to_their_target():
    registry = StrategyRegistry()
    registry.register("idle", StandStill)
    registry.alias("Lazy", "IDLE")
    assert registry.names == ("idle", "lazy")
    assert "lazy" in registry
    assert "busy" not in registry
    assert registry.resolve(" LAZY ") == "idle"
    assert isinstance(registry.create("lazy", init_ctx()), StandStill)
    with pytest.raises(ValueError):
        registry.alias("idle", "idle")
    with pytest.raises(ValueError):
        registry.alias("other", "missing")
    with pytest.raises(ValueError):
        registry.register("lazy", StandStill)


def test_registry_unknown_name_lists_available():
    registry = StrategyRegistry()
    registry.register("idle", StandStill)
    with pytest.raises(ValueError, match="Available: idle"):
        registry.create("missing", init_ctx())


def test_default_registry_loads_builtin_pack():
    registry = default_registry()
    assert registry.names == ("nearest", "tactical", "wolff")
    assert isinstance(registry.create("wolff", init_ctx()), TacticalStrategy)
    assert isinstance(registry.create("nearest", init_ctx()), NearestTargetStrategy)


def test_loader_requires_register_function():
    registry = StrategyRegistry()
    with pytest.raises(ValueError, match="register"):
        load_strategy_modules(["accountant.geometry"], registry)


def test_loader_skips_blank_module_names():
    registry = StrategyRegistry()
    load_strategy_modules(["", "  ", "accountant.strategy_plugins.core"], registry)
    assert "tactical" in registry.names


def test_tactical_strategy_matches_controller_priority():
    strategy = TacticalStrategy(init_ctx())
    state = make_state((5000, 5000), [(12000, 5000)], [(3, 8000, 5000, 10)])
    decision = strategy.decide(state)
    assert decision.reason == REASON_POINT_BLANK
    assert decision.action == ShootAction(3)


def test_nearest_strategy_shoots_closest_enemy():
    strategy = NearestTargetStrategy(init_ctx())
    state = make_state(
        (1000, 1000),
        [(15000, 8000)],
        [(0, 14000, 8000, 10), (1, 6000, 3000, 10)],
    )
    decision = strategy.decide(state)
    assert decision.reason == REASON_NEAREST
    assert decision.action == ShootAction(1)
    assert decision.target_id == 1


def test_nearest_strategy_still_evades():
    strategy = NearestTargetStrategy(init_ctx())
    state = make_state((8000, 4500), [(12000, 4500)], [(0, 9000, 4500, 10)])
    decision = strategy.decide(state)
    assert decision.reason == REASON_EVADE
    assert decision.action == MoveAction(Vector2(7000, 4500))
