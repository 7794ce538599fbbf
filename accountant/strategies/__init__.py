"""Strategy plugin framework."""

from .manager import MatchResult, MatchRunner, run_match
from .registry import StrategyRegistry, default_registry, load_strategy_modules
from .types import (
    Action,
    DataPointView,
    EnemyView,
    MoveAction,
    ShootAction,
    Strategy,
    StrategyInitContext,
    TurnDecision,
    TurnState,
)

__all__ = [
    "Action",
    "DataPointView",
    "EnemyView",
    "MatchResult",
    "MatchRunner",
    "MoveAction",
    "ShootAction",
    "Strategy",
    "StrategyInitContext",
    "StrategyRegistry",
    "TurnDecision",
    "TurnState",
    "default_registry",
    "load_strategy_modules",
    "run_match",
]
