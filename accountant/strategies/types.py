"""Strategy contracts and immutable per-turn views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from ..geometry import Vector2

if TYPE_CHECKING:
    from ..settings import EngineSettings


@dataclass(slots=True, frozen=True)
class DataPointView:
    id: int
    position: Vector2


@dataclass(slots=True, frozen=True)
class EnemyView:
    id: int
    position: Vector2
    life: int


@dataclass(slots=True, frozen=True)
class TurnState:
    hunter: Vector2
    data_points: tuple[DataPointView, ...]
    enemies: tuple[EnemyView, ...]


@dataclass(slots=True, frozen=True)
class MoveAction:
    destination: Vector2

    @property
    def kind(self) -> str:
        return "move"


@dataclass(slots=True, frozen=True)
class ShootAction:
    target_id: int

    @property
    def kind(self) -> str:
        return "shoot"


Action = MoveAction | ShootAction


@dataclass(slots=True, frozen=True)
class TurnDecision:
    action: Action
    reason: str
    target_id: int | None = None


@dataclass(slots=True, frozen=True)
class StrategyInitContext:
    strategy_name: str
    settings: EngineSettings


class Strategy(Protocol):
    def decide(self, state: TurnState) -> TurnDecision:
        """Return exactly one decision for this turn."""
