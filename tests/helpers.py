from __future__ import annotations

from accountant.geometry import Vector2
from accountant.models import ThreatModel
from accountant.settings import EngineSettings
from accountant.strategies.types import DataPointView, EnemyView, TurnState


def make_state(
    hunter: tuple[int, int],
    data_points: list[tuple[int, int]],
    enemies: list[tuple[int, int, int, int]],
) -> TurnState:
    return TurnState(
        hunter=Vector2(*hunter),
        data_points=tuple(
            DataPointView(id=idx, position=Vector2(x, y)) for idx, (x, y) in enumerate(data_points)
        ),
        enemies=tuple(
            EnemyView(id=enemy_id, position=Vector2(x, y), life=life) for enemy_id, x, y, life in enemies
        ),
    )


def make_threat(
    enemy_id: int,
    position: tuple[int, int],
    data_points: list[tuple[int, int]],
    *,
    life: int = 10,
    settings: EngineSettings | None = None,
) -> ThreatModel:
    reading = EnemyView(id=enemy_id, position=Vector2(*position), life=life)
    points = [Vector2(x, y) for x, y in data_points]
    return ThreatModel.from_reading(reading, points, settings or EngineSettings())
