"""Authoritative referee simulation of the arena game."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from math import isinf

from . import config
from .geometry import Vector2
from .models import HunterAgent, ThreatModel
from .settings import EngineSettings
from .strategies.types import Action, DataPointView, EnemyView, MoveAction, ShootAction, TurnState

logger = logging.getLogger(__name__)


class InvalidActionError(ValueError):
    """Raised when an action cannot be applied to the current world."""


@dataclass(slots=True)
class Enemy:
    id: int
    position: Vector2
    life: int


@dataclass(slots=True)
class TurnEvents:
    turn: int
    hunter_position: Vector2
    damage: int = 0
    killed: list[int] = field(default_factory=list)
    captured: list[int] = field(default_factory=list)
    hunter_killed_by: list[int] = field(default_factory=list)


class GameWorld:
    def __init__(
        self,
        *,
        hunter: Vector2,
        data_points: dict[int, Vector2],
        enemies: dict[int, Enemy],
        settings: EngineSettings | None = None,
        max_turns: int = config.SIMULATION_MAX_TURNS,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.hunter = hunter
        self.data_points = dict(data_points)
        self.enemies = dict(enemies)
        self.max_turns = max(1, max_turns)

        self.turn = 0
        self.kills = 0
        self.shots_fired = 0
        self.hunter_alive = True
        self.total_enemy_life = sum(enemy.life for enemy in self.enemies.values())

    @classmethod
    def from_state(cls, state: TurnState, settings: EngineSettings | None = None) -> GameWorld:
        return cls(
            hunter=state.hunter,
            data_points={point.id: point.position for point in state.data_points},
            enemies={
                enemy.id: Enemy(id=enemy.id, position=enemy.position, life=enemy.life)
                for enemy in state.enemies
            },
            settings=settings,
        )

    @classmethod
    def random(
        cls,
        seed: int | None = None,
        *,
        settings: EngineSettings | None = None,
        data_point_count: int | None = None,
        enemy_count: int | None = None,
    ) -> GameWorld:
        settings = settings or EngineSettings()
        rng = random.Random(seed)
        if data_point_count is None:
            data_point_count = rng.randint(config.SCENARIO_MIN_DATA_POINTS, config.SCENARIO_MAX_DATA_POINTS)
        if enemy_count is None:
            enemy_count = rng.randint(config.SCENARIO_MIN_ENEMIES, config.SCENARIO_MAX_ENEMIES)
        if data_point_count < 1 or enemy_count < 1:
            raise ValueError("A scenario needs at least one data point and one enemy")

        hunter = _random_point(rng, settings)
        data_points = {idx: _random_point(rng, settings) for idx in range(data_point_count)}

        # Keep the opening turn survivable: no enemy may reach the hunter on its first step.
        safe_distance = settings.enemy_attack_range + settings.enemy_speed
        enemies: dict[int, Enemy] = {}
        for idx in range(enemy_count):
            position = _random_point(rng, settings)
            for _ in range(config.SCENARIO_SPAWN_ATTEMPTS):
                if position.distance_to(hunter) > safe_distance:
                    break
                position = _random_point(rng, settings)
            else:
                raise ValueError(f"Could not place enemy {idx} outside the hunter's danger zone")
            life = rng.randint(config.SCENARIO_MIN_ENEMY_LIFE, config.SCENARIO_MAX_ENEMY_LIFE)
            enemies[idx] = Enemy(id=idx, position=position, life=life)

        return cls(hunter=hunter, data_points=data_points, enemies=enemies, settings=settings)

    @property
    def is_over(self) -> bool:
        return (
            not self.hunter_alive
            or not self.enemies
            or not self.data_points
            or self.turn >= self.max_turns
        )

    @property
    def score(self) -> int:
        if not self.hunter_alive:
            return 0
        points_left = len(self.data_points)
        life_bonus = max(0, self.total_enemy_life - config.SCORE_SHOT_PENALTY * self.shots_fired)
        return (
            config.SCORE_KILL * self.kills
            + config.SCORE_DATA_POINT * points_left
            + config.SCORE_LIFE_BONUS * points_left * life_bonus
        )

    def turn_state(self) -> TurnState:
        return TurnState(
            hunter=self.hunter,
            data_points=tuple(
                DataPointView(id=point_id, position=position)
                for point_id, position in self.data_points.items()
            ),
            enemies=tuple(
                EnemyView(id=enemy.id, position=enemy.position, life=enemy.life)
                for enemy in self.enemies.values()
            ),
        )

    def step(self, action: Action) -> TurnEvents:
        if self.is_over:
            raise InvalidActionError("The game is already over")
        if isinstance(action, ShootAction) and action.target_id not in self.enemies:
            raise InvalidActionError(f"Cannot shoot unknown enemy {action.target_id}")

        self.turn += 1
        self._move_enemies()

        if isinstance(action, MoveAction):
            self._move_hunter(action.destination)
        events = TurnEvents(turn=self.turn, hunter_position=self.hunter)

        events.hunter_killed_by = [
            enemy.id
            for enemy in self.enemies.values()
            if enemy.position.distance_to(self.hunter) <= self.settings.enemy_attack_range
        ]
        if events.hunter_killed_by:
            self.hunter_alive = False
            logger.info(
                "Hunter caught at %s by %s on turn %d",
                self.hunter,
                ", ".join(str(enemy_id) for enemy_id in events.hunter_killed_by),
                self.turn,
            )
            return events

        if isinstance(action, ShootAction):
            events.damage = self._shoot(self.enemies[action.target_id])

        for enemy_id, enemy in list(self.enemies.items()):
            if enemy.life <= 0:
                del self.enemies[enemy_id]
                self.kills += 1
                events.killed.append(enemy_id)

        for enemy in self.enemies.values():
            for point_id, position in list(self.data_points.items()):
                if position == enemy.position:
                    del self.data_points[point_id]
                    events.captured.append(point_id)

        return events

    def _move_enemies(self) -> None:
        if not self.data_points:
            return
        points = list(self.data_points.values())
        for enemy in self.enemies.values():
            reading = EnemyView(id=enemy.id, position=enemy.position, life=enemy.life)
            enemy.position = ThreatModel.from_reading(reading, points, self.settings).next_position

    def _move_hunter(self, destination: Vector2) -> None:
        hunter = HunterAgent.at(self.hunter, self.settings)
        self.hunter = hunter.next_position_towards(destination).clamp(
            self.settings.arena_low,
            self.settings.arena_high,
        )

    def _shoot(self, enemy: Enemy) -> int:
        hunter = HunterAgent.at(self.hunter, self.settings)
        raw = hunter.damage_dealt(hunter.distance_to(enemy.position))
        damage = enemy.life if isinf(raw) else int(round(raw))
        enemy.life -= damage
        self.shots_fired += 1
        return damage


def _random_point(rng: random.Random, settings: EngineSettings) -> Vector2:
    return Vector2(rng.randint(0, settings.arena_width), rng.randint(0, settings.arena_height))
