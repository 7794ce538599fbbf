"""Turn-scoped threat and hunter models with their planners."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from math import ceil, inf

from .geometry import Vector2
from .settings import EngineSettings
from .strategies.types import Action, EnemyView, MoveAction, ShootAction

logger = logging.getLogger(__name__)


def _nearest(origin: Vector2, points: Iterable[Vector2]) -> Vector2 | None:
    best: Vector2 | None = None
    best_dist = inf
    for point in points:
        dist = origin.distance_to(point)
        # Strict comparison keeps the first point seen on ties.
        if dist < best_dist:
            best_dist = dist
            best = point
    return best


@dataclass(slots=True, frozen=True)
class ThreatModel:
    id: int
    position: Vector2
    life: int
    attack_range: float
    speed: float
    objective: Vector2
    turns_before_capture: int
    next_position: Vector2

    @classmethod
    def from_reading(
        cls,
        reading: EnemyView,
        data_points: Sequence[Vector2],
        settings: EngineSettings,
    ) -> ThreatModel:
        objective = _nearest(reading.position, data_points)
        if objective is None:
            raise ValueError(f"Enemy {reading.id} has no data point to pursue")
        speed = settings.enemy_speed
        turns = ceil(reading.position.distance_to(objective) / speed)
        next_position = reading.position.towards(objective).truncate_to(speed).relative_to(reading.position)
        return cls(
            id=reading.id,
            position=reading.position,
            life=reading.life,
            attack_range=settings.enemy_attack_range,
            speed=speed,
            objective=objective,
            turns_before_capture=turns,
            next_position=next_position,
        )

    def nearly_in_range_of(self, point: Vector2) -> bool:
        return self.next_position.distance_to(point) <= self.attack_range

    def at_point_blank_of(self, hunter: HunterAgent) -> bool:
        """Whether two hunter steps close in without exposure on the first.

        The hunter first steps toward this threat's current position, then
        toward its predicted position. The threat is point-blank when the first
        step stays out of its reach and the second step lands inside it.
        """
        hunter_next = hunter.next_position_towards(self.position)
        hunter_next_next = (
            hunter_next.towards(self.next_position)
            .truncate_to(hunter.speed)
            .relative_to(hunter_next)
        )
        return not self.nearly_in_range_of(hunter_next) and self.nearly_in_range_of(hunter_next_next)


def build_threats(
    enemies: Iterable[EnemyView],
    data_points: Sequence[Vector2],
    settings: EngineSettings,
) -> list[ThreatModel]:
    return [ThreatModel.from_reading(enemy, data_points, settings) for enemy in enemies]


@dataclass(slots=True, frozen=True)
class EvasionPlan:
    destination: Vector2
    danger_ids: tuple[int, ...]
    iterations: int
    converged: bool


@dataclass(slots=True, frozen=True)
class HunterAgent:
    position: Vector2
    speed: float
    settings: EngineSettings

    @classmethod
    def at(cls, position: Vector2, settings: EngineSettings) -> HunterAgent:
        return cls(position=position, speed=settings.hunter_speed, settings=settings)

    def damage_dealt(self, distance: float) -> float:
        if distance <= 0:
            return inf
        return self.settings.damage_constant / distance ** self.settings.damage_exponent

    def distance_to(self, point: Vector2) -> float:
        return self.position.distance_to(point)

    def next_position_towards(self, point: Vector2) -> Vector2:
        return self.position.towards(point).truncate_to(self.speed).relative_to(self.position)

    def _escape_from(self, danger: Iterable[ThreatModel]) -> Vector2:
        return (
            self.position.towards(*(threat.position for threat in danger))
            .negate()
            .truncate_to(self.speed)
            .relative_to(self.position)
            .clamp(self.settings.arena_low, self.settings.arena_high)
        )

    def plan_evasion(self, threats: Sequence[ThreatModel]) -> EvasionPlan:
        destination = self.position
        danger: dict[int, ThreatModel] = {}
        lethal = [threat for threat in threats if threat.nearly_in_range_of(destination)]
        best: tuple[int, Vector2] | None = None
        iterations = 0

        while lethal:
            if iterations >= self.settings.max_evasion_iterations:
                logger.warning(
                    "Evasion hit the %d iteration cap with %d threat(s) still lethal",
                    self.settings.max_evasion_iterations,
                    len(lethal),
                )
                break

            grew = False
            for threat in lethal:
                if threat.id not in danger:
                    danger[threat.id] = threat
                    grew = True
            if not grew:
                # Same danger set means the same destination on every further pass.
                logger.warning(
                    "Evasion reached a fixed point at %s with threats %s still lethal",
                    destination,
                    ", ".join(str(threat.id) for threat in lethal),
                )
                break

            destination = self._escape_from(danger.values())
            iterations += 1
            lethal = [threat for threat in threats if threat.nearly_in_range_of(destination)]
            logger.debug(
                "Escaping %s to %s, still lethal: %s",
                ", ".join(str(threat_id) for threat_id in danger) or "none",
                destination,
                ", ".join(str(threat.id) for threat in lethal) or "none",
            )
            if best is None or len(lethal) < best[0]:
                best = (len(lethal), destination)

        if lethal and best is not None:
            destination = best[1]
        return EvasionPlan(
            destination=destination,
            danger_ids=tuple(danger),
            iterations=iterations,
            converged=not lethal,
        )

    def safety_from(self, threats: Sequence[ThreatModel]) -> Vector2:
        return self.plan_evasion(threats).destination

    def plan_attack(self, target: ThreatModel, threats: Sequence[ThreatModel]) -> Action:
        shots_now = self.damage_dealt(self.distance_to(target.position))

        next_if_move = self.next_position_towards(target.position)
        distance_next_turn = next_if_move.distance_to(target.next_position)
        shots_next_turn = self.damage_dealt(distance_next_turn)
        logger.debug(
            "Target %d: damage now=%.2f next=%.2f turns left=%d",
            target.id,
            shots_now,
            shots_next_turn,
            target.turns_before_capture,
        )

        if shots_next_turn >= target.turns_before_capture:
            return ShootAction(target.id)

        if any(threat.nearly_in_range_of(next_if_move) for threat in threats):
            return ShootAction(target.id)

        destination = self.position.towards(target.position).relative_to(self.position)
        return MoveAction(destination.clamp(self.settings.arena_low, self.settings.arena_high))
