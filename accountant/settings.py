"""Engine constants bundled into an explicit settings value."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass

from . import config
from .geometry import Vector2


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class EngineSettings:
    arena_width: int = config.ARENA_WIDTH
    arena_height: int = config.ARENA_HEIGHT
    hunter_speed: int = config.HUNTER_SPEED
    enemy_speed: int = config.ENEMY_SPEED
    enemy_attack_range: int = config.ENEMY_ATTACK_RANGE
    damage_constant: float = config.DAMAGE_CONSTANT
    damage_exponent: float = config.DAMAGE_EXPONENT
    max_evasion_iterations: int = config.MAX_EVASION_ITERATIONS

    @property
    def arena_low(self) -> Vector2:
        return Vector2(0, 0)

    @property
    def arena_high(self) -> Vector2:
        return Vector2(self.arena_width, self.arena_height)

    def as_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_env(cls) -> EngineSettings:
        defaults = cls()
        return cls(
            arena_width=max(1, _env_int("ACCOUNTANT_ARENA_WIDTH", defaults.arena_width)),
            arena_height=max(1, _env_int("ACCOUNTANT_ARENA_HEIGHT", defaults.arena_height)),
            hunter_speed=max(1, _env_int("ACCOUNTANT_HUNTER_SPEED", defaults.hunter_speed)),
            enemy_speed=max(1, _env_int("ACCOUNTANT_ENEMY_SPEED", defaults.enemy_speed)),
            enemy_attack_range=max(
                0,
                _env_int("ACCOUNTANT_ENEMY_ATTACK_RANGE", defaults.enemy_attack_range),
            ),
            damage_constant=max(1.0, _env_float("ACCOUNTANT_DAMAGE_CONSTANT", defaults.damage_constant)),
            damage_exponent=max(0.1, _env_float("ACCOUNTANT_DAMAGE_EXPONENT", defaults.damage_exponent)),
            max_evasion_iterations=max(
                1,
                _env_int("ACCOUNTANT_MAX_EVASION_ITERATIONS", defaults.max_evasion_iterations),
            ),
        )
