"""Runtime tunables for the Accountant tactical engine."""

from __future__ import annotations

import os

ARENA_WIDTH = 16000
ARENA_HEIGHT = 9000

HUNTER_SPEED = 1000
ENEMY_SPEED = 500
ENEMY_ATTACK_RANGE = 2000

DAMAGE_CONSTANT = 125000.0
DAMAGE_EXPONENT = 1.2

MAX_EVASION_ITERATIONS = 32

SCORE_KILL = 10
SCORE_DATA_POINT = 100
SCORE_LIFE_BONUS = 3
SCORE_SHOT_PENALTY = 3

SCENARIO_MIN_DATA_POINTS = 1
SCENARIO_MAX_DATA_POINTS = 12
SCENARIO_MIN_ENEMIES = 1
SCENARIO_MAX_ENEMIES = 24
SCENARIO_MIN_ENEMY_LIFE = 4
SCENARIO_MAX_ENEMY_LIFE = 30
SCENARIO_SPAWN_ATTEMPTS = 200
SIMULATION_MAX_TURNS = 500


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_csv(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


STRATEGY_MODULES = _env_csv("ACCOUNTANT_STRATEGY_MODULES", "accountant.strategy_plugins.core")
DEFAULT_STRATEGY = os.getenv("ACCOUNTANT_STRATEGY", "tactical").strip().lower() or "tactical"
LOG_LEVEL = os.getenv("ACCOUNTANT_LOG_LEVEL", "INFO").strip().upper() or "INFO"
VERBOSE_TURNS = _env_bool("ACCOUNTANT_VERBOSE_TURNS", False)

SERVER_HOST = os.getenv("ACCOUNTANT_HOST", "127.0.0.1")
SERVER_PORT = max(1, _env_int("ACCOUNTANT_PORT", 8000))
