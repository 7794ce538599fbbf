"""Strategy plugin registry and dynamic loader."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Sequence

from .. import config
from .types import Strategy, StrategyInitContext

logger = logging.getLogger(__name__)

StrategyFactory = Callable[[StrategyInitContext], Strategy]


def _normalize(name: str | None) -> str:
    return (name or "").strip().lower()


class StrategyRegistry:
    def __init__(self) -> None:
        self._factories: dict[str, StrategyFactory] = {}
        self._aliases: dict[str, str] = {}

    @property
    def names(self) -> tuple[str, ...]:
        """Every name ``create`` accepts, aliases included."""
        return tuple(sorted({*self._factories, *self._aliases}))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def resolve(self, name: str | None) -> str | None:
        key = _normalize(name)
        key = self._aliases.get(key, key)
        return key if key in self._factories else None

    def _claim(self, name: str) -> str:
        key = _normalize(name)
        if not key:
            raise ValueError("Strategy name cannot be empty")
        if key in self._factories or key in self._aliases:
            raise ValueError(f"Duplicate strategy registration: {key}")
        return key

    def register(self, name: str, factory: StrategyFactory) -> None:
        self._factories[self._claim(name)] = factory

    def alias(self, name: str, target: str) -> None:
        resolved = self.resolve(target)
        if resolved is None:
            raise ValueError(f"Cannot alias '{name}' to unregistered strategy '{target}'")
        self._aliases[self._claim(name)] = resolved

    def create(self, name: str, init_ctx: StrategyInitContext) -> Strategy:
        key = self.resolve(name)
        if key is None:
            available = ", ".join(self.names) or "<none>"
            raise ValueError(f"Unknown strategy '{_normalize(name)}'. Available: {available}")
        return self._factories[key](init_ctx)


def load_strategy_modules(module_names: Sequence[str], registry: StrategyRegistry) -> None:
    for raw_name in module_names:
        module_name = raw_name.strip()
        if not module_name:
            continue
        module = importlib.import_module(module_name)
        register = getattr(module, "register", None)
        if not callable(register):
            raise ValueError(f"Strategy module '{module_name}' has no register(registry) function")
        before = len(registry.names)
        register(registry)
        logger.debug("Loaded %d strategies from %s", len(registry.names) - before, module_name)


def default_registry(module_names: Sequence[str] | None = None) -> StrategyRegistry:
    registry = StrategyRegistry()
    load_strategy_modules(config.STRATEGY_MODULES if module_names is None else module_names, registry)
    return registry
