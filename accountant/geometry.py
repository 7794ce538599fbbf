"""Immutable 2D vector used for every position and displacement."""

from __future__ import annotations

from dataclasses import dataclass
from math import floor, hypot


@dataclass(frozen=True, slots=True)
class Vector2:
    """A point or displacement in arena units.

    Every operation returns a new value. ``towards`` sums displacements rather
    than averaging them, so several threats combine into a stronger pull.
    """

    x: float
    y: float

    def add(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def negate(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def scale(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    def component_min(self, other: Vector2) -> Vector2:
        return Vector2(min(self.x, other.x), min(self.y, other.y))

    def component_max(self, other: Vector2) -> Vector2:
        return Vector2(max(self.x, other.x), max(self.y, other.y))

    def floor(self) -> Vector2:
        return Vector2(floor(self.x), floor(self.y))

    def length(self) -> float:
        return hypot(self.x, self.y)

    def distance_to(self, other: Vector2) -> float:
        return other.sub(self).length()

    def towards(self, *others: Vector2) -> Vector2:
        """Sum of the displacements from this point to each of ``others``.

        With no arguments the result is the zero vector.
        """
        total_x = 0.0
        total_y = 0.0
        for other in others:
            total_x += other.x - self.x
            total_y += other.y - self.y
        return Vector2(total_x, total_y)

    def truncate_to(self, max_length: float) -> Vector2:
        """Shrink to at most ``max_length`` (never grow), then floor.

        A zero-length vector stays the zero vector.
        """
        if max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {max_length}")
        length = self.length()
        if length <= 1e-9:
            return Vector2(0, 0)
        ratio = min(max_length / length, 1.0)
        return self.scale(ratio).floor()

    def clamp(self, low: Vector2, high: Vector2) -> Vector2:
        return self.component_max(low).component_min(high)

    def relative_to(self, origin: Vector2) -> Vector2:
        return self.add(origin)

    def as_int_tuple(self) -> tuple[int, int]:
        return (int(floor(self.x)), int(floor(self.y)))

    def __add__(self, other: Vector2) -> Vector2:
        return self.add(other)

    def __sub__(self, other: Vector2) -> Vector2:
        return self.sub(other)

    def __neg__(self) -> Vector2:
        return self.negate()

    def __mul__(self, factor: float) -> Vector2:
        return self.scale(factor)

    def __str__(self) -> str:
        return f"{self.x} {self.y}"


ORIGIN = Vector2(0, 0)
