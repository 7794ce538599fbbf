from __future__ import annotations

import dataclasses
import math

import pytest

from accountant.geometry import ORIGIN, Vector2

SAMPLE_VECTORS = [
    Vector2(0, 0),
    Vector2(3, 4),
    Vector2(-3000, 4000),
    Vector2(1234.5, -987.25),
    Vector2(16000, 9000),
    Vector2(-0.5, 0.5),
]


def test_towards_without_points_is_zero():
    assert Vector2(3, 4).towards() == Vector2(0, 0)


def test_towards_examples_from_origin():
    assert ORIGIN.towards(Vector2(0, 0)) == Vector2(0, 0)
    assert ORIGIN.towards(Vector2(1, 1)) == Vector2(1, 1)
    assert ORIGIN.towards(Vector2(1, 1), Vector2(-1, 1)) == Vector2(0, 2)


def test_towards_sums_instead_of_averaging():
    here = Vector2(100, -50)
    a = Vector2(700, 20)
    b = Vector2(-300, 900)
    assert here.towards(a, b) == here.towards(a).add(here.towards(b))
    assert here.towards(a, a) == here.towards(a).scale(2)


def test_truncate_never_exceeds_limit():
    for vector in SAMPLE_VECTORS:
        for limit in (0, 1, 5, 500, 1000, 20000):
            truncated = vector.truncate_to(limit)
            assert truncated.length() <= limit + math.sqrt(2)
            if vector.length() <= limit:
                assert truncated == vector.floor()


def test_truncate_scales_down_then_floors():
    assert Vector2(3000, 4000).truncate_to(1000) == Vector2(600, 800)
    assert Vector2(-3000, -4000).truncate_to(1000) == Vector2(-600, -800)
    assert Vector2(1000, 1000).truncate_to(500) == Vector2(353, 353)


def test_truncate_zero_vector_stays_zero():
    assert Vector2(0, 0).truncate_to(500) == Vector2(0, 0)
    assert Vector2(0, 0).truncate_to(0) == Vector2(0, 0)


def test_truncate_rejects_negative_limit():
    with pytest.raises(ValueError):
        Vector2(1, 1).truncate_to(-1)


def test_clamp_keeps_components_in_bounds():
    low = Vector2(0, 0)
    high = Vector2(16000, 9000)
    for vector in SAMPLE_VECTORS + [Vector2(-5, 20000), Vector2(17000, -1)]:
        clamped = vector.clamp(low, high)
        assert low.x <= clamped.x <= high.x
        assert low.y <= clamped.y <= high.y
    assert Vector2(-5, 20000).clamp(low, high) == Vector2(0, 9000)
    assert Vector2(50, 60).clamp(low, high) == Vector2(50, 60)


def test_componentwise_operations():
    a = Vector2(1, 8)
    b = Vector2(4, -2)
    assert a.add(b) == Vector2(5, 6)
    assert a.sub(b) == Vector2(-3, 10)
    assert a.negate() == Vector2(-1, -8)
    assert a.scale(0.5) == Vector2(0.5, 4)
    assert a.component_min(b) == Vector2(1, -2)
    assert a.component_max(b) == Vector2(4, 8)
    assert Vector2(1.7, -1.2).floor() == Vector2(1, -2)
    assert a.relative_to(b) == a + b
    assert -a == a.negate()
    assert a - b == a.sub(b)


def test_length_and_distance():
    assert Vector2(3, 4).length() == 5
    assert ORIGIN.distance_to(Vector2(3, 4)) == 5
    assert Vector2(3, 4).distance_to(ORIGIN) == 5


def test_operations_do_not_mutate_inputs():
    a = Vector2(10, 20)
    b = Vector2(-5, 5)
    a.add(b).scale(3).truncate_to(1).clamp(ORIGIN, b)
    assert a == Vector2(10, 20)
    assert b == Vector2(-5, 5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.x = 3  # type: ignore[misc]


def test_str_and_int_tuple():
    assert str(Vector2(3, 4)) == "3 4"
    assert Vector2(12.9, -0.5).as_int_tuple() == (12, -1)
