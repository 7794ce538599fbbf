from __future__ import annotations

import pytest

from accountant.controller import (
    REASON_ATTACK,
    REASON_EVADE,
    REASON_POINT_BLANK,
    DecisionError,
    TurnDecisionController,
    min_by,
)
from accountant.geometry import Vector2
from accountant.strategies.types import MoveAction, ShootAction

from .helpers import make_state


def test_lethal_threat_triggers_evasion():
    state = make_state((8000, 4500), [(12000, 4500)], [(0, 9000, 4500, 10)])
    decision = TurnDecisionController().decide(state)
    assert decision.reason == REASON_EVADE
    assert decision.action == MoveAction(Vector2(7000, 4500))
    assert decision.target_id is None


def test_point_blank_threat_is_shot():
    state = make_state((5000, 5000), [(12000, 5000)], [(3, 8000, 5000, 10)])
    decision = TurnDecisionController().decide(state)
    assert decision.reason == REASON_POINT_BLANK
    assert decision.action == ShootAction(3)
    assert decision.target_id == 3


def test_point_blank_picks_nearest_threat():
    state = make_state(
        (5000, 5000),
        [(12000, 5000), (5000, 0)],
        [(5, 5000, 1900, 10), (4, 8000, 5000, 10)],
    )
    decision = TurnDecisionController().decide(state)
    assert decision.reason == REASON_POINT_BLANK
    assert decision.action == ShootAction(4)


def test_point_blank_ties_go_to_first_seen():
    state = make_state(
        (5000, 5000),
        [(12000, 5000), (0, 5000)],
        [(9, 2000, 5000, 10), (4, 8000, 5000, 10)],
    )
    decision = TurnDecisionController().decide(state)
    assert decision.reason == REASON_POINT_BLANK
    assert decision.action == ShootAction(9)


def test_falls_through_to_most_urgent_target():
    state = make_state(
        (1000, 1000),
        [(15000, 8000)],
        [(0, 12000, 8000, 10), (1, 14000, 8000, 10)],
    )
    decision = TurnDecisionController().decide(state)
    assert decision.reason == REASON_ATTACK
    assert decision.target_id == 1
    assert decision.action == MoveAction(Vector2(14000, 8000))


def test_most_urgent_target_ties_go_to_first_seen():
    state = make_state(
        (1000, 1000),
        [(15000, 8000), (15000, 1000)],
        [(6, 14000, 1000, 10), (2, 14000, 8000, 10)],
    )
    decision = TurnDecisionController().decide(state)
    assert decision.reason == REASON_ATTACK
    assert decision.target_id == 6


def test_evasion_takes_priority_over_point_blank():
    state = make_state(
        (8000, 4500),
        [(12000, 4500), (12000, 8000)],
        [(0, 9000, 4500, 10), (1, 10500, 7000, 10)],
    )
    decision = TurnDecisionController().decide(state)
    assert decision.reason == REASON_EVADE
    assert isinstance(decision.action, MoveAction)


def test_no_enemies_is_an_explicit_failure():
    state = make_state((0, 0), [(10, 10)], [])
    with pytest.raises(DecisionError):
        TurnDecisionController().decide(state)


def test_no_data_points_is_an_explicit_failure():
    state = make_state((0, 0), [], [(0, 5000, 5000, 3)])
    with pytest.raises(DecisionError):
        TurnDecisionController().decide(state)


def test_min_by_keeps_first_on_ties():
    items = [("a", 3), ("b", 1), ("c", 1)]
    assert min_by(items, key=lambda item: item[1]) == ("b", 1)
    with pytest.raises(ValueError):
        min_by([], key=lambda item: item)
