"""Turn feed parsing and command formatting."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .geometry import Vector2
from .strategies.types import Action, DataPointView, EnemyView, MoveAction, ShootAction, TurnState


class ProtocolError(ValueError):
    """Raised when a turn record is missing or malformed."""


def _ints(line: str, expected: int, what: str) -> list[int]:
    parts = line.split()
    if len(parts) != expected:
        raise ProtocolError(f"Expected {expected} integers for {what}, got {line.strip()!r}")
    try:
        return [int(part) for part in parts]
    except ValueError as exc:
        raise ProtocolError(f"Non-integer value in {what}: {line.strip()!r}") from exc


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise ProtocolError(f"Unexpected end of input while reading {what}") from None


def _count(lines: Iterator[str], what: str) -> int:
    (count,) = _ints(_next_line(lines, f"{what} count"), 1, f"{what} count")
    if count < 0:
        raise ProtocolError(f"Negative {what} count: {count}")
    return count


def read_turn(lines: Iterator[str]) -> TurnState | None:
    """Consume one turn from ``lines``; ``None`` on a clean end of input."""
    first = next(lines, None)
    while first is not None and not first.strip():
        first = next(lines, None)
    if first is None:
        return None

    hx, hy = _ints(first, 2, "hunter position")

    data_points: list[DataPointView] = []
    for _ in range(_count(lines, "data point")):
        point_id, x, y = _ints(_next_line(lines, "data point"), 3, "data point")
        data_points.append(DataPointView(id=point_id, position=Vector2(x, y)))

    enemies: list[EnemyView] = []
    for _ in range(_count(lines, "enemy")):
        enemy_id, x, y, life = _ints(_next_line(lines, "enemy"), 4, "enemy")
        enemies.append(EnemyView(id=enemy_id, position=Vector2(x, y), life=life))

    return TurnState(hunter=Vector2(hx, hy), data_points=tuple(data_points), enemies=tuple(enemies))


def parse_turn(text: str) -> TurnState:
    state = read_turn(iter(text.splitlines()))
    if state is None:
        raise ProtocolError("Empty turn input")
    return state


def format_turn(state: TurnState) -> str:
    hx, hy = state.hunter.as_int_tuple()
    lines = [f"{hx} {hy}", str(len(state.data_points))]
    for point in state.data_points:
        x, y = point.position.as_int_tuple()
        lines.append(f"{point.id} {x} {y}")
    lines.append(str(len(state.enemies)))
    for enemy in state.enemies:
        x, y = enemy.position.as_int_tuple()
        lines.append(f"{enemy.id} {x} {y} {enemy.life}")
    return "\n".join(lines)


def format_action(action: Action) -> str:
    if isinstance(action, MoveAction):
        x, y = action.destination.as_int_tuple()
        return f"MOVE {x} {y}"
    if isinstance(action, ShootAction):
        return f"SHOOT {action.target_id}"
    raise TypeError(f"Unsupported action: {action!r}")


def _int_field(record: dict, key: str, what: str) -> int:
    value = record.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProtocolError(f"Field '{key}' of {what} must be a number, got {value!r}")
    return int(value)


def _records(payload: dict, key: str) -> Iterable[dict]:
    records = payload.get(key) or []
    if not isinstance(records, list) or not all(isinstance(item, dict) for item in records):
        raise ProtocolError(f"Field '{key}' must be a list of objects")
    return records


def turn_from_payload(payload: dict) -> TurnState:
    if not isinstance(payload, dict):
        raise ProtocolError("Turn payload must be an object")
    hunter = payload.get("hunter")
    if not isinstance(hunter, dict):
        raise ProtocolError("Field 'hunter' must be an object with x and y")

    data_points = tuple(
        DataPointView(
            id=_int_field(item, "id", "data point"),
            position=Vector2(_int_field(item, "x", "data point"), _int_field(item, "y", "data point")),
        )
        for item in _records(payload, "dataPoints")
    )
    enemies = tuple(
        EnemyView(
            id=_int_field(item, "id", "enemy"),
            position=Vector2(_int_field(item, "x", "enemy"), _int_field(item, "y", "enemy")),
            life=_int_field(item, "life", "enemy"),
        )
        for item in _records(payload, "enemies")
    )
    return TurnState(
        hunter=Vector2(_int_field(hunter, "x", "hunter"), _int_field(hunter, "y", "hunter")),
        data_points=data_points,
        enemies=enemies,
    )


def turn_to_payload(state: TurnState) -> dict:
    hx, hy = state.hunter.as_int_tuple()
    return {
        "hunter": {"x": hx, "y": hy},
        "dataPoints": [
            {"id": point.id, "x": point.position.as_int_tuple()[0], "y": point.position.as_int_tuple()[1]}
            for point in state.data_points
        ],
        "enemies": [
            {
                "id": enemy.id,
                "x": enemy.position.as_int_tuple()[0],
                "y": enemy.position.as_int_tuple()[1],
                "life": enemy.life,
            }
            for enemy in state.enemies
        ],
    }


def action_to_payload(action: Action) -> dict:
    if isinstance(action, MoveAction):
        x, y = action.destination.as_int_tuple()
        return {"type": "move", "x": x, "y": y, "command": format_action(action)}
    if isinstance(action, ShootAction):
        return {"type": "shoot", "id": action.target_id, "command": format_action(action)}
    raise TypeError(f"Unsupported action: {action!r}")
