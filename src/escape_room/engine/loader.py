"""Decode and encode world documents.

A world document is JSON with the keys theme, setting, backstory, rooms,
items, puzzles, actions, win_condition, hints and progressive_hints. The
same format is used for documents stored on disk and for scenarios produced
by the generator, so decoding is forgiving about missing or null fields and
strict only about the overall shape.
"""

import json
from collections.abc import Callable
from typing import Any

from ..errors import WorldFormatError
from ..logging import get_logger
from .world import (
    ACTION_PERFORMED,
    ADD_INVENTORY,
    COMMANDS_TRIED,
    EXAMINE,
    FAILED_ATTEMPTS,
    HAS_ITEM,
    HIDE_ITEM,
    IN_ROOM,
    PUZZLE_SOLVED,
    REMOVE_INVENTORY,
    REVEAL_ITEM,
    TAKE,
    TIME_SPENT,
    UNLOCK_ROOM,
    USE,
    USE_WITH,
    Action,
    ActionCondition,
    ActionEffect,
    ActionTrigger,
    HintTrigger,
    Item,
    ProgressiveHint,
    Puzzle,
    Room,
    World,
)

logger = get_logger(__name__)

TRIGGER_TYPES = {EXAMINE, TAKE, USE, USE_WITH}
CONDITION_TYPES = {HAS_ITEM, IN_ROOM, PUZZLE_SOLVED, ACTION_PERFORMED}
EFFECT_TYPES = {REVEAL_ITEM, HIDE_ITEM, UNLOCK_ROOM, ADD_INVENTORY, REMOVE_INVENTORY}
HINT_TRIGGER_TYPES = {FAILED_ATTEMPTS, TIME_SPENT, COMMANDS_TRIED}


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_str(value: Any) -> str | None:
    return str(value) if value else None


def _bool(value: Any) -> bool:
    """JSON booleans, plus the strings generators sometimes write instead."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


def _str_list(value: Any) -> list[str]:
    if not value:
        return []
    if not isinstance(value, list):
        raise WorldFormatError(f"expected a list, got {type(value).__name__}")
    return [str(v) for v in value]


def _records(data: dict, key: str) -> list[dict]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise WorldFormatError(f"'{key}' must be a list of objects")
    return value


def _parse_room(raw: dict) -> Room:
    return Room(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        description=_str(raw.get("description")),
        items=_str_list(raw.get("items")),
        puzzles=_str_list(raw.get("puzzles")),
        exits=_str_list(raw.get("exits")),
        locked=_bool(raw.get("locked")),
        unlock_key=_optional_str(raw.get("unlock_key")),
    )


def _parse_item(raw: dict) -> Item:
    return Item(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        description=_str(raw.get("description")),
        usable=_bool(raw.get("usable")),
        use_with=_optional_str(raw.get("use_with")),
        hidden=_bool(raw.get("hidden")),
        revealed_by=_optional_str(raw.get("revealed_by")),
    )


def _parse_puzzle(raw: dict) -> Puzzle:
    return Puzzle(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        description=_str(raw.get("description")),
        solution=_str(raw.get("solution")),
        required_items=_str_list(raw.get("required_items")),
        reward=_str(raw.get("reward")),
        solved=_bool(raw.get("solved")),
    )


def _parse_action(raw: dict) -> Action:
    trigger = raw.get("trigger") or {}
    if not isinstance(trigger, dict):
        raise WorldFormatError("action trigger must be an object")
    return Action(
        id=_str(raw.get("id")),
        trigger=ActionTrigger(
            type=_str(trigger.get("type")),
            target=_str(trigger.get("target")),
            with_=_str(trigger.get("with")),
        ),
        conditions=[
            ActionCondition(type=_str(c.get("type")), value=_str(c.get("value")))
            for c in _records(raw, "conditions")
        ],
        effects=[
            ActionEffect(
                type=_str(e.get("type")),
                target=_str(e.get("target")),
                value=_str(e.get("value")),
            )
            for e in _records(raw, "effects")
        ],
        message=_str(raw.get("message")),
        one_time_only=_bool(raw.get("one_time_only")),
    )


def _parse_progressive_hint(raw: dict) -> ProgressiveHint:
    try:
        triggers = [
            HintTrigger(type=_str(t.get("type")), threshold=int(t.get("threshold") or 0))
            for t in _records(raw, "triggers")
        ]
    except (TypeError, ValueError) as e:
        raise WorldFormatError(f"bad hint threshold: {e}") from e
    return ProgressiveHint(
        context=_str(raw.get("context")),
        triggers=triggers,
        hint_text=_str(raw.get("hint_text")),
        priority=int(raw.get("priority") or 0),
    )


def _parse_section(data: dict, key: str, parse: Callable[[dict], Any]) -> list:
    return [parse(raw) for raw in _records(data, key)]


def world_from_dict(data: Any) -> World:
    """Build a World from a decoded JSON document."""
    if not isinstance(data, dict):
        raise WorldFormatError("world document must be a JSON object")

    hints = data.get("hints") or {}
    if not isinstance(hints, dict):
        raise WorldFormatError("'hints' must be an object")

    try:
        world = World(
            theme=_str(data.get("theme")),
            setting=_str(data.get("setting")),
            backstory=_str(data.get("backstory")),
            win_condition=_str(data.get("win_condition")),
            rooms=_parse_section(data, "rooms", _parse_room),
            items=_parse_section(data, "items", _parse_item),
            puzzles=_parse_section(data, "puzzles", _parse_puzzle),
            actions=_parse_section(data, "actions", _parse_action),
            hints={str(k): _str(v) for k, v in hints.items()},
            progressive_hints=_parse_section(
                data, "progressive_hints", _parse_progressive_hint
            ),
        )
    except (TypeError, ValueError) as e:
        raise WorldFormatError(f"malformed world document: {e}") from e

    if not world.rooms:
        raise WorldFormatError("world document has no rooms")

    for problem in validate_world(world):
        logger.warning("world_reference_problem", problem=problem)
    return world


def world_from_json(document: bytes | str) -> World:
    """Decode a serialized world document."""
    try:
        data = json.loads(document)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise WorldFormatError(f"invalid JSON: {e}") from e
    return world_from_dict(data)


def _room_to_dict(room: Room) -> dict:
    data = {
        "id": room.id,
        "name": room.name,
        "description": room.description,
        "items": room.items,
        "puzzles": room.puzzles,
        "exits": room.exits,
        "locked": room.locked,
    }
    if room.unlock_key:
        data["unlock_key"] = room.unlock_key
    return data


def _item_to_dict(item: Item) -> dict:
    data = {
        "id": item.id,
        "name": item.name,
        "description": item.description,
        "usable": item.usable,
        "hidden": item.hidden,
    }
    if item.use_with:
        data["use_with"] = item.use_with
    if item.revealed_by:
        data["revealed_by"] = item.revealed_by
    return data


def _action_to_dict(action: Action) -> dict:
    trigger = {"type": action.trigger.type, "target": action.trigger.target}
    if action.trigger.with_:
        trigger["with"] = action.trigger.with_
    effects = []
    for effect in action.effects:
        entry = {"type": effect.type, "target": effect.target}
        if effect.value:
            entry["value"] = effect.value
        effects.append(entry)
    return {
        "id": action.id,
        "trigger": trigger,
        "conditions": [{"type": c.type, "value": c.value} for c in action.conditions],
        "effects": effects,
        "message": action.message,
        "one_time_only": action.one_time_only,
    }


def world_to_dict(world: World) -> dict:
    return {
        "theme": world.theme,
        "setting": world.setting,
        "backstory": world.backstory,
        "rooms": [_room_to_dict(room) for room in world.rooms],
        "items": [_item_to_dict(item) for item in world.items],
        "puzzles": [
            {
                "id": p.id,
                "name": p.name,
                "description": p.description,
                "solution": p.solution,
                "required_items": p.required_items,
                "reward": p.reward,
                "solved": p.solved,
            }
            for p in world.puzzles
        ],
        "actions": [_action_to_dict(action) for action in world.actions],
        "win_condition": world.win_condition,
        "hints": dict(world.hints),
        "progressive_hints": [
            {
                "context": h.context,
                "triggers": [
                    {"type": t.type, "threshold": t.threshold} for t in h.triggers
                ],
                "hint_text": h.hint_text,
                "priority": h.priority,
            }
            for h in world.progressive_hints
        ],
    }


def world_to_json(world: World) -> bytes:
    """Serialize a world document."""
    return json.dumps(world_to_dict(world), indent=2).encode("utf-8")


def is_current_format(world: World) -> bool:
    """Documents without actions or progressive hints predate the action system."""
    return bool(world.actions) and bool(world.progressive_hints)


def validate_world(world: World) -> list[str]:
    """Describe dangling references and unknown types. Nothing here is fatal."""
    problems = []
    for room in world.rooms:
        for item_id in room.items:
            if world.get_item(item_id) is None:
                problems.append(f"room {room.id} lists unknown item {item_id}")
        for puzzle_id in room.puzzles:
            if world.get_puzzle(puzzle_id) is None:
                problems.append(f"room {room.id} lists unknown puzzle {puzzle_id}")
        for exit_id in room.exits:
            if world.get_room(exit_id) is None:
                problems.append(f"room {room.id} exits to unknown room {exit_id}")

    for action in world.actions:
        if action.trigger.type not in TRIGGER_TYPES:
            problems.append(f"action {action.id} has unknown trigger {action.trigger.type}")
        for condition in action.conditions:
            if condition.type not in CONDITION_TYPES:
                problems.append(f"action {action.id} has unknown condition {condition.type}")
        for effect in action.effects:
            if effect.type not in EFFECT_TYPES:
                problems.append(f"action {action.id} has unknown effect {effect.type}")

    for hint in world.progressive_hints:
        for trigger in hint.triggers:
            if trigger.type not in HINT_TRIGGER_TYPES:
                problems.append(f"hint for {hint.context} has unknown trigger {trigger.type}")
    return problems
