"""Declarative action engine: trigger → conditions → effects.

Matching is deliberately loose: a trigger fires when its declared target is
contained in what the player typed, so "examine desk drawer" fires a trigger
on "desk". This also means "key" matches "monkey".
"""

from ..logging import get_logger
from .state import GameState
from .world import Action, ActionCondition, ActionEffect, World

logger = get_logger(__name__)


def contains(text: str, needle: str) -> bool:
    """Case-insensitive containment. Ids with underscores also match spaced words."""
    text = text.lower()
    needle = needle.lower()
    if needle in text:
        return True
    return "_" in needle and needle.replace("_", " ") in text


def matches_trigger(action: Action, action_type: str, target: str, with_item: str) -> bool:
    trigger = action.trigger
    if trigger.type != action_type:
        return False
    if not contains(target, trigger.target):
        return False
    if trigger.with_ and not contains(with_item, trigger.with_):
        return False
    return True


def check_condition(state: GameState, condition: ActionCondition) -> bool:
    match condition.type:
        case "has_item":
            return state.has_item(condition.value)
        case "in_room":
            return state.current_room == condition.value
        case "puzzle_solved":
            return state.is_solved(condition.value)
        case "action_performed":
            return condition.value in state.performed_actions
        case _:
            return True


def check_conditions(state: GameState, conditions: list[ActionCondition]) -> bool:
    return all(check_condition(state, condition) for condition in conditions)


def apply_effect(world: World, state: GameState, effect: ActionEffect) -> None:
    match effect.type:
        case "reveal_item":
            if world.reveal_item(effect.target):
                state.discovered_items.add(effect.target)
        case "hide_item":
            world.hide_item(effect.target)
        case "unlock_room":
            world.unlock_room(effect.target)
        case "add_inventory":
            state.add_item(effect.target)
        case "remove_inventory":
            state.remove_item(effect.target)
        case _:
            logger.warning("unknown_effect_type", effect_type=effect.type)


def try_fire_actions(
    world: World,
    state: GameState,
    action_type: str,
    target: str,
    with_item: str = "",
) -> bool:
    """Fire every action matching this command. Returns True if any fired."""
    fired = False
    for action in world.actions:
        if action.one_time_only and action.id in state.performed_actions:
            continue
        if not matches_trigger(action, action_type, target, with_item):
            continue
        if not check_conditions(state, action.conditions):
            continue

        for effect in action.effects:
            apply_effect(world, state, effect)
        if action.message:
            state.last_result = action.message
        if action.one_time_only:
            state.performed_actions.add(action.id)

        logger.debug("action_fired", action_id=action.id, trigger=action_type)
        fired = True
    return fired
