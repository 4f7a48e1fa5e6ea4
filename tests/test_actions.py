"""Tests for the action/condition/effect engine."""

from escape_room.engine.actions import contains, try_fire_actions
from escape_room.engine.state import GameState, new_game_state
from escape_room.engine.world import (
    Action,
    ActionCondition,
    ActionEffect,
    ActionTrigger,
    Item,
    Room,
    World,
)


def _world_with_actions(*actions: Action) -> World:
    return World(
        rooms=[Room(id="cell", name="Cell", items=["rope"])],
        items=[Item(id="rope", name="rope"), Item(id="hook", name="hook")],
        actions=list(actions),
    )


def test_examine_desk_fires_once(world: World, state: GameState):
    """A one-time action reveals its item once and then stays quiet."""
    assert world.get_item("desk_drawer").hidden

    assert try_fire_actions(world, state, "examine", "desk", "")
    assert not world.get_item("desk_drawer").hidden
    assert "desk_drawer" in state.discovered_items
    assert "examine_desk" in state.performed_actions
    assert state.last_result.startswith("You rummage through the desk")

    world.hide_item("desk_drawer")
    state.last_result = ""
    assert not try_fire_actions(world, state, "examine", "desk", "")
    assert world.get_item("desk_drawer").hidden
    assert state.last_result == ""


def test_target_matching_is_containment(world: World, state: GameState):
    """Trigger targets match anywhere in the typed text."""
    assert try_fire_actions(world, state, "examine", "desk drawer", "")


def test_trigger_type_must_match(world: World, state: GameState):
    """Actions only answer their own trigger type."""
    assert not try_fire_actions(world, state, "take", "desk", "")
    assert world.get_item("desk_drawer").hidden


def test_contains():
    """Containment ignores case and folds underscores."""
    assert contains("Desk Drawer", "desk")
    assert contains("letter opener", "letter_opener")
    assert not contains("letter", "letter_opener")
    # Loose matching has false positives.
    assert contains("monkey", "key")


def test_with_item_required(world: World, state: GameState):
    """A use_with trigger needs its second item."""
    state.add_item("letter_opener")
    assert not try_fire_actions(world, state, "use_with", "letter opener", "")
    assert try_fire_actions(world, state, "use_with", "letter opener", "the painting")
    assert state.has_item("solved_puzzles")


def test_conditions_all_required(world: World, state: GameState):
    """solve_clock needs the journal and the painting puzzle solved."""
    state.add_item("loose_book")
    assert not try_fire_actions(world, state, "use_with", "compass", "clock")
    assert world.get_room("hidden_passage").locked

    state.solved_puzzles.add("painting_puzzle")
    assert try_fire_actions(world, state, "use_with", "compass", "clock")
    assert not world.get_room("hidden_passage").locked


def test_in_room_and_action_performed_conditions():
    """in_room and action_performed conditions gate an action."""
    gated = Action(
        id="gated",
        trigger=ActionTrigger(type="use", target="rope"),
        conditions=[
            ActionCondition(type="in_room", value="cell"),
            ActionCondition(type="action_performed", value="first"),
        ],
        effects=[ActionEffect(type="add_inventory", target="hook")],
    )
    first = Action(
        id="first",
        trigger=ActionTrigger(type="examine", target="rope"),
        one_time_only=True,
    )
    world = _world_with_actions(gated, first)
    state = new_game_state(world)

    assert not try_fire_actions(world, state, "use", "rope")
    assert try_fire_actions(world, state, "examine", "rope")
    assert try_fire_actions(world, state, "use", "rope")
    assert state.has_item("hook")

    state.current_room = "elsewhere"
    state.remove_item("hook")
    assert not try_fire_actions(world, state, "use", "rope")


def test_repeatable_action_refires():
    """Actions that aren't one-time fire every time."""
    action = Action(
        id="tug",
        trigger=ActionTrigger(type="use", target="rope"),
        effects=[ActionEffect(type="add_inventory", target="hook")],
        message="You tug the rope.",
    )
    world = _world_with_actions(action)
    state = new_game_state(world)

    assert try_fire_actions(world, state, "use", "rope")
    assert try_fire_actions(world, state, "use", "rope")
    assert state.inventory == ["hook"]
    assert state.performed_actions == set()


def test_all_matching_actions_fire():
    """Every matching action fires; the last message wins."""
    world = _world_with_actions(
        Action(
            id="one",
            trigger=ActionTrigger(type="examine", target="rope"),
            effects=[ActionEffect(type="add_inventory", target="rope")],
            message="First.",
        ),
        Action(
            id="two",
            trigger=ActionTrigger(type="examine", target="rope"),
            effects=[ActionEffect(type="add_inventory", target="hook")],
            message="Second.",
        ),
    )
    state = new_game_state(world)

    assert try_fire_actions(world, state, "examine", "rope")
    assert state.inventory == ["rope", "hook"]
    assert state.last_result == "Second."


def test_effects_apply_in_order():
    """Effects apply in declared order."""
    world = _world_with_actions(
        Action(
            id="swap",
            trigger=ActionTrigger(type="use", target="rope"),
            effects=[
                ActionEffect(type="remove_inventory", target="rope"),
                ActionEffect(type="hide_item", target="rope"),
                ActionEffect(type="add_inventory", target="hook"),
                ActionEffect(type="reveal_item", target="hook"),
            ],
        )
    )
    state = new_game_state(world)
    state.inventory = ["rope", "hook"]
    world.hide_item("hook")

    assert try_fire_actions(world, state, "use", "rope")
    assert state.inventory == ["hook"]
    assert world.get_item("rope").hidden
    assert not world.get_item("hook").hidden


def test_empty_message_keeps_previous_result():
    """An action without a message leaves the result alone."""
    world = _world_with_actions(
        Action(id="silent", trigger=ActionTrigger(type="examine", target="rope"))
    )
    state = new_game_state(world)
    state.last_result = "Before."
    assert try_fire_actions(world, state, "examine", "rope")
    assert state.last_result == "Before."


def test_dangling_effect_targets_are_ignored():
    """Effects on missing ids do nothing."""
    world = _world_with_actions(
        Action(
            id="ghosts",
            trigger=ActionTrigger(type="examine", target="rope"),
            effects=[
                ActionEffect(type="reveal_item", target="ghost"),
                ActionEffect(type="unlock_room", target="nowhere"),
                ActionEffect(type="remove_inventory", target="ghost"),
                ActionEffect(type="teleport", target="moon"),
            ],
            message="Nothing much.",
        )
    )
    state = new_game_state(world)
    assert try_fire_actions(world, state, "examine", "rope")
    assert state.last_result == "Nothing much."
    assert state.discovered_items == set()
