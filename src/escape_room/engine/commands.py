"""Command dispatch and handler functions.

handle_command(world, state, raw_input) -> str is the main entry point.
It interprets the input, dispatches to a handler per verb and lets the
action engine react to examine/take/use commands. Handlers mutate state in
place and return the text stored as state.last_result. Nothing in here
raises for bad input or dangling world references.
"""

import datetime as dt
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..logging import get_logger
from .actions import try_fire_actions
from .hints import check_win
from .parser import Command, interpret
from .state import GameState
from .world import EXAMINE, TAKE, USE, USE_WITH, Item, Room, World

logger = get_logger(__name__)

NOT_HERE = "You don't see that here."


@dataclass(frozen=True)
class Combination:
    """Outcome of a hard-wired item combination."""

    produces: str
    reveals: str
    message: str


# (primary item id, secondary item id) → outcome. Keep this small; scenario
# specific combinations belong in the world's actions.
SPECIAL_COMBINATIONS: dict[tuple[str, str], Combination] = {
    ("matches", "candle"): Combination(
        produces="lit_candle",
        reveals="use_matches",
        message=(
            "You light the candle with the matches. "
            "The room is now brightly illuminated!"
        ),
    ),
}


def handle_command(world: World, state: GameState, raw_input: str) -> str:
    """Process a command and return the response text."""
    command = interpret(raw_input)
    if not command.verb:
        state.last_result = "I beg your pardon?"
        return state.last_result

    state.moves += 1
    state.command_attempts += 1
    state.last_action = raw_input.strip()
    state.last_result = ""

    handler = _VERB_DISPATCH.get(command.verb)
    if handler is None:
        state.last_result = "I don't understand that command."
    else:
        state.last_result = handler(world, state, command)

    logger.debug(
        "command_processed",
        verb=command.verb,
        room=state.current_room,
        moves=state.moves,
    )
    return state.last_result


def get_current_room(world: World, state: GameState) -> Room | None:
    return world.get_room(state.current_room)


def get_room_description(world: World, state: GameState) -> str:
    """Get the description for the current room."""
    room = get_current_room(world, state)
    if room is None:
        return "You are in a mysterious place."
    return room.description.strip()


def _items(world: World, item_ids: Iterable[str]) -> list[Item]:
    """Resolve item ids, skipping any that don't exist."""
    return [item for item_id in item_ids if (item := world.get_item(item_id))]


def get_visible_items(world: World, state: GameState) -> list[str]:
    """Names of the non-hidden items in the current room."""
    room = get_current_room(world, state)
    if room is None:
        return []
    return [item.name for item in _items(world, room.items) if not item.hidden]


def get_inventory(world: World, state: GameState) -> list[str]:
    """Display names of carried items."""
    return [item.name for item in _items(world, state.inventory)]


def get_exits(world: World, state: GameState) -> list[str]:
    """Names of rooms reachable from here."""
    room = get_current_room(world, state)
    if room is None:
        return []
    return [
        exit_room.name
        for room_id in room.exits
        if (exit_room := world.get_room(room_id))
    ]


def _format_duration(elapsed: dt.timedelta) -> str:
    """Render whole seconds like 1h2m3s, dropping leading zero units."""
    total = max(int(elapsed.total_seconds()), 0)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"


def get_game_stats(
    world: World, state: GameState, now: dt.datetime | None = None
) -> str:
    return (
        f"Moves: {state.moves}, "
        f"Time: {_format_duration(state.elapsed(now))}, "
        f"Puzzles solved: {len(state.solved_puzzles)}/{len(world.puzzles)}"
    )


def _find_item(
    world: World, item_ids: Iterable[str], name: str, include_hidden: bool = True
) -> Item | None:
    """First item among item_ids whose name contains name."""
    for item in _items(world, item_ids):
        if item.hidden and not include_hidden:
            continue
        if name in item.name.lower():
            return item
    return None


def _room_items(world: World, state: GameState) -> list[str]:
    room = get_current_room(world, state)
    return room.items if room else []


def _cmd_look(world: World, state: GameState, command: Command) -> str:
    """Handle LOOK/EXAMINE. Examine actions take precedence."""
    if try_fire_actions(world, state, EXAMINE, command.target):
        return state.last_result or "OK."

    if not command.target:
        return get_room_description(world, state)

    item = _find_item(
        world, _room_items(world, state), command.target, include_hidden=False
    )
    if item is None:
        return NOT_HERE
    return item.description


def _take(world: World, state: GameState, target: str) -> str:
    if not target:
        return "Take what?"

    item = _find_item(world, _room_items(world, state), target, include_hidden=False)
    if item is None:
        return NOT_HERE
    if state.has_item(item.id):
        return "You already have that."

    state.add_item(item.id)
    state.discovered_items.add(item.id)
    return f"You take the {item.name}."


def _cmd_take(world: World, state: GameState, command: Command) -> str:
    """Handle TAKE/GET/PICK UP."""
    state.last_result = _take(world, state, command.target)
    try_fire_actions(world, state, TAKE, command.target)
    return state.last_result


def _use_single(world: World, state: GameState, target: str) -> str:
    for item in _items(world, state.inventory):
        if target in item.name.lower() and item.usable:
            return f"You use the {item.name}."
    return "You don't have that item or can't use it."


def _apply_combination(world: World, state: GameState, combo: Combination) -> str:
    state.add_item(combo.produces)
    for item in world.items:
        if item.revealed_by == combo.reveals and world.reveal_item(item.id):
            state.discovered_items.add(item.id)
    return combo.message


def _use_combination(
    world: World, state: GameState, primary: str, secondary: str
) -> str:
    """Handle USE X WITH/ON Y."""
    first = _find_item(world, state.inventory, primary)
    second = _find_item(world, state.inventory, secondary) or _find_item(
        world, _room_items(world, state), secondary, include_hidden=False
    )

    if first is None:
        return f"You don't have {primary}."
    if second is None:
        return f"You don't see {secondary} here."

    combo = SPECIAL_COMBINATIONS.get((first.id, second.id))
    if combo is not None:
        return _apply_combination(world, state, combo)

    if first.use_with == second.id:
        return f"You use the {first.name} with the {second.name}."
    return f"You can't use the {first.name} with the {second.name}."


def _cmd_use(world: World, state: GameState, command: Command) -> str:
    """Handle USE, with or without a second item."""
    if not command.target:
        return "Use what?"

    if command.is_combination:
        state.last_result = _use_combination(
            world, state, command.target, command.modifier
        )
        try_fire_actions(world, state, USE_WITH, command.target, command.modifier)
    else:
        state.last_result = _use_single(world, state, command.target)
        try_fire_actions(world, state, USE, command.target)
    return state.last_result


def _cmd_go(world: World, state: GameState, command: Command) -> str:
    """Handle GO/MOVE/WALK to a neighbouring room by name or id."""
    if not command.target:
        return "Go where?"

    room = get_current_room(world, state)
    if room is None:
        return "You can't go that way."

    for room_id in room.exits:
        destination = world.get_room(room_id)
        if destination is None:
            continue
        if (
            command.target not in destination.name.lower()
            and command.target not in room_id.lower()
        ):
            continue

        if destination.locked and (
            not destination.unlock_key or not state.has_item(destination.unlock_key)
        ):
            return "That way is locked."

        state.current_room = room_id
        logger.debug("room_entered", room=room_id)
        arrival = f"You move to {destination.name}."
        if destination.description:
            return f"{arrival}\n\n{destination.description.strip()}"
        return arrival

    return "You can't go that way."


def _cmd_inventory(world: World, state: GameState, command: Command) -> str:
    """Handle INVENTORY."""
    names = get_inventory(world, state)
    if not names:
        return "Your inventory is empty."
    return "You have: " + ", ".join(names)


def _cmd_solve(world: World, state: GameState, command: Command) -> str:
    """Handle SOLVE <answer> against the first unsolved puzzle in the room."""
    answer = command.target.strip("\"'").strip()
    if not answer:
        return "Solve what?"

    room = get_current_room(world, state)
    if room is None:
        return "There's no puzzle here to solve."

    for puzzle_id in room.puzzles:
        puzzle = world.get_puzzle(puzzle_id)
        if puzzle is None or state.is_solved(puzzle_id):
            continue

        if not all(state.has_item(item_id) for item_id in puzzle.required_items):
            return "You don't have everything needed to solve this puzzle."

        if answer.casefold() != puzzle.solution.strip().casefold():
            state.record_failure(puzzle_id, room.id)
            logger.debug("puzzle_attempt_failed", puzzle=puzzle_id)
            return "That's not correct."

        state.solved_puzzles.add(puzzle_id)
        world.mark_puzzle_solved(puzzle_id)
        logger.info(
            "puzzle_solved",
            puzzle=puzzle_id,
            solved=len(state.solved_puzzles),
            total=len(world.puzzles),
        )
        if check_win(world, state):
            logger.info("game_won", moves=state.moves)
        return f"Correct! {puzzle.reward}".strip()

    return "There's no puzzle here to solve."


def _cmd_hint(world: World, state: GameState, command: Command) -> str:
    """Handle HINT with the room's flat hint."""
    hint = world.hints.get(state.current_room)
    if not hint:
        return "No hints available for this location."
    return hint


_VERB_DISPATCH: dict[str, Callable[[World, GameState, Command], str]] = {
    "look": _cmd_look,
    "take": _cmd_take,
    "use": _cmd_use,
    "go": _cmd_go,
    "inventory": _cmd_inventory,
    "solve": _cmd_solve,
    "hint": _cmd_hint,
}
