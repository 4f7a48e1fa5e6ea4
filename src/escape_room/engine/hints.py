"""Win condition and progressive hint eligibility."""

import datetime as dt

from .state import GameState
from .world import ProgressiveHint, World


def check_win(world: World, state: GameState) -> bool:
    """Set game_won once every puzzle is solved. Never clears it."""
    if len(state.solved_puzzles) >= len(world.puzzles):
        state.game_won = True
    return state.game_won


def _context_matches(world: World, state: GameState, hint: ProgressiveHint) -> bool:
    if hint.context == state.current_room:
        return True
    room = world.get_room(state.current_room)
    if room is None:
        return False
    return any(
        hint.context == puzzle_id and not state.is_solved(puzzle_id)
        for puzzle_id in room.puzzles
    )


def _triggered(
    hint: ProgressiveHint, state: GameState, now: dt.datetime | None
) -> bool:
    minutes = int(state.elapsed(now).total_seconds() // 60)
    for trigger in hint.triggers:
        match trigger.type:
            case "failed_attempts":
                if state.failed_attempts.get(hint.context, 0) >= trigger.threshold:
                    return True
            case "time_spent":
                if minutes >= trigger.threshold:
                    return True
            case "commands_tried":
                if state.command_attempts >= trigger.threshold:
                    return True
    return False


def eligible_hints(
    world: World, state: GameState, now: dt.datetime | None = None
) -> list[str]:
    """Texts of all progressive hints currently unlocked, in definition order.

    Priority is informational; every eligible hint is returned.
    """
    return [
        hint.hint_text
        for hint in world.progressive_hints
        if _context_matches(world, state, hint) and _triggered(hint, state, now)
    ]
