"""Mutable per-session game state.

Holds only ids, counters and flags. Item visibility and room locks live on
the World; everything else the player changes lives here.
"""

import datetime as dt
from dataclasses import dataclass, field

from .world import World


@dataclass
class GameState:
    """All mutable per-session state."""

    current_room: str = ""
    inventory: list[str] = field(default_factory=list)
    solved_puzzles: set[str] = field(default_factory=set)
    discovered_items: set[str] = field(default_factory=set)
    performed_actions: set[str] = field(default_factory=set)

    # context id (room or puzzle) → wrong answers given
    failed_attempts: dict[str, int] = field(default_factory=dict)
    command_attempts: int = 0
    moves: int = 0
    started_at: dt.datetime = field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )

    game_won: bool = False
    last_action: str = ""
    last_result: str = ""

    def has_item(self, item_id: str) -> bool:
        return item_id in self.inventory

    def add_item(self, item_id: str) -> bool:
        """Add to inventory unless already held. Returns True if added."""
        if item_id in self.inventory:
            return False
        self.inventory.append(item_id)
        return True

    def remove_item(self, item_id: str) -> bool:
        """Remove the first occurrence of item_id. Returns True if removed."""
        if item_id not in self.inventory:
            return False
        self.inventory.remove(item_id)
        return True

    def is_solved(self, puzzle_id: str) -> bool:
        return puzzle_id in self.solved_puzzles

    def record_failure(self, *contexts: str) -> None:
        for context in contexts:
            self.failed_attempts[context] = self.failed_attempts.get(context, 0) + 1

    def elapsed(self, now: dt.datetime | None = None) -> dt.timedelta:
        now = now or dt.datetime.now(dt.UTC)
        return now - self.started_at


def new_game_state(world: World) -> GameState:
    """Create a fresh game state standing in the world's first room."""
    state = GameState(current_room=world.start_room)
    # Puzzles already flagged solved in the document count as solved.
    for puzzle in world.puzzles:
        if puzzle.solved:
            state.solved_puzzles.add(puzzle.id)
    return state
