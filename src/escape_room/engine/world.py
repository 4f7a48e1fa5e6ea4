"""Data structures for an escape room world.

A World is loaded once per session. Only item visibility, room locks and
puzzle solved flags change during play, and only through the transition
methods on World.
"""

from dataclasses import dataclass, field

# Trigger types
EXAMINE = "examine"
TAKE = "take"
USE = "use"
USE_WITH = "use_with"

# Condition types
HAS_ITEM = "has_item"
IN_ROOM = "in_room"
PUZZLE_SOLVED = "puzzle_solved"
ACTION_PERFORMED = "action_performed"

# Effect types
REVEAL_ITEM = "reveal_item"
HIDE_ITEM = "hide_item"
UNLOCK_ROOM = "unlock_room"
ADD_INVENTORY = "add_inventory"
REMOVE_INVENTORY = "remove_inventory"

# Hint trigger types
FAILED_ATTEMPTS = "failed_attempts"
TIME_SPENT = "time_spent"
COMMANDS_TRIED = "commands_tried"


@dataclass
class Room:
    """A location the player can stand in."""

    id: str
    name: str = ""
    description: str = ""
    items: list[str] = field(default_factory=list)
    puzzles: list[str] = field(default_factory=list)
    exits: list[str] = field(default_factory=list)
    locked: bool = False
    unlock_key: str | None = None


@dataclass
class Item:
    """An object that can be looked at, carried or combined."""

    id: str
    name: str = ""
    description: str = ""
    usable: bool = False
    use_with: str | None = None
    hidden: bool = False
    revealed_by: str | None = None


@dataclass
class Puzzle:
    """A challenge answered with the SOLVE command."""

    id: str
    name: str = ""
    description: str = ""
    solution: str = ""
    required_items: list[str] = field(default_factory=list)
    reward: str = ""
    solved: bool = False


@dataclass(frozen=True)
class ActionTrigger:
    type: str
    target: str = ""
    with_: str = ""


@dataclass(frozen=True)
class ActionCondition:
    type: str
    value: str = ""


@dataclass(frozen=True)
class ActionEffect:
    type: str
    target: str = ""
    value: str = ""


@dataclass
class Action:
    """A declarative rule: trigger + conditions → effects and a message."""

    id: str
    trigger: ActionTrigger
    conditions: list[ActionCondition] = field(default_factory=list)
    effects: list[ActionEffect] = field(default_factory=list)
    message: str = ""
    one_time_only: bool = False


@dataclass(frozen=True)
class HintTrigger:
    type: str
    threshold: int = 0


@dataclass
class ProgressiveHint:
    """A hint that unlocks once a counter crosses a threshold."""

    context: str
    triggers: list[HintTrigger] = field(default_factory=list)
    hint_text: str = ""
    priority: int = 0


@dataclass
class World:
    """The complete scenario for one playthrough."""

    theme: str = ""
    setting: str = ""
    backstory: str = ""
    win_condition: str = ""
    rooms: list[Room] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)
    puzzles: list[Puzzle] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)
    hints: dict[str, str] = field(default_factory=dict)
    progressive_hints: list[ProgressiveHint] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.reindex()

    def reindex(self) -> None:
        """Rebuild the id indexes. First definition of a duplicate id wins."""
        self._rooms: dict[str, Room] = {}
        self._items: dict[str, Item] = {}
        self._puzzles: dict[str, Puzzle] = {}
        for room in self.rooms:
            self._rooms.setdefault(room.id, room)
        for item in self.items:
            self._items.setdefault(item.id, item)
        for puzzle in self.puzzles:
            self._puzzles.setdefault(puzzle.id, puzzle)

    @property
    def start_room(self) -> str:
        return self.rooms[0].id if self.rooms else ""

    def get_room(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def get_item(self, item_id: str) -> Item | None:
        return self._items.get(item_id)

    def get_puzzle(self, puzzle_id: str) -> Puzzle | None:
        return self._puzzles.get(puzzle_id)

    # Transitions. Unknown ids are ignored: world content may come from a
    # generator and dangling references must not end the turn.

    def reveal_item(self, item_id: str) -> bool:
        item = self._items.get(item_id)
        if item is None:
            return False
        item.hidden = False
        return True

    def hide_item(self, item_id: str) -> bool:
        item = self._items.get(item_id)
        if item is None:
            return False
        item.hidden = True
        return True

    def unlock_room(self, room_id: str) -> bool:
        room = self._rooms.get(room_id)
        if room is None:
            return False
        room.locked = False
        return True

    def mark_puzzle_solved(self, puzzle_id: str) -> bool:
        puzzle = self._puzzles.get(puzzle_id)
        if puzzle is None:
            return False
        puzzle.solved = True
        return True
