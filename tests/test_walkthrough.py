"""Test that the built-in scenario can be played through to completion.

Route:
  study: examine the desk and bookshelves to reveal the key and journal,
  collect everything, solve the painting then the clock, and use the
  compass with the clock to open the bookshelf.
  hidden_passage: open the chest with the key and compass.
"""

from escape_room.engine.commands import get_game_stats, handle_command
from escape_room.engine.hints import eligible_hints
from escape_room.engine.state import GameState
from escape_room.engine.world import World

STUDY = [
    "examine desk",
    "examine bookshelves",
    "take key",
    "take journal",
    "take compass",
    "get letter opener",
]


def _run(world: World, state: GameState, commands: list[str]) -> list[str]:
    """Run a list of commands and return all responses."""
    responses = []
    for cmd in commands:
        resp = handle_command(world, state, cmd)
        responses.append(resp)
        assert not state.game_won, f"Game ended unexpectedly after {cmd!r}: {resp}"
    return responses


def test_full_walkthrough(world: World, state: GameState):
    responses = _run(world, state, STUDY)
    assert responses[0].startswith("You rummage through the desk")
    assert responses[1].startswith("Scanning the shelves")
    assert state.inventory == ["desk_drawer", "loose_book", "compass", "letter_opener"]

    responses = _run(world, state, ["solve move painting", "solve twelve"])
    assert all(r.startswith("Correct!") for r in responses)

    assert handle_command(world, state, "go passage") == "That way is locked."
    result = handle_command(world, state, "use compass with clock")
    assert "bookshelf swings aside" in result
    assert not world.get_room("hidden_passage").locked

    result = handle_command(world, state, "go passage")
    assert result.startswith("You move to Hidden Passage.")
    assert state.current_room == "hidden_passage"

    result = handle_command(world, state, "solve use key and compass")
    assert result.startswith("Correct! The mysterious key fits perfectly")
    assert state.game_won
    assert get_game_stats(world, state).endswith("Puzzles solved: 3/3")


def test_won_game_stays_won(world: World, state: GameState):
    _run(world, state, STUDY)
    _run(world, state, ["solve move painting", "solve twelve", "use compass with clock"])
    _run(world, state, ["go passage"])
    handle_command(world, state, "solve use key and compass")
    assert state.game_won

    handle_command(world, state, "look")
    handle_command(world, state, "solve wrong")
    assert state.game_won


def test_painting_route_unlocks_passage(world: World, state: GameState):
    """Prying the painting aside grants the passage key without the clock."""
    _run(world, state, ["take letter opener"])
    result = handle_command(world, state, "use letter opener with painting")
    assert result.startswith("You pry the painting aside")
    assert world.get_room("hidden_passage").locked

    handle_command(world, state, "go passage")
    assert state.current_room == "hidden_passage"


def test_wrong_answers_unlock_puzzle_hint(world: World, state: GameState):
    _run(world, state, ["take letter opener", "solve lift it", "solve push it"])
    hints = eligible_hints(world, state)
    assert "The painting isn't flush with the wall. A tool could move it aside." in hints
