"""Session layer bridging the game engine, storage and narration."""

import datetime as dt
from collections.abc import Callable
from dataclasses import dataclass

from .engine.commands import get_game_stats, get_room_description, handle_command
from .engine.hints import eligible_hints
from .engine.scenarios import default_scenario
from .engine.state import GameState, new_game_state
from .engine.world import World
from .errors import NarrationError
from .logging import get_logger
from .narration import (
    Narrator,
    ScenarioGenerator,
    build_narration_context,
    filler_narration,
)
from .store import ScenarioStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class Turn:
    """Output of one command: the authoritative result, then optional narration."""

    result: str
    narration: str | None = None


def create_world(theme: str, generator: ScenarioGenerator | None = None) -> World:
    """Generate a world for theme, falling back to the built-in scenario."""
    if generator is not None:
        try:
            return generator.generate(theme)
        except NarrationError as e:
            logger.warning("scenario_generation_failed", theme=theme, error=str(e))
    return default_scenario(theme)


class EscapeSession:
    """Wraps a World + in-memory GameState + optional narrator."""

    def __init__(
        self,
        world: World,
        game_state: GameState | None = None,
        narrator: Narrator | None = None,
    ):
        self.world = world
        self.state = game_state or new_game_state(world)
        self.narrator = narrator

    @classmethod
    def load_or_create(
        cls,
        store: ScenarioStore,
        ask_theme: Callable[[], str],
        generator: ScenarioGenerator | None = None,
        narrator: Narrator | None = None,
    ) -> "EscapeSession":
        """Reuse the stored scenario or build and store a new one."""
        world = store.load_or_create(lambda: create_world(ask_theme(), generator))
        logger.info("new_game_started", theme=world.theme, rooms=len(world.rooms))
        return cls(world, narrator=narrator)

    @property
    def is_won(self) -> bool:
        return self.state.game_won

    def process_command(self, raw_input: str) -> Turn:
        """Run one command to completion, then ask for narration."""
        result = handle_command(self.world, self.state, raw_input)
        return Turn(result=result, narration=self.narrate(raw_input))

    def narrate(self, raw_input: str) -> str | None:
        """Atmosphere for the turn just played. Never touches game state."""
        if self.narrator is None:
            return None

        context = build_narration_context(
            self.world, self.state, raw_input, self.progressive_hints()
        )
        try:
            return self.narrator.narrate(context) or None
        except NarrationError as e:
            logger.warning("narration_failed", error=str(e))
            return filler_narration(context)

    def progressive_hints(self, now: dt.datetime | None = None) -> list[str]:
        return eligible_hints(self.world, self.state, now)

    def get_room_description(self) -> str:
        return get_room_description(self.world, self.state)

    def stats(self, now: dt.datetime | None = None) -> str:
        return get_game_stats(self.world, self.state, now)
