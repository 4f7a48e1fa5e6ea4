"""Atmospheric narration and scenario generation through OpenAI.

Everything here is decoration around the engine. The narrator only ever
sees facts the player has already been shown: no solutions, no puzzle
internals and no hidden items. Both services raise NarrationError on any
failure; callers decide how to degrade.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Protocol

from openai import OpenAI, OpenAIError

from .engine.commands import get_inventory, get_room_description, get_visible_items
from .engine.loader import is_current_format, world_from_dict
from .engine.state import GameState
from .engine.world import World
from .errors import NarrationError, WorldFormatError
from .logging import get_logger

logger = get_logger(__name__)

FILLER_PHRASES = [
    "The air feels thick with mystery.",
    "Something important must be nearby.",
    "You sense you're getting closer to the truth.",
    "The silence is almost deafening.",
    "Every detail might be crucial.",
]

NARRATOR_SYSTEM_PROMPT = (
    "You are a mysterious, slightly ominous narrator for an escape room. "
    "Be atmospheric and engaging, but never give away solutions directly."
)

DESIGNER_SYSTEM_PROMPT = (
    "You are a creative escape room designer. Generate detailed, immersive "
    "scenarios with logical puzzles and interconnected elements. Always "
    "respond with valid JSON only."
)

SCENARIO_PROMPT = """Generate a complete escape room scenario with the theme: {theme}

Respond with a JSON object with these keys:
- theme, setting, backstory, win_condition: strings
- rooms: 3-5 connected rooms, each with id, name, description, items (item ids),
  puzzles (puzzle ids), exits (room ids), locked (bool), unlock_key (item id)
- items: each with id, name, description, usable (bool), use_with (item id),
  hidden (bool), revealed_by (action id)
- puzzles: each with id, name, description, solution (short answer typed by
  the player), required_items (item ids), reward
- actions: each with id, trigger {{type: examine|take|use|use_with, target,
  with}}, conditions [{{type: has_item|in_room|puzzle_solved|action_performed,
  value}}], effects [{{type: reveal_item|hide_item|unlock_room|add_inventory|
  remove_inventory, target}}], message, one_time_only (bool)
- hints: object mapping room ids to a hint
- progressive_hints: each with context (room or puzzle id), triggers
  [{{type: failed_attempts|time_spent|commands_tried, threshold}}], hint_text,
  priority

The first room is where the player starts. Make it challenging but solvable,
with at least 3 puzzles, 5 items, and some items hidden until an action
reveals them."""

NARRATION_PROMPT = """The game engine has already told the player the facts. Your job is ONLY to add atmosphere.

Theme: {theme}
Setting: {setting}
Current room: {room_name} - {room_description}
Visible items: {visible_items}
What just happened: {last_result}

Player's last action: {last_action}
Inventory: {inventory}
Progress: {solved}/{total} puzzles solved
Commands tried: {commands_tried}{hints}

Write 1-2 sentences of atmospheric narration that:
1. Adds mood and mystery to the situation
2. Subtly weaves in any progressive hints listed above
3. NEVER repeats facts (items, room details, action results)
4. Focuses on sensory detail, emotion, tension or eerie ambiance"""


@dataclass(frozen=True)
class NarrationContext:
    """What the narrator may know about the current turn."""

    theme: str
    setting: str
    room_name: str
    room_description: str
    last_action: str
    last_result: str
    player_input: str
    moves: int
    commands_tried: int
    puzzles_solved: int
    puzzles_total: int
    inventory: list[str] = field(default_factory=list)
    visible_items: list[str] = field(default_factory=list)
    progressive_hints: list[str] = field(default_factory=list)


def build_narration_context(
    world: World,
    state: GameState,
    player_input: str,
    progressive_hints: list[str] | None = None,
) -> NarrationContext:
    room = world.get_room(state.current_room)
    return NarrationContext(
        theme=world.theme,
        setting=world.setting,
        room_name=room.name if room else "",
        room_description=get_room_description(world, state),
        last_action=state.last_action,
        last_result=state.last_result,
        player_input=player_input,
        moves=state.moves,
        commands_tried=state.command_attempts,
        puzzles_solved=len(state.solved_puzzles),
        puzzles_total=len(world.puzzles),
        inventory=get_inventory(world, state),
        visible_items=get_visible_items(world, state),
        progressive_hints=list(progressive_hints or []),
    )


def filler_narration(context: NarrationContext) -> str:
    """A stock phrase, picked deterministically from the turn."""
    index = (len(context.last_action) + context.moves) % len(FILLER_PHRASES)
    return FILLER_PHRASES[index]


class Narrator(Protocol):
    def narrate(self, context: NarrationContext) -> str: ...


class _OpenAIChat:
    """Thin wrapper around the chat completions API."""

    def __init__(
        self,
        model: str,
        api_key: str,
        timeout: float = 10.0,
        client: OpenAI | None = None,
    ):
        self.model = model
        self.client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=1)

    def _complete(
        self,
        system_prompt: str,
        prompt: str,
        temperature: float,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        start_time = time.monotonic()
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                **kwargs,
            )
        except OpenAIError as e:
            raise NarrationError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise NarrationError("OpenAI returned no choices")

        logger.debug(
            "openai_completion",
            model=self.model,
            latency_ms=round((time.monotonic() - start_time) * 1000, 1),
        )
        return (response.choices[0].message.content or "").strip()


class OpenAINarrator(_OpenAIChat):
    """Narrates turns with a chat model."""

    def narrate(self, context: NarrationContext) -> str:
        hints = ""
        if context.progressive_hints:
            hints = (
                "\n\nProgressive hints (weave these in subtly):\n"
                + "\n".join(f"- {hint}" for hint in context.progressive_hints)
            )
        prompt = NARRATION_PROMPT.format(
            theme=context.theme,
            setting=context.setting,
            room_name=context.room_name,
            room_description=context.room_description,
            visible_items=", ".join(context.visible_items) or "nothing of note",
            last_result=context.last_result,
            last_action=context.last_action,
            inventory=", ".join(context.inventory) or "nothing",
            solved=context.puzzles_solved,
            total=context.puzzles_total,
            commands_tried=context.commands_tried,
            hints=hints,
        )
        return self._complete(
            NARRATOR_SYSTEM_PROMPT, prompt, temperature=0.7, max_tokens=150
        )


class ScenarioGenerator(_OpenAIChat):
    """Designs a whole world document for a theme."""

    def generate(self, theme: str) -> World:
        text = self._complete(
            DESIGNER_SYSTEM_PROMPT,
            SCENARIO_PROMPT.format(theme=theme),
            temperature=0.8,
            json_mode=True,
        )
        try:
            world = world_from_dict(json.loads(text))
        except (json.JSONDecodeError, WorldFormatError) as e:
            raise NarrationError(f"generated scenario is unusable: {e}") from e

        if not is_current_format(world):
            raise NarrationError("generated scenario has no actions or progressive hints")
        if not world.theme:
            world.theme = theme
        logger.info(
            "scenario_generated",
            theme=world.theme,
            rooms=len(world.rooms),
            puzzles=len(world.puzzles),
        )
        return world
