"""Console front end: one line in, the result (and any narration) out."""

from collections.abc import Callable

import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from .config import Config
from .engine.scenarios import random_theme
from .logging import configure_logging, get_logger
from .narration import OpenAINarrator, ScenarioGenerator
from .session import EscapeSession
from .store import ScenarioStore

app = typer.Typer(add_completion=False, help="An AI-narrated escape room game.")
console = Console(highlight=False)
logger = get_logger(__name__)

HELP_TEXT = """Available commands:
  look [item]       - Examine your surroundings or a specific item
  take <item>       - Pick up an item
  use <item>        - Use an item from your inventory
  use <a> with <b>  - Use two items together
  go <room>         - Move to a different room
  inventory         - Check what you're carrying
  solve <answer>    - Attempt to solve a puzzle
  hint              - Get a hint for the current room
  stats             - Show game statistics
  help              - Show this help message
  quit              - Exit the game"""


def _say(text: str, style: str | None = None) -> None:
    console.print(text, style=style, markup=False, soft_wrap=True)


def _ask_theme(theme: str | None) -> Callable[[], str]:
    def ask() -> str:
        if theme:
            return theme
        answer = console.input("Enter a theme (or press Enter for random): ").strip()
        if answer:
            return answer
        chosen = random_theme()
        _say(f"Generated theme: {chosen}")
        return chosen

    return ask


def build_services(
    config: Config, narration: bool = True
) -> tuple[ScenarioGenerator | None, OpenAINarrator | None]:
    """OpenAI clients for generation and narration, or None without an API key."""
    if not config.llm_enabled:
        return None, None

    generator = ScenarioGenerator(
        config.model, config.openai_api_key, timeout=config.generation_timeout
    )
    narrator = None
    if config.narration and narration:
        narrator = OpenAINarrator(
            config.model, config.openai_api_key, timeout=config.narration_timeout
        )
    return generator, narrator


def run_game(session: EscapeSession) -> None:
    """The turn loop. Returns on quit, end of input, or a win."""
    _say(session.get_room_description())
    _say("")

    while True:
        if session.is_won:
            _say("Congratulations! You've escaped!", style="bold green")
            _say(f"Final stats: {session.stats()}")
            break

        try:
            line = console.input("> ").strip()
        except EOFError:
            break

        if not line:
            continue

        command = line.lower()
        if command in ("quit", "exit"):
            _say("Thanks for playing!")
            break
        if command == "help":
            _say(HELP_TEXT)
            continue
        if command == "stats":
            _say(session.stats())
            continue

        turn = session.process_command(line)
        if turn.result:
            _say(turn.result)
        if turn.narration:
            _say(turn.narration, style="italic magenta")
        _say("")


@app.command()
def play(
    theme: str | None = typer.Option(
        None, "--theme", help="Theme for a newly generated scenario."
    ),
    new: bool = typer.Option(
        False, "--new", help="Discard the stored scenario and create a new one."
    ),
    no_narration: bool = typer.Option(
        False, "--no-narration", help="Play without AI narration."
    ),
) -> None:
    """Play the escape room."""
    config = Config.from_env()
    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
        redact_secrets=config.redact_secrets,
    )
    logger.info(
        "application_starting",
        model=config.model,
        narration=config.narration and not no_narration,
        llm_enabled=config.llm_enabled,
    )

    _say("Welcome to Escape Room", style="bold")
    _say("An AI-narrated escape room game")
    _say("")

    try:
        store = ScenarioStore(config.database_url)
        if new:
            store.clear()
    except SQLAlchemyError as e:
        logger.error("database_unavailable", error=str(e))
        _say(f"Error setting up game: {e}", style="red")
        raise typer.Exit(code=1)

    generator, narrator = build_services(config, narration=not no_narration)
    if generator is None:
        _say("OPENAI_API_KEY not set; using the built-in scenario without narration.")

    session = EscapeSession.load_or_create(
        store, _ask_theme(theme), generator=generator, narrator=narrator
    )

    world = session.world
    _say(f"Theme: {world.theme}")
    _say(f"Setting: {world.setting}")
    _say("")
    _say(f"Backstory: {world.backstory}")
    _say("")

    run_game(session)
