"""Persistence of world documents.

The store keeps the most recent scenario so the next game reuses it instead
of generating a new one. Documents are opaque JSON blobs to the database.
"""

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, col, create_engine, select

from .engine.loader import is_current_format, world_from_json, world_to_json
from .engine.world import World
from .errors import WorldFormatError
from .logging import get_logger
from .models import SavedScenario

logger = get_logger(__name__)


class ScenarioStore:
    """Load and save world documents in a SQL database."""

    def __init__(self, database_url: str):
        self.engine = create_engine(database_url)
        SQLModel.metadata.create_all(self.engine)
        logger.debug("database_setup_complete", database_url=database_url)

    def latest(self) -> SavedScenario | None:
        with Session(self.engine) as session:
            statement = select(SavedScenario).order_by(col(SavedScenario.id).desc())
            return session.exec(statement).first()

    def load(self) -> World | None:
        """Return the stored world, or None if missing, unreadable, malformed or stale."""
        try:
            saved = self.latest()
        except SQLAlchemyError as e:
            logger.warning("scenario_unreadable", error=str(e))
            return None
        if saved is None:
            return None

        try:
            world = world_from_json(saved.document)
        except WorldFormatError as e:
            logger.warning("scenario_malformed", scenario_id=saved.id, error=str(e))
            return None

        if not is_current_format(world):
            logger.info("scenario_outdated", scenario_id=saved.id)
            return None

        logger.info("scenario_loaded", scenario_id=saved.id, theme=world.theme)
        return world

    def save(self, world: World) -> SavedScenario | None:
        """Store a world document. Failure is logged; play can go on without it."""
        saved = SavedScenario(theme=world.theme, document=world_to_json(world))
        try:
            with Session(self.engine) as session:
                session.add(saved)
                session.commit()
                session.refresh(saved)
        except SQLAlchemyError as e:
            logger.error("scenario_save_failed", error=str(e))
            return None
        logger.info("scenario_saved", scenario_id=saved.id, theme=saved.theme)
        return saved

    def clear(self) -> None:
        with Session(self.engine) as session:
            for saved in session.exec(select(SavedScenario)).all():
                session.delete(saved)
            session.commit()
        logger.info("scenarios_cleared")

    def load_or_create(self, create: Callable[[], World]) -> World:
        """Reuse the stored world, or build one with create() and store it."""
        world = self.load()
        if world is not None:
            return world
        world = create()
        self.save(world)
        return world
