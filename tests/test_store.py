"""Tests for scenario persistence."""

from sqlalchemy import create_engine, text
from sqlmodel import Session

from escape_room.engine.loader import world_to_dict
from escape_room.engine.scenarios import default_scenario
from escape_room.engine.world import Room, World
from escape_room.models import SavedScenario
from escape_room.store import ScenarioStore


def test_empty_store_loads_nothing(store: ScenarioStore):
    assert store.latest() is None
    assert store.load() is None


def test_save_and_load(store: ScenarioStore, world: World):
    saved = store.save(world)
    assert saved is not None
    assert saved.id is not None
    assert saved.theme == "Uncle's Study"

    loaded = store.load()
    assert loaded is not None
    assert world_to_dict(loaded) == world_to_dict(world)


def test_latest_wins(store: ScenarioStore):
    store.save(default_scenario("First"))
    store.save(default_scenario("Second"))
    assert store.load().theme == "Second"


def test_persists_across_instances(database_url: str, world: World):
    ScenarioStore(database_url).save(world)
    assert ScenarioStore(database_url).load() is not None


def test_stale_document_is_ignored(store: ScenarioStore):
    """Documents without actions or progressive hints are treated as missing."""
    store.save(World(theme="Legacy", rooms=[Room(id="cell")]))
    assert store.latest().theme == "Legacy"
    assert store.load() is None


def test_malformed_document_is_ignored(store: ScenarioStore):
    with Session(store.engine) as session:
        session.add(SavedScenario(theme="Broken", document=b"{not json"))
        session.commit()
    assert store.load() is None


def test_clear(store: ScenarioStore, world: World):
    store.save(world)
    store.save(world)
    store.clear()
    assert store.latest() is None


def test_load_or_create_builds_once(store: ScenarioStore):
    calls = []

    def create() -> World:
        calls.append(1)
        return default_scenario("Built")

    first = store.load_or_create(create)
    second = store.load_or_create(create)

    assert len(calls) == 1
    assert first.theme == second.theme == "Built"


def test_load_or_create_replaces_stale(store: ScenarioStore):
    store.save(World(theme="Legacy", rooms=[Room(id="cell")]))
    world = store.load_or_create(lambda: default_scenario("Fresh"))
    assert world.theme == "Fresh"
    assert store.load().theme == "Fresh"


def _incompatible_table(database_url: str) -> None:
    engine = create_engine(database_url)
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE savedscenario (id INTEGER PRIMARY KEY, blob BLOB)"))
        conn.execute(text("INSERT INTO savedscenario (blob) VALUES (x'00')"))
    engine.dispose()


def test_unreadable_table_loads_nothing(database_url: str):
    """A table in an older layout reads as no stored scenario."""
    _incompatible_table(database_url)
    store = ScenarioStore(database_url)
    assert store.load() is None


def test_load_or_create_survives_unreadable_table(database_url: str):
    """Play still starts when the stored scenario can't be read or saved."""
    _incompatible_table(database_url)
    store = ScenarioStore(database_url)
    world = store.load_or_create(lambda: default_scenario("Fresh"))
    assert world.theme == "Fresh"
