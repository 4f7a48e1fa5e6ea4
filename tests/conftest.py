"""Shared test fixtures for Escape Room."""

from pathlib import Path

import pytest

from escape_room.engine.scenarios import default_scenario
from escape_room.engine.state import GameState, new_game_state
from escape_room.engine.world import World
from escape_room.store import ScenarioStore


@pytest.fixture
def world() -> World:
    return default_scenario()


@pytest.fixture
def state(world: World) -> GameState:
    return new_game_state(world)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path}/test.db"


@pytest.fixture
def store(database_url: str) -> ScenarioStore:
    return ScenarioStore(database_url)
