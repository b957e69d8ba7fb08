"""Shared test fixtures for Alien Planet Survival."""

from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from survival.app import _get_data_path, create_app
from survival.config import Config
from survival.engine.loader import load_world
from survival.engine.state import GameState, new_game_state
from survival.engine.world import World
from survival.models import Player


class FixedRolls:
    """Stand-in for the random module that returns scripted rolls.

    Each randint(a, b) call pops the next value; a value outside [a, b]
    is clamped into it so tests can just ask for "max" or "min".
    """

    def __init__(self, *rolls: int):
        self.rolls = list(rolls)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self.rolls.pop(0)
        return min(max(value, a), b)


@pytest.fixture
def world() -> World:
    return load_world(_get_data_path())


@pytest.fixture
def state(world: World) -> GameState:
    return new_game_state(world)


@pytest.fixture
def db_engine(tmp_path: Path):
    db_url = f"sqlite:///{tmp_path}/test.db"
    engine = create_engine(db_url)
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine):
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def test_player(db_session: Session) -> Player:
    player = Player(fingerprint="test-fingerprint-abc123")
    db_session.add(player)
    db_session.commit()
    db_session.refresh(player)
    return player


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    return Config(database_url=f"sqlite:///{tmp_path}/test.db")


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    from xitzin.testing import test_app

    with test_app(app) as client:
        yield client


@pytest.fixture
def auth_client(client):
    return client.with_certificate("test-fingerprint-abc123")


@pytest.fixture
def rolls():
    """Factory for scripted damage rolls: rolls(20, 1) etc."""
    return FixedRolls
