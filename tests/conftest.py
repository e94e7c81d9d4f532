"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import os

# Must be set before lasthit.db.database gets imported anywhere: never touch a database file from the tests
os.environ.setdefault("LASTHIT_DATABASE_URL", "sqlite:///:memory:")

from typing import Callable, Generator, Iterable, Optional

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from lasthit.core.shared_types import Party
from lasthit.db.schema import Base
from lasthit.game.board import Board, Cell
from lasthit.game.position import Position
from lasthit.game.state import GameState

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

Coordinates = tuple[int, int]
StateFactory = Callable[..., GameState]


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_state() -> StateFactory:
    """Call the inner function to build a state on an open board (no border walls) with only the walls you ask for."""

    def _create_state(
        player1: Coordinates = (7, 12),
        player2: Coordinates = (7, 2),
        walls: Iterable[Coordinates] = (),
        turn_party: Party = Party.PLAYER1,
        current_turn: int = 1,
        size: Optional[int] = None,
    ) -> GameState:
        board = Board.empty() if size is None else Board.empty(size)
        for x, y in walls:
            board.set_cell(Position(x, y), Cell.WALL)
        player1_position = Position(*player1)
        player2_position = Position(*player2)
        board.set_cell(player1_position, Cell.PLAYER1)
        board.set_cell(player2_position, Cell.PLAYER2)
        return GameState(
            board, player1_position, player2_position, current_turn, turn_party
        )

    return _create_state
