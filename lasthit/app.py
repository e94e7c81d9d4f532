"""Wiring of the layers for the process hosting the game (a router, a CLI, a worker ...)."""

from contextlib import contextmanager
from typing import Generator

from lasthit.core.config import setup_logging
from lasthit.db.database import get_db
from lasthit.db.sql_repository import SQLGameRepository
from lasthit.services.game_service import GameService


def init_app() -> None:
    """Call once at process start-up."""
    setup_logging()


@contextmanager
def game_service() -> Generator[GameService, None, None]:
    """A GameService on its own database session, closed on exit."""
    sessions = get_db()
    db = next(sessions)
    try:
        yield GameService(SQLGameRepository(db))
    finally:
        sessions.close()
