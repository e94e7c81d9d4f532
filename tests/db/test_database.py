"""Unit tests for lasthit/db/database.py (runs against the in-memory database set up in conftest.py)"""

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from lasthit.db.database import engine, get_db


def test_get_db_yields_a_session() -> None:
    sessions = get_db()
    db = next(sessions)
    assert isinstance(db, Session)
    sessions.close()


def test_tables_are_created() -> None:
    tables = set(inspect(engine).get_table_names())
    assert {"games", "game_moves"} <= tables
