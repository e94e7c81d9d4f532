"""Generate database session"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from lasthit.core.config import DATABASE_ECHO, DATABASE_URL
from lasthit.db.schema import Base

engine = create_engine(DATABASE_URL, echo=DATABASE_ECHO)
SessionLocal = sessionmaker(bind=engine)

# Ensure all tables are created
Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
