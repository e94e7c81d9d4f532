"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    player1_kind: Mapped[str]
    player1_ref: Mapped[Optional[str]]
    player2_kind: Mapped[str]
    player2_ref: Mapped[Optional[str]]
    status: Mapped[str] = mapped_column(index=True)
    game_state: Mapped[dict[str, Any]] = mapped_column(JSON)
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)

    moves: Mapped[list["DBMove"]] = relationship(
        back_populates="game", cascade="all, delete-orphan"
    )


class DBMove(Base):
    """Append-only log: rows are only ever inserted, or removed together with their game."""

    __tablename__ = "game_moves"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(
        ForeignKey("games.id", ondelete="CASCADE"), index=True
    )
    turn_number: Mapped[int]
    party: Mapped[str]
    kind: Mapped[str]
    data: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)

    game: Mapped[DBGame] = relationship(back_populates="moves")
