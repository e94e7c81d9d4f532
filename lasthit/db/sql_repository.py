"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from lasthit.core.models import GameModel, MoveRecord
from lasthit.db.schema import DBGame, DBMove

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            player1_kind=game.player1_kind,
            player1_ref=game.player1_ref,
            player2_kind=game.player2_kind,
            player2_ref=game.player2_ref,
            status=game.status,
            game_state=game.game_state,
            winner=game.winner,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.debug(f"Game {new_id}: record created")
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.player1_kind = game.player1_kind
        game_db.player1_ref = game.player1_ref
        game_db.player2_kind = game.player2_kind
        game_db.player2_ref = game.player2_ref
        game_db.status = game.status
        game_db.game_state = game.game_state
        game_db.winner = game.winner
        self.db.commit()
        self.db.refresh(game_db)
        logger.debug(f"Game {game_id}: record updated (status: {game.status})")
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record. The move log goes with it (cascade on the relationship)."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        logger.debug(f"Game {game_id}: record deleted")
        return game_model

    def list_games(
        self, limit: int, offset: int, status: Optional[str] = None
    ) -> list[tuple[UUID, GameModel]]:
        """Page through the games, newest first."""
        query = select(DBGame)
        if status is not None:
            query = query.where(DBGame.status == status)
        query = query.order_by(DBGame.created_at.desc()).limit(limit).offset(offset)
        return [(game_db.id, self._to_model(game_db)) for game_db in self.db.scalars(query)]

    def append_move(self, record: MoveRecord) -> MoveRecord:
        move_db = DBMove(
            game_id=record.game_id,
            turn_number=record.turn_number,
            party=record.party,
            kind=record.kind,
            data=record.data,
        )
        self.db.add(move_db)
        self.db.commit()
        self.db.refresh(move_db)
        logger.debug(
            f"Game {record.game_id}: move logged (turn {record.turn_number}, {record.party} {record.kind})"
        )
        return self._to_record(move_db)

    def list_moves(self, game_id: UUID) -> list[MoveRecord]:
        query = (
            select(DBMove)
            .where(DBMove.game_id == game_id)
            .order_by(DBMove.turn_number, DBMove.id)
        )
        return [self._to_record(move_db) for move_db in self.db.scalars(query)]

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            player1_kind=game_db.player1_kind,
            player1_ref=game_db.player1_ref,
            player2_kind=game_db.player2_kind,
            player2_ref=game_db.player2_ref,
            status=game_db.status,
            game_state=game_db.game_state,
            winner=game_db.winner,
            created_at=game_db.created_at,
            updated_at=game_db.updated_at,
        )

    def _to_record(self, move_db: DBMove) -> MoveRecord:
        return MoveRecord(
            game_id=move_db.game_id,
            turn_number=move_db.turn_number,
            party=move_db.party,
            kind=move_db.kind,
            data=move_db.data,
            created_at=move_db.created_at,
        )
