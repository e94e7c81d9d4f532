"""Protocol repository (implemented with SQLAlchemy in sql_repository.py, with a dictionary in the tests)"""

from typing import Optional, Protocol
from uuid import UUID

from lasthit.core.models import GameModel, MoveRecord


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record (and its move log)."""
        ...

    def list_games(
        self, limit: int, offset: int, status: Optional[str] = None
    ) -> list[tuple[UUID, GameModel]]:
        """Page through the games, newest first. Optionally only the ones with the given status."""
        ...

    def append_move(self, record: MoveRecord) -> MoveRecord:
        """Add an entry to the move log of a game."""
        ...

    def list_moves(self, game_id: UUID) -> list[MoveRecord]:
        """Move log of a game, by turn number (then insertion order)."""
        ...
