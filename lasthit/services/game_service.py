"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from random import Random
from typing import Optional
from uuid import UUID

from lasthit.api.models import (
    ActionRequest,
    ComTurnRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameListResponse,
    GameResponse,
    GetGameRequest,
    GetHistoryRequest,
    HistoryResponse,
    ListGamesRequest,
    MoveResponse,
    PartyResponse,
    PositionResponse,
    StartGameRequest,
)
from lasthit.core.config import AUTO_PLAY_COM
from lasthit.core.exceptions import GameError, NotFoundError, StateError, TurnError
from lasthit.core.models import GameModel, MoveRecord
from lasthit.core.shared_types import Party, Status
from lasthit.db.repository import GameRepository
from lasthit.game.actions import Action
from lasthit.game.game import Game
from lasthit.game.opponent import decide
from lasthit.game.party import PartySpec
from lasthit.game.state import restore

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for the game."""

    def __init__(
        self,
        repository: GameRepository,
        rng: Optional[Random] = None,
        auto_play_com: bool = AUTO_PLAY_COM,
    ) -> None:
        self.repo = repository
        self.rng = rng or Random()
        self.auto_play_com = auto_play_com

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Create a new game, waiting to be started."""

        # Validate the parties and create a new Game, then convert into GameModel
        player1 = PartySpec.from_values(request.player1_type, request.player1_id)
        player2 = PartySpec.from_values(request.player2_type, request.player2_id)
        new_game = Game.new_game(player1, player2)

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            f"Game {game_id}: created ({player1.kind} {player1.reference or ''} vs {player2.kind} {player2.reference or ''})"
        )
        return self._create_game_response(game_id, stored_game)

    def start_game(self, request: StartGameRequest) -> GameResponse:
        """Start a waiting game. If a COM party moves first, it plays its turn right away."""
        game = Game.from_model(self._fetch_game(request.game_id))
        game.start()
        stored_model = self._store_game(request.game_id, game)
        logger.info(f"Game {request.game_id}: started")

        if self.auto_play_com and game.is_com_turn():
            stored_model = self._play_com_turn(request.game_id, game)
        return self._create_game_response(request.game_id, stored_model)

    def submit_action(self, request: ActionRequest) -> GameResponse:
        """
        A party submits an action for its turn.
        ----

        If the opponent is a COM party, it answers with its own turn before we return.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        action = Action(request.action, request.direction)
        stored_model = self._apply_action(request.game_id, game, action, request.player)

        if self.auto_play_com and game.is_com_turn():
            stored_model = self._play_com_turn(request.game_id, game)
        return self._create_game_response(request.game_id, stored_model)

    def play_com_turn(self, request: ComTurnRequest) -> GameResponse:
        """Let the COM party whose turn it is play one action (e.g. to step through a COM vs COM game)."""
        game = Game.from_model(self._fetch_game(request.game_id))
        if game.status != Status.PLAYING:
            raise StateError(f"not playing (status: {game.status})")
        if not game.turn_party_spec().is_com:
            raise TurnError(
                f"Current player {game.state.turn_party} is not COM ({game.turn_party_spec().kind})."
            )
        stored_model = self._play_com_turn(request.game_id, game)
        return self._create_game_response(request.game_id, stored_model)

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def list_games(self, request: ListGamesRequest) -> GameListResponse:
        """Show recorded games, newest first."""
        status = request.status.value if request.status else None
        records = self.repo.list_games(request.limit, request.offset, status)
        return GameListResponse(
            games=[
                self._create_game_response(game_id, model) for game_id, model in records
            ],
            limit=request.limit,
            offset=request.offset,
        )

    def get_history(self, request: GetHistoryRequest) -> HistoryResponse:
        """The move log of a game, in the order the moves were played."""
        self._fetch_game(request.game_id)
        moves = self.repo.list_moves(request.game_id)
        return HistoryResponse(
            game_id=request.game_id,
            moves=[self._create_move_response(record) for record in moves],
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record (its move log goes with it)."""
        deleted = self.repo.delete_game(request.game_id)
        if deleted is None:
            raise NotFoundError(f"Game with game_id={request.game_id} not found.")
        logger.info(f"Game {request.game_id}: deleted")

    # -- Internal helpers --
    def _apply_action(
        self, game_id: UUID, game: Game, action: Action, party: Party
    ) -> GameModel:
        """Play the action, log it, and persist the new state. One code path for humans, AIs and COM parties."""
        turn_number = game.state.current_turn
        try:
            resolution = game.play(action, party)
        except GameError as e:
            logger.warning(f"Game {game_id}: rejected {action.kind} by {party}: {e}")
            raise

        self.repo.append_move(
            MoveRecord(
                game_id=game_id,
                turn_number=turn_number,
                party=party.value,
                kind=action.kind.value,
                data=action.to_json(),
            )
        )
        stored_model = self._store_game(game_id, game)
        logger.info(
            f"Game {game_id}: turn {turn_number} {party} {action.kind} {action.direction or ''} -> {resolution.effect}"
        )
        if game.status == Status.FINISHED:
            logger.info(f"Game {game_id}: finished, winner: {game.winner}")
        return stored_model

    def _play_com_turn(self, game_id: UUID, game: Game) -> GameModel:
        party = game.state.turn_party
        level = game.turn_party_spec().reference
        # PartySpec guarantees a COM party carries its level
        assert level is not None
        action = decide(game.state, level, party, self.rng)
        logger.info(
            f"Game {game_id}: COM level {level} ({party}) plays {action.kind} {action.direction or ''}"
        )
        return self._apply_action(game_id, game, action, party)

    def _store_game(self, game_id: UUID, game: Game) -> GameModel:
        stored_model = self.repo.update_game(game_id, game.to_model())
        if stored_model is None:
            raise NotFoundError(f"Game with {game_id=} not found.")
        return stored_model

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        state = restore(model.game_state)
        return GameResponse(
            game_id=game_id,
            player1=PartyResponse(type=model.player1_kind, id=model.player1_ref),
            player2=PartyResponse(type=model.player2_kind, id=model.player2_ref),
            status=model.status,
            board=state.board.to_rows(),
            player1_position=PositionResponse(**state.player1_position.to_dict()),
            player2_position=PositionResponse(**state.player2_position.to_dict()),
            current_turn=state.current_turn,
            turn_player=state.turn_party,
            winner=model.winner,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _create_move_response(self, record: MoveRecord) -> MoveResponse:
        return MoveResponse(
            turn_number=record.turn_number,
            player=record.party,
            move_type=record.kind,
            move_data=record.data,
            created_at=record.created_at,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise NotFoundError(f"Game with {game_id=} not found.")
        return game_model
