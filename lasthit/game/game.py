"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

from dataclasses import dataclass
from typing import Optional, Self

from lasthit.core.exceptions import StateError, ValidationError
from lasthit.core.models import GameModel
from lasthit.core.shared_types import Party, Status, Winner
from lasthit.game.actions import Action
from lasthit.game.party import PartySpec
from lasthit.game.resolver import Resolution, resolve
from lasthit.game.state import GameState, restore, snapshot


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    players: dict[Party, PartySpec]
    state: GameState
    status: Status
    winner: Optional[Winner] = None

    @classmethod
    def new_game(cls, player1: PartySpec, player2: PartySpec) -> Self:
        """A fresh game on the starting board. It still needs to be started before anyone can act."""
        return cls(
            players={Party.PLAYER1: player1, Party.PLAYER2: player2},
            state=GameState.initial(),
            status=Status.WAITING,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in Status.__members__.values():
            raise ValidationError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(Status)}"
            )
        if model.winner is not None and model.winner not in Winner.__members__.values():
            raise ValidationError(f"Invalid winner: {model.winner!r}")

        # create the Game
        players = {
            Party.PLAYER1: PartySpec.from_values(model.player1_kind, model.player1_ref),
            Party.PLAYER2: PartySpec.from_values(model.player2_kind, model.player2_ref),
        }
        state = restore(model.game_state)
        winner = Winner(model.winner) if model.winner is not None else None
        return cls(players, state, Status(model.status), winner)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        player1 = self.players[Party.PLAYER1]
        player2 = self.players[Party.PLAYER2]
        return GameModel(
            player1_kind=player1.kind.value,
            player1_ref=player1.reference,
            player2_kind=player2.kind.value,
            player2_ref=player2.reference,
            status=self.status.value,
            game_state=snapshot(self.state),
            winner=self.winner.value if self.winner else None,
        )

    def start(self) -> None:
        if self.status != Status.WAITING:
            raise StateError(
                f"Cannot start this game. Game is not waiting to start. status: {self.status}"
            )
        self._change_status(Status.PLAYING)

    def play(self, action: Action, party: Party) -> Resolution:
        """
        Attempt an action
        -----

        1. resolve the action (raises if it is not allowed)
        2. take over (a copy of) the resulting state
        3. a hit ends the game with the attacker as winner
        4. otherwise check the remaining end condition (collision -> draw)
        5. otherwise pass the turn to the opponent

        The returned resolution keeps the state as it was right after the action, before the turn passed.
        """
        resolution = resolve(self, action, party)
        self.state = resolution.state.copy()

        if resolution.winner is not None:
            self.finish(Winner.from_party(resolution.winner))
            return resolution

        winner = self._check_win_condition()
        if winner is not None:
            self.finish(winner)
        else:
            self.state.pass_turn()
        return resolution

    def finish(self, winner: Winner) -> None:
        if self.status == Status.FINISHED:
            raise StateError(f"Game already finished. winner: {self.winner}")
        self.winner = winner
        self._change_status(Status.FINISHED)

    # --- QUERIES ---
    def party_spec(self, party: Party) -> PartySpec:
        return self.players[party]

    def turn_party_spec(self) -> PartySpec:
        return self.players[self.state.turn_party]

    def is_com_turn(self) -> bool:
        """A COM party is to move in a game that is still going."""
        return self.status == Status.PLAYING and self.turn_party_spec().is_com

    # -- PRIVATE HELPERS ---
    def _check_win_condition(self) -> Optional[Winner]:
        """Both parties on the same cell is a draw. (A hit is already reported by the resolver.)"""
        if self.state.player1_position == self.state.player2_position:
            return Winner.DRAW
        return None

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
