"""
The mutable part of a game: the grid, where both parties stand, and whose turn it is.
"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Self

from lasthit.core.exceptions import ValidationError
from lasthit.core.shared_types import Party
from lasthit.game.board import OCCUPANT_CELLS, START_POSITIONS, Board
from lasthit.game.position import BOARD_SIZE, Position

Snapshot = dict[str, Any]


@dataclass
class GameState:
    """
    Board + positions + turn bookkeeping.
    ----

    The positions are a cache of where the occupant cells are on the board. They only change through `move_party`,
    which updates grid and position together.
    """

    board: Board
    player1_position: Position
    player2_position: Position
    current_turn: int = 1
    turn_party: Party = Party.PLAYER1

    @classmethod
    def initial(cls) -> Self:
        return cls(
            board=Board.initial(),
            player1_position=START_POSITIONS[Party.PLAYER1],
            player2_position=START_POSITIONS[Party.PLAYER2],
        )

    def position_of(self, party: Party) -> Position:
        return (
            self.player1_position if party == Party.PLAYER1 else self.player2_position
        )

    def move_party(self, party: Party, destination: Position) -> None:
        """Relocate the occupant on the grid and the cached position in one go."""
        self.board.move_occupant(self.position_of(party), destination)
        if party == Party.PLAYER1:
            self.player1_position = destination
        else:
            self.player2_position = destination

    def pass_turn(self) -> None:
        self.current_turn += 1
        self.turn_party = self.turn_party.opponent

    def copy(self) -> Self:
        return deepcopy(self)


# --- SERIALIZATION ---
def snapshot(state: GameState) -> Snapshot:
    """JSON-compatible representation of the state (stored as-is in a JSON column)."""
    return {
        "board": state.board.to_rows(),
        "player1_position": state.player1_position.to_dict(),
        "player2_position": state.player2_position.to_dict(),
        "current_turn": state.current_turn,
        "turn_player": state.turn_party.value,
    }


def restore(data: Snapshot) -> GameState:
    """Reverse operation of `snapshot`. Rejects data that does not describe a consistent state."""
    try:
        board = Board.from_rows(data["board"])
        player1_position = Position.from_dict(data["player1_position"])
        player2_position = Position.from_dict(data["player2_position"])
        current_turn = int(data["current_turn"])
        turn_party = Party(data["turn_player"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Cannot restore game state from snapshot: {e}") from e

    if board.size != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in board.cells):
        raise ValidationError(f"Board in snapshot is not {BOARD_SIZE}x{BOARD_SIZE}.")
    if current_turn < 1:
        raise ValidationError(f"Turn number must be at least 1, got {current_turn}.")

    state = GameState(
        board, player1_position, player2_position, current_turn, turn_party
    )
    _check_positions_match_board(state)
    return state


def _check_positions_match_board(state: GameState) -> None:
    """Each party occupies exactly one cell: the one its position points at."""
    for party, cell in OCCUPANT_CELLS.items():
        position = state.position_of(party)
        found = state.board.locate(cell)
        if found != [position]:
            raise ValidationError(
                f"Snapshot places {party} at {position}, but the board has {cell.name} cells at {found}."
            )
