"""
Validation and application of a single action.

Key idea: the resolver is a state transition function (GameState, Action) -> (GameState, winner?).
It works on a copy of the state and never touches the Game it is given; turn bookkeeping,
finishing the game and logging the move are left to the caller (Game.play / the Service).
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Optional, Protocol

from lasthit.core.exceptions import MoveError, StateError, TurnError
from lasthit.core.shared_types import ActionKind, Direction, Party, Status
from lasthit.game.actions import Action
from lasthit.game.board import Cell
from lasthit.game.position import Position
from lasthit.game.state import GameState


class Effect(StrEnum):
    MOVED = "moved"
    WALL_DESTROYED = "wall_destroyed"
    HIT = "hit"
    MISSED = "missed"
    DEFENDED = "defended"


@dataclass(frozen=True)
class Resolution:
    """Outcome of one resolved action."""

    state: GameState
    effect: Effect
    winner: Optional[Party] = None
    # destination of a move, the destroyed wall, or the cell of the opponent that got hit
    target: Optional[Position] = None


class Resolvable(Protocol):
    """Just the parts of a Game the resolver needs"""

    status: Status
    state: GameState


ActionHandler = Callable[[GameState, Action, Party], Resolution]


def resolve(game: Resolvable, action: Action, party: Party) -> Resolution:
    """
    Validate and apply an action
    ----

    Checks run in order, the first failure wins:
    1. the game must be playing
    2. it must be the acting party's turn
    3. the action itself must be valid (see the handlers below)
    """
    if game.status != Status.PLAYING:
        raise StateError(f"not playing (status: {game.status})")

    if game.state.turn_party != party:
        raise TurnError(
            f"not your turn: waiting for {game.state.turn_party} to make a move first"
        )

    handler = ACTION_HANDLERS[action.kind]
    return handler(game.state.copy(), action, party)


# --- ACTION HANDLERS ---
def _resolve_move(state: GameState, action: Action, party: Party) -> Resolution:
    direction = _require_direction(action)
    destination = state.position_of(party).shifted(direction)

    cell = state.board.cell_kind(destination)
    if cell == Cell.OUT_OF_BOUNDS:
        raise MoveError(f"out of bounds: cannot move {direction} to {destination}")
    if cell != Cell.EMPTY:
        raise MoveError(f"occupied: {destination} holds {cell.name.lower()}")

    state.move_party(party, destination)
    return Resolution(state, Effect.MOVED, target=destination)


def _resolve_attack(state: GameState, action: Action, party: Party) -> Resolution:
    """
    Follow the ray until it hits something
    ---

    * the opponent: game over, the attacker wins (nothing on the board changes)
    * a wall: the wall is destroyed and the ray stops there
    * nothing at all: a miss, which still costs the turn
    """
    direction = _require_direction(action)
    origin = state.position_of(party)
    opponent_position = state.position_of(party.opponent)

    for pos in state.board.attack_path(origin, direction):
        if pos == opponent_position:
            return Resolution(state, Effect.HIT, winner=party, target=pos)

        if state.board.destroy_wall(pos):
            return Resolution(state, Effect.WALL_DESTROYED, target=pos)

    return Resolution(state, Effect.MISSED)


def _resolve_defend(state: GameState, action: Action, party: Party) -> Resolution:
    # No protective effect (yet): defending just passes the turn
    return Resolution(state, Effect.DEFENDED)


def _require_direction(action: Action) -> Direction:
    if action.direction is None:
        raise MoveError(f"invalid move: {action.kind} needs a direction")
    return action.direction


ACTION_HANDLERS: dict[ActionKind, ActionHandler] = {
    ActionKind.MOVE: _resolve_move,
    ActionKind.ATTACK: _resolve_attack,
    ActionKind.DEFEND: _resolve_defend,
}
