"""Unit tests for lasthit/game/resolver.py"""

from dataclasses import dataclass
from typing import Callable

import pytest

from lasthit.core.exceptions import MoveError, StateError, TurnError
from lasthit.core.shared_types import DIRECTION_ORDER, ActionKind, Direction, Party, Status
from lasthit.game.actions import Action
from lasthit.game.board import Cell
from lasthit.game.position import Position
from lasthit.game.resolver import Effect, resolve
from lasthit.game.state import GameState

StateFactory = Callable[..., GameState]


@dataclass
class MockGame:
    """The resolver only needs a status and a state."""

    status: Status
    state: GameState


def playing(state: GameState) -> MockGame:
    return MockGame(Status.PLAYING, state)


# --- PRECONDITIONS ---
@pytest.mark.parametrize("status", [Status.WAITING, Status.FINISHED])
def test_game_must_be_playing(status: Status) -> None:
    game = MockGame(status, GameState.initial())
    with pytest.raises(StateError, match="not playing"):
        resolve(game, Action.defend(), Party.PLAYER1)


def test_must_be_your_turn() -> None:
    game = playing(GameState.initial())
    with pytest.raises(TurnError, match="not your turn"):
        resolve(game, Action.defend(), Party.PLAYER2)


def test_status_is_checked_before_turn() -> None:
    """First failing check wins."""
    game = MockGame(Status.FINISHED, GameState.initial())
    with pytest.raises(StateError):
        resolve(game, Action.move(Direction.UP), Party.PLAYER2)


def test_turn_is_checked_before_the_move_itself() -> None:
    game = playing(GameState.initial())
    # player2 moving up would run into the border wall, but it is not its turn anyway
    game.state.move_party(Party.PLAYER2, Position(7, 1))
    with pytest.raises(TurnError):
        resolve(game, Action.move(Direction.UP), Party.PLAYER2)


def test_resolver_never_mutates_the_game() -> None:
    game = playing(GameState.initial())
    resolution = resolve(game, Action.move(Direction.UP), Party.PLAYER1)
    assert game.state == GameState.initial()
    assert resolution.state != game.state


# --- MOVE ---
def test_move_to_empty_cell() -> None:
    game = playing(GameState.initial())
    resolution = resolve(game, Action.move(Direction.UP), Party.PLAYER1)

    assert resolution.effect == Effect.MOVED
    assert resolution.target == Position(7, 11)
    assert resolution.winner is None
    state = resolution.state
    assert state.player1_position == Position(7, 11)
    assert state.board.cell_kind(Position(7, 11)) == Cell.PLAYER1
    assert state.board.cell_kind(Position(7, 12)) == Cell.EMPTY
    # turn bookkeeping is not the resolver's job
    assert state.current_turn == 1
    assert state.turn_party == Party.PLAYER1


def test_move_changes_exactly_two_cells() -> None:
    game = playing(GameState.initial())
    before = game.state.board.to_rows()
    after = resolve(game, Action.move(Direction.LEFT), Party.PLAYER1).state.board.to_rows()
    changed = [
        (x, y)
        for y in range(len(before))
        for x in range(len(before))
        if before[y][x] != after[y][x]
    ]
    assert sorted(changed) == [(6, 12), (7, 12)]


def test_move_into_wall_is_occupied() -> None:
    game = playing(GameState.initial())
    # (7, 13) is free, (7, 14) is the border
    game.state.move_party(Party.PLAYER1, Position(7, 13))
    with pytest.raises(MoveError, match="occupied"):
        resolve(game, Action.move(Direction.DOWN), Party.PLAYER1)


def test_move_into_opponent_is_occupied(make_state: StateFactory) -> None:
    game = playing(make_state(player1=(4, 4), player2=(4, 3)))
    with pytest.raises(MoveError, match="occupied"):
        resolve(game, Action.move(Direction.UP), Party.PLAYER1)


def test_move_off_the_board(make_state: StateFactory) -> None:
    game = playing(make_state(player1=(0, 14), player2=(7, 2)))
    with pytest.raises(MoveError, match="out of bounds"):
        resolve(game, Action.move(Direction.LEFT), Party.PLAYER1)
    with pytest.raises(MoveError, match="out of bounds"):
        resolve(game, Action.move(Direction.DOWN), Party.PLAYER1)


def test_move_without_direction() -> None:
    game = playing(GameState.initial())
    with pytest.raises(MoveError, match="invalid move"):
        resolve(game, Action(ActionKind.MOVE), Party.PLAYER1)


LEGALITY_WALLS = [(1, 1), (5, 6), (13, 14), (6, 7), (14, 13)]
# every start cell that is not a wall itself
LEGALITY_STARTS = [
    (x, y)
    for x in (0, 1, 5, 13, 14)
    for y in (0, 1, 7, 13, 14)
    if (x, y) not in LEGALITY_WALLS
]


@pytest.mark.parametrize("x, y", LEGALITY_STARTS)
@pytest.mark.parametrize("direction", DIRECTION_ORDER)
def test_move_legality(make_state: StateFactory, x: int, y: int, direction: Direction) -> None:
    """A move succeeds exactly when the destination is on the board and empty."""
    state = make_state(player1=(x, y), player2=(2, 7), walls=LEGALITY_WALLS)
    game = playing(state)

    destination = Position(x, y).shifted(direction)
    expected_legal = state.board.cell_kind(destination) == Cell.EMPTY

    if expected_legal:
        resolution = resolve(game, Action.move(direction), Party.PLAYER1)
        assert resolution.state.player1_position == destination
    else:
        with pytest.raises(MoveError):
            resolve(game, Action.move(direction), Party.PLAYER1)


# --- ATTACK ---
def test_attack_destroys_first_wall_only(make_state: StateFactory) -> None:
    """Wall 3 cells away, another wall behind it: only the first one goes."""
    game = playing(make_state(player1=(4, 10), player2=(12, 2), walls=[(4, 7), (4, 5)]))
    resolution = resolve(game, Action.attack(Direction.UP), Party.PLAYER1)

    assert resolution.effect == Effect.WALL_DESTROYED
    assert resolution.target == Position(4, 7)
    assert resolution.winner is None
    board = resolution.state.board
    assert board.cell_kind(Position(4, 7)) == Cell.EMPTY
    assert board.cell_kind(Position(4, 5)) == Cell.WALL
    assert board.walls() == [Position(4, 5)]
    assert resolution.state.player1_position == Position(4, 10)


def test_attack_hits_opponent(make_state: StateFactory) -> None:
    """A clear ray to the opponent ends the game. Nothing on the board changes."""
    state = make_state(player1=(2, 9), player2=(11, 9), walls=[(13, 9)])
    game = playing(state)
    resolution = resolve(game, Action.attack(Direction.RIGHT), Party.PLAYER1)

    assert resolution.effect == Effect.HIT
    assert resolution.winner == Party.PLAYER1
    assert resolution.target == Position(11, 9)
    assert resolution.state == state


def test_opponent_behind_a_wall_is_safe(make_state: StateFactory) -> None:
    game = playing(make_state(player1=(7, 12), player2=(7, 2), walls=[(7, 7)]))
    resolution = resolve(game, Action.attack(Direction.UP), Party.PLAYER1)
    assert resolution.effect == Effect.WALL_DESTROYED
    assert resolution.winner is None
    assert resolution.state.player2_position == Position(7, 2)


def test_player2_can_win_too(make_state: StateFactory) -> None:
    game = playing(make_state(player1=(7, 12), player2=(7, 2), turn_party=Party.PLAYER2))
    resolution = resolve(game, Action.attack(Direction.DOWN), Party.PLAYER2)
    assert resolution.winner == Party.PLAYER2


def test_attack_misses(make_state: StateFactory) -> None:
    state = make_state(player1=(7, 12), player2=(7, 2))
    game = playing(state)
    resolution = resolve(game, Action.attack(Direction.LEFT), Party.PLAYER1)
    assert resolution.effect == Effect.MISSED
    assert resolution.winner is None
    assert resolution.target is None
    assert resolution.state == state


def test_attack_from_the_edge_outwards_misses(make_state: StateFactory) -> None:
    game = playing(make_state(player1=(0, 3), player2=(7, 2)))
    resolution = resolve(game, Action.attack(Direction.LEFT), Party.PLAYER1)
    assert resolution.effect == Effect.MISSED


def test_attack_without_direction() -> None:
    game = playing(GameState.initial())
    with pytest.raises(MoveError, match="invalid move"):
        resolve(game, Action(ActionKind.ATTACK), Party.PLAYER1)


# --- DEFEND ---
def test_defend_changes_nothing() -> None:
    state = GameState.initial()
    resolution = resolve(playing(state), Action.defend(), Party.PLAYER1)
    assert resolution.effect == Effect.DEFENDED
    assert resolution.winner is None
    assert resolution.state == state
