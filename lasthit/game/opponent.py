"""
Decision making for COM parties.

Key idea: every tactic is a plain function (state, party, rng) -> Action | None.
A difficulty level is nothing more than a fixed sequence of tactics: the first one that returns an action decides.
Each level ends with the whole chain of the level below it, and level 1 (a random pick) always decides.
"""

import logging
from random import Random
from typing import Callable, Optional

from lasthit.core.exceptions import ValidationError
from lasthit.core.shared_types import COM_LEVELS, DIRECTION_ORDER, Direction, Party
from lasthit.game.actions import Action
from lasthit.game.position import Position
from lasthit.game.state import GameState

logger = logging.getLogger(__name__)

Tactic = Callable[[GameState, Party, Random], Optional[Action]]


# --- HELPERS ---
def valid_actions(state: GameState, party: Party) -> list[Action]:
    """
    Every action worth considering
    ---

    For each direction (up, down, left, right): a move if the destination is free, and an attack (always allowed).
    Defend is always allowed and comes last.
    """
    position = state.position_of(party)
    actions: list[Action] = []
    for direction in DIRECTION_ORDER:
        if state.board.is_occupiable(position.shifted(direction)):
            actions.append(Action.move(direction))
        actions.append(Action.attack(direction))
    actions.append(Action.defend())
    return actions


def is_direction_towards(origin: Position, target: Position, direction: Direction) -> bool:
    """Only the sign of the coordinate difference counts. No line of sight check."""
    if direction == Direction.UP:
        return target.y < origin.y
    if direction == Direction.DOWN:
        return target.y > origin.y
    if direction == Direction.LEFT:
        return target.x < origin.x
    return target.x > origin.x


def is_in_danger(state: GameState, party: Party) -> bool:
    """Can the opponent hit us with an attack from where it stands right now?"""
    position = state.position_of(party)
    opponent_position = state.position_of(party.opponent)
    return any(
        position in state.board.attack_path(opponent_position, direction)
        for direction in DIRECTION_ORDER
    )


# --- TACTICS ---
def random_action(state: GameState, party: Party, rng: Random) -> Optional[Action]:
    actions = valid_actions(state, party)
    if not actions:
        return Action.defend()
    return rng.choice(actions)


def attack_toward_opponent(
    state: GameState, party: Party, rng: Random
) -> Optional[Action]:
    position = state.position_of(party)
    opponent_position = state.position_of(party.opponent)
    for direction in DIRECTION_ORDER:
        if is_direction_towards(position, opponent_position, direction):
            return Action.attack(direction)
    return None


def move_toward_opponent(
    state: GameState, party: Party, rng: Random
) -> Optional[Action]:
    """Step to the free neighbouring cell closest (squared euclidean distance) to the opponent. First one wins ties."""
    position = state.position_of(party)
    opponent_position = state.position_of(party.opponent)

    best_direction: Optional[Direction] = None
    best_distance: Optional[int] = None
    for direction in DIRECTION_ORDER:
        destination = position.shifted(direction)
        if not state.board.is_occupiable(destination):
            continue
        distance = destination.squared_distance(opponent_position)
        if best_distance is None or distance < best_distance:
            best_direction, best_distance = direction, distance

    if best_direction is None:
        return None
    return Action.move(best_direction)


def evade_if_threatened(
    state: GameState, party: Party, rng: Random
) -> Optional[Action]:
    """When the opponent has a clear shot at us, take the first free step away."""
    if not is_in_danger(state, party):
        return None

    position = state.position_of(party)
    for direction in DIRECTION_ORDER:
        if state.board.is_occupiable(position.shifted(direction)):
            return Action.move(direction)
    return None


# --- DIFFICULTY LEVELS ---
LEVEL_1: tuple[Tactic, ...] = (random_action,)
LEVEL_2: tuple[Tactic, ...] = (attack_toward_opponent, move_toward_opponent, *LEVEL_1)
LEVEL_3: tuple[Tactic, ...] = (
    evade_if_threatened,
    attack_toward_opponent,
    move_toward_opponent,
    *LEVEL_2,
)
LEVEL_4: tuple[Tactic, ...] = (
    evade_if_threatened,
    attack_toward_opponent,
    move_toward_opponent,
    *LEVEL_3,
)

LEVELS: dict[str, tuple[Tactic, ...]] = dict(
    zip(COM_LEVELS, (LEVEL_1, LEVEL_2, LEVEL_3, LEVEL_4))
)


def first_decisive(*tactics: Tactic) -> Tactic:
    """Combine tactics into one: try them in order, return the first action found."""

    def _combined(state: GameState, party: Party, rng: Random) -> Optional[Action]:
        for tactic in tactics:
            action = tactic(state, party, rng)
            if action is not None:
                logger.debug(f"COM {party}: {tactic.__name__} chose {action}")
                return action
        return None

    return _combined


def decide(
    state: GameState, level: str, party: Party, rng: Optional[Random] = None
) -> Action:
    """Pick the action a COM party of the given difficulty level plays in this state."""
    if level not in LEVELS:
        raise ValidationError(
            f"invalid level: {level!r}. Pick one from {','.join(COM_LEVELS)}"
        )

    decision = first_decisive(*LEVELS[level])(state, party, rng or Random())
    # level 1 always decides, and every level ends with level 1
    assert decision is not None
    return decision
