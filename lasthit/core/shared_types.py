"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class Party(StrEnum):
    """The two competing sides. player1 starts at the bottom and moves first."""

    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @property
    def opponent(self) -> "Party":
        return Party.PLAYER2 if self == Party.PLAYER1 else Party.PLAYER1


class PartyKind(StrEnum):
    HUMAN = "human"
    AI = "ai"
    COM = "com"


class Winner(StrEnum):
    PLAYER1 = "player1"
    PLAYER2 = "player2"
    DRAW = "draw"

    @classmethod
    def from_party(cls, party: Party) -> "Winner":
        return cls(party.value)


class ActionKind(StrEnum):
    MOVE = "move"
    ATTACK = "attack"
    DEFEND = "defend"


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Every directional search walks the directions in this order. Tie-breaks depend on it.
DIRECTION_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)

COM_LEVELS: tuple[str, ...] = ("1", "2", "3", "4")
