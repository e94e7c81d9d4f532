"""
Custom exceptions.

Every error the domain or service layer raises derives from GameError, so the
layer on top (a router, a CLI, ...) can catch a single type and map the subclasses to its own status codes.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while handling a game."""


class ValidationError(GameError):
    """Malformed input: party kind/reference combination, COM level, snapshot data."""


class InvalidRequestError(ValidationError):
    """A request model could not be validated."""


class StateError(GameError):
    """Operation not allowed in the current status of the game."""


class TurnError(GameError):
    """Action submitted by the party that is not currently to move."""


class MoveError(GameError):
    """Destination out of bounds / occupied, or an action missing its direction."""


class NotFoundError(GameError):
    """The referenced game does not exist in the repository."""
