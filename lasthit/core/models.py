"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

# Type alias to make GameModel easier to read
StateSnapshot = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service, DB, and Game layers."""

    player1_kind: str
    player1_ref: Optional[str]
    player2_kind: str
    player2_ref: Optional[str]
    status: str
    game_state: StateSnapshot
    winner: Optional[str] = None
    # Filled in by the persistence layer
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class MoveRecord:
    """One entry of the append-only move log of a game."""

    game_id: UUID
    turn_number: int
    party: str
    kind: str
    data: str  # JSON text of the action
    created_at: Optional[datetime] = None
