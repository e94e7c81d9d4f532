"""Requests and Response models"""

from datetime import datetime
from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from lasthit.core.config import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT
from lasthit.core.exceptions import InvalidRequestError
from lasthit.core.shared_types import (
    ActionKind,
    Direction,
    Party,
    PartyKind,
    Status,
    Winner,
)


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player1_type: PartyKind
    player1_id: Optional[str] = None  # AI id or COM level
    player2_type: PartyKind
    player2_id: Optional[str] = None

    @field_validator("player1_id", "player2_id")
    @classmethod
    def strip_reference(cls, value: Optional[str]) -> Optional[str]:
        # An empty string means "no reference"; the kind/reference combination is checked by the domain layer
        if value is None:
            return value
        return value.strip() or None


class StartGameRequest(BaseModel):
    game_id: UUID


class ActionRequest(BaseModel):
    game_id: UUID
    player: Party
    action: ActionKind
    direction: Optional[Direction] = None

    @model_validator(mode="after")
    def validate_direction(self) -> Self:
        # defend ignores the direction, move and attack cannot do without
        if self.direction is None and self.action != ActionKind.DEFEND:
            raise InvalidRequestError(f"A {self.action} action needs a direction.")
        return self


class ComTurnRequest(BaseModel):
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID


class ListGamesRequest(BaseModel):
    limit: int = DEFAULT_LIST_LIMIT
    offset: int = 0
    status: Optional[Status] = None

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, value: int) -> int:
        if not 1 <= value <= MAX_LIST_LIMIT:
            raise InvalidRequestError(
                f"limit must be between 1 and {MAX_LIST_LIMIT}, got {value}."
            )
        return value

    @field_validator("offset")
    @classmethod
    def validate_offset(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"offset cannot be negative, got {value}.")
        return value


class GetHistoryRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PositionResponse(BaseModel):
    x: int
    y: int


class PartyResponse(BaseModel):
    type: PartyKind
    id: Optional[str]


class GameResponse(BaseModel):
    game_id: UUID
    player1: PartyResponse
    player2: PartyResponse
    status: Status
    board: list[list[int]]
    player1_position: PositionResponse
    player2_position: PositionResponse
    current_turn: int
    turn_player: Party
    winner: Optional[Winner]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GameListResponse(BaseModel):
    games: list[GameResponse]
    limit: int
    offset: int


class MoveResponse(BaseModel):
    turn_number: int
    player: Party
    move_type: ActionKind
    move_data: str
    created_at: Optional[datetime] = None


class HistoryResponse(BaseModel):
    game_id: UUID
    moves: list[MoveResponse]
