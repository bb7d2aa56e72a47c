"""Requests and Response models"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Player, Status

MAX_LISTED_GAMES = 100


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Board dimensions can be overridden per game. Leave them out to use the configured ones."""

    rows: Optional[int] = None
    columns: Optional[int] = None

    @field_validator(*["rows", "columns"])
    @classmethod
    def validate_dimension(cls, value: Optional[int]) -> Optional[int]:
        # a board smaller than 4 in either direction cannot hold a line of four in every direction
        if value is not None and value < 4:
            raise InvalidRequestError(
                f"Board dimensions must be at least 4. Got: {value}"
            )
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    # range of the column is checked by the game itself (depends on the board)
    column: int
    player: Player


class GetGameRequest(BaseModel):
    game_id: UUID


class ListGamesRequest(BaseModel):
    limit: Optional[int] = None

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        if not 1 <= value <= MAX_LISTED_GAMES:
            raise InvalidRequestError(
                f"Can list between 1 and {MAX_LISTED_GAMES} games. Got: {value}"
            )
        return value


# --- RESPONSE MODELS ---
class MoveResponse(BaseModel):
    column: int
    row: int
    player: Player


class GameResponse(BaseModel):
    game_id: UUID
    board: list[list[Optional[Player]]]  # bottom row first
    moves: list[MoveResponse]
    turn: Player
    winner: Optional[Player]
    is_over: bool
    status: Status
    start_time: datetime
