"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

# Type alias to make the models easier to read
PlayerName = str


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MoveModel:
    """A single accepted move: the column played, the row the disc landed in, and who played it."""

    column: int
    row: int
    player: PlayerName


@dataclass
class GameModel:
    """Transport-safe representation of a Connect Four game used between API, Service, DB, and Game layers."""

    game_id: UUID
    rows: int
    columns: int
    moves: list[MoveModel]
    turn: PlayerName
    winner: Optional[PlayerName]
    is_over: bool
    start_time: datetime
