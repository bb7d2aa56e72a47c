"""Definitions of moves: the one a player proposes, and the one the game records."""

from dataclasses import dataclass
from typing import Self

from src.core.models import MoveModel
from src.core.shared_types import Player


@dataclass(frozen=True)
class PlayerMove:
    """What a player asks for: drop a disc in this column. Where it lands is for the board to decide."""

    column: int
    player: Player


@dataclass(frozen=True)
class Move:
    """An accepted move, including the row where the disc came to rest."""

    column: int
    row: int
    player: Player

    @classmethod
    def from_model(cls, model: MoveModel) -> Self:
        return cls(model.column, model.row, Player(model.player))

    def to_model(self) -> MoveModel:
        return MoveModel(column=self.column, row=self.row, player=str(self.player))
