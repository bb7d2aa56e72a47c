"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Self


class Player(StrEnum):
    RUBY = "RUBY"
    BLUE = "BLUE"

    def opponent(self) -> Self:
        return Player.BLUE if self == Player.RUBY else Player.RUBY


# RUBY always opens the game
INITIAL_PLAYER = Player.RUBY


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    WON = "won"
    DRAW = "draw"
