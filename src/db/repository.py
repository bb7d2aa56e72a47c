"""Protocol repository (implemented with SQLAlchemy and as a simple in-memory store)"""

from contextlib import AbstractContextManager
from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def transaction(self) -> AbstractContextManager[None]:
        """Scope in which reads and writes of a game happen all-or-nothing.

        Commits when the block finishes, rolls back if it raises.
        """
        ...

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def save(self, game: GameModel) -> GameModel:
        """Insert the game, or overwrite the existing record with the same ID."""
        ...

    def find_recent(self, limit: int) -> list[GameModel]:
        """The `limit` most recently started games, newest first."""
        ...
