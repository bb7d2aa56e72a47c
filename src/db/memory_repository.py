"""Implementation of (Game)Repository keeping everything in a dictionary. Handy for tests and a single-process setup."""

from contextlib import contextmanager
from copy import deepcopy
from threading import RLock
from typing import Iterator
from uuid import UUID

from src.core.models import GameModel


class InMemoryGameRepository:
    """Games stored in a dict. A transaction holds the (re-entrant) lock, so transactions run one at a time."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}
        self._lock = RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Roll back to the state before the block if it raises."""
        with self._lock:
            snapshot = deepcopy(self._games)
            try:
                yield
            except Exception:
                self._games = snapshot
                raise

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists. Returns a copy: changes only count once saved."""
        with self._lock:
            game = self._games.get(game_id)
            return deepcopy(game) if game is not None else None

    def save(self, game: GameModel) -> GameModel:
        """Insert the game, or overwrite the existing record with the same ID."""
        with self._lock:
            self._games[game.game_id] = deepcopy(game)
            return deepcopy(game)

    def find_recent(self, limit: int) -> list[GameModel]:
        """The `limit` most recently started games, newest first."""
        with self._lock:
            games = sorted(
                self._games.values(), key=lambda game: game.start_time, reverse=True
            )
            return [deepcopy(game) for game in games[:limit]]
