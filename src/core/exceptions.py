"""
Custom exceptions raised by the domain, service and persistence layers.

Everything derives from GameError, so the transport layer can catch a single type
and decide on the representation (e.g. a 4xx status code) based on the subclass.
"""

from uuid import UUID


class GameError(Exception):
    """Base class for all expected (recoverable) errors of the game backend."""


# --- Request validation ---
class InvalidRequestError(GameError):
    """Request data could not be interpreted."""


# --- Persistence ---
class RepositoryError(GameError):
    """Something went wrong when fetching / storing a game."""


class GameNotFoundError(RepositoryError):
    def __init__(self, game_id: UUID) -> None:
        self.game_id = game_id
        super().__init__(f"Game with id [{game_id}] not found")


class ConcurrentUpdateError(RepositoryError):
    """Another transaction changed the same game in the meantime."""

    def __init__(self, game_id: UUID) -> None:
        self.game_id = game_id
        super().__init__(
            f"Game [{game_id}] was modified by another request. Fetch it again and retry."
        )


# --- Domain ---
class GameStateError(GameError):
    """Stored game data is inconsistent with the rules of the game."""


class IllegalMoveError(GameError):
    """A move was rejected. Carries the id of the game it was attempted in."""

    def __init__(self, game_id: UUID, message: str) -> None:
        self.game_id = game_id
        super().__init__(message)


class GameOverError(IllegalMoveError):
    pass


class NotYourTurnError(IllegalMoveError):
    pass


class InvalidColumnError(IllegalMoveError):
    pass


class ColumnFullError(IllegalMoveError):
    pass
