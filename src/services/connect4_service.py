"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    GetGameRequest,
    ListGamesRequest,
    MoveRequest,
    MoveResponse,
)
from src.connect4.game import Game
from src.core.config import Settings
from src.core.exceptions import GameNotFoundError, IllegalMoveError
from src.core.models import GameModel
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class Connect4Service:
    """Orchestration of layers for a Connect Four game."""

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings or Settings()

    # -- API routes logic ---
    def start_new_game(
        self, request: Optional[CreateGameRequest] = None
    ) -> GameResponse:
        """Create a new, empty game. RUBY moves first."""
        request = request or CreateGameRequest()
        new_game = Game.new_game(
            rows=request.rows or self.settings.rows,
            columns=request.columns or self.settings.columns,
        )

        with self.repo.transaction():
            stored_game = self.repo.save(new_game.to_model())

        logger.info(
            "Started game %s (%dx%d)",
            stored_game.game_id,
            stored_game.rows,
            stored_game.columns,
        )
        return self._create_game_response(stored_game)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt.

        Read, validate, update and write happen in one transaction: a rejected move leaves the stored game untouched,
        and of two moves racing on the same game at most one gets stored.
        """
        with self.repo.transaction():
            # Retrieve persisted GameModel from repository
            stored_model = self._fetch_game(request.game_id)

            # Create a new Game instance from the retrieved GameModel
            game = Game.from_model(stored_model)

            # Attempt the move
            try:
                move = game.make_move(request.column, request.player)
            except IllegalMoveError as exc:
                logger.info("Rejected move in game %s: %s", request.game_id, exc)
                raise

            # store in repository
            after_move = self.repo.save(game.to_model())

        logger.debug(
            "Game %s: %s dropped a disc in column %d (row %d)",
            game.game_id,
            move.player,
            move.column,
            move.row,
        )
        if game.is_over:
            logger.info(
                "Game %s is over. Winner: %s", game.game_id, game.winner or "none (draw)"
            )

        return self._create_game_response(after_move)

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state."""
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(game_model)

    def list_games(self, request: Optional[ListGamesRequest] = None) -> list[GameResponse]:
        """Most recently started games first."""
        request = request or ListGamesRequest()
        limit = request.limit or self.settings.recent_games_limit
        return [
            self._create_game_response(model) for model in self.repo.find_recent(limit)
        ]

    # -- Internal helpers --
    def _create_game_response(self, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse."""
        game = Game.from_model(model)
        return GameResponse(
            game_id=game.game_id,
            board=game.board.to_rows(),
            moves=[
                MoveResponse(column=move.column, row=move.row, player=move.player)
                for move in game.moves
            ],
            turn=game.turn,
            winner=game.winner,
            is_over=game.is_over,
            status=game.status,
            start_time=game.start_time,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(game_id)
        return game_model
