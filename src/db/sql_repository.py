"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from src.core.exceptions import ConcurrentUpdateError
from src.core.models import GameModel, MoveModel
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy

    Concurrent writes to the same game are caught by the version counter of DBGame:
    an UPDATE based on an outdated read matches no row, and the save is refused.
    """

    def __init__(self, db_session: Session) -> None:
        self.db = db_session
        self._in_transaction = False

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit everything done inside the block at once. Roll back on any error."""
        if self._in_transaction:
            # nested use joins the outer transaction
            yield
            return

        self._in_transaction = True
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._in_transaction = False

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def save(self, game: GameModel) -> GameModel:
        """Insert the game, or overwrite the existing record with the same ID."""
        game_db = self._fetch_game(game.game_id)
        if game_db is None:
            game_db = DBGame(id=game.game_id, start_time=game.start_time)
            self.db.add(game_db)
        game_db.rows = game.rows
        game_db.columns = game.columns
        game_db.moves = [self._move_to_json(move) for move in game.moves]
        game_db.turn = game.turn
        game_db.winner = game.winner
        game_db.is_over = game.is_over

        try:
            if self._in_transaction:
                # emit the UPDATE (and its version check) now, the commit happens when the transaction ends
                self.db.flush()
            else:
                self.db.commit()
        except StaleDataError as exc:
            if not self._in_transaction:
                self.db.rollback()
            logger.warning("Concurrent update of game %s refused", game.game_id)
            raise ConcurrentUpdateError(game.game_id) from exc
        return self._to_model(game_db)

    def find_recent(self, limit: int) -> list[GameModel]:
        """The `limit` most recently started games, newest first."""
        query = select(DBGame).order_by(DBGame.start_time.desc()).limit(limit)
        return [self._to_model(game_db) for game_db in self.db.scalars(query)]

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    @staticmethod
    def _move_to_json(move: MoveModel) -> dict[str, Any]:
        return {"column": move.column, "row": move.row, "player": move.player}

    @staticmethod
    def _as_utc(moment: datetime) -> datetime:
        # SQLite hands back naive datetimes. We only ever store UTC.
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            game_id=game_db.id,
            rows=game_db.rows,
            columns=game_db.columns,
            moves=[
                MoveModel(
                    column=move["column"], row=move["row"], player=move["player"]
                )
                for move in game_db.moves
            ],
            turn=game_db.turn,
            winner=game_db.winner,
            is_over=game_db.is_over,
            start_time=self._as_utc(game_db.start_time),
        )
