"""Wiring of the layers: configuration -> logging -> database session -> repository -> service.

A transport layer (HTTP router, CLI, ...) opens a service per request:

    with open_service() as service:
        service.make_move(MoveRequest(game_id=..., column=3, player=Player.RUBY))
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from src.core.config import Settings, load_settings
from src.core.log_config import setup_logging
from src.db.database import session_factory
from src.db.sql_repository import SQLGameRepository
from src.services.connect4_service import Connect4Service

logger = logging.getLogger(__name__)


def configure(settings: Optional[Settings] = None) -> Settings:
    """Read the settings (from the environment if none are given) and set up logging accordingly."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)
    return settings


@contextmanager
def open_service(settings: Optional[Settings] = None) -> Iterator[Connect4Service]:
    """Service backed by the configured database. The session is closed when the block ends."""
    settings = configure(settings)
    with session_factory(settings)() as db:
        logger.debug("Opened database session")
        yield Connect4Service(SQLGameRepository(db), settings)
