"""Generate database sessions"""

from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base


def create_db_engine(settings: Settings) -> Engine:
    """Engine for the configured database. Ensures all tables are created."""
    connect_args = (
        {"check_same_thread": False}
        if settings.database_url.startswith("sqlite")
        else {}
    )
    engine = create_engine(
        settings.database_url, echo=settings.echo_sql, connect_args=connect_args
    )
    Base.metadata.create_all(bind=engine)
    return engine


@lru_cache
def session_factory(settings: Settings) -> sessionmaker[Session]:
    """One engine (and connection pool) per distinct configuration."""
    return sessionmaker(bind=create_db_engine(settings))
