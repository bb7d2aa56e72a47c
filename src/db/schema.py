"""Database tables / schema"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.models import utc_now


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    rows: Mapped[int]
    columns: Mapped[int]
    # list of {"column": .., "row": .., "player": ..} in the order they were played
    moves: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    turn: Mapped[str]
    winner: Mapped[Optional[str]]
    is_over: Mapped[bool] = mapped_column(default=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
    # optimistic locking: every UPDATE checks (and bumps) the version it read
    version: Mapped[int] = mapped_column(nullable=False)

    __mapper_args__ = {"version_id_col": version}
