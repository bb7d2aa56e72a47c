"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.connect4.board import Board
from src.core.shared_types import Player
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

PICTURE_CELLS = {".": None, "R": Player.RUBY, "B": Player.BLUE}


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def board_from_picture() -> Callable[[str], Board]:
    """Call the inner function with a drawing of the board: top row first, one character per cell.

    R: ruby disc, B: blue disc, '.': empty cell. Whitespace around the rows is ignored.
    """

    def _create_board(picture: str) -> Board:
        lines = [line.strip() for line in picture.strip().splitlines()]
        # the drawing shows the top row first, the board stores the bottom row first
        grid = [[PICTURE_CELLS[char] for char in line] for line in reversed(lines)]
        return Board(grid)

    return _create_board
