"""Unit tests for src/db/sql_repository.py"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.exceptions import ConcurrentUpdateError
from src.db.schema import Base, DBGame
from src.db.sql_repository import GameModel, MoveModel, SQLGameRepository

START = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def mock_game(start_time: datetime = START, moves: list[MoveModel] | None = None) -> GameModel:
    return GameModel(
        game_id=uuid4(),
        rows=6,
        columns=7,
        moves=moves or [],
        turn="RUBY",
        winner=None,
        is_over=False,
        start_time=start_time,
    )


def test_save_new_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = mock_game(moves=[MoveModel(column=3, row=0, player="RUBY")])

    repo = SQLGameRepository(db_session_repo)
    record_in_db = repo.save(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Save a game, then fetch it from db."""
    model = mock_game(
        moves=[
            MoveModel(column=3, row=0, player="RUBY"),
            MoveModel(column=3, row=1, player="BLUE"),
        ]
    )

    repo = SQLGameRepository(db_session_repo)
    expected_game = repo.save(model)
    game_found = repo.get_game(model.game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game
    # timezone survives the trip through SQLite
    assert game_found.start_time == START


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    # Now do it with a stored game, but retrieving from the wrong ID
    repo.save(mock_game())
    assert repo.get_game(uuid4()) is None


def test_save_overwrites_existing_game(db_session_repo: Session) -> None:
    """Saving a game with a known ID updates the record instead of adding one."""
    repo = SQLGameRepository(db_session_repo)
    new = mock_game()
    repo.save(new)

    after = GameModel(
        game_id=new.game_id,
        rows=6,
        columns=7,
        moves=[MoveModel(column=0, row=0, player="RUBY")],
        turn="BLUE",
        winner=None,
        is_over=False,
        start_time=new.start_time,
    )
    updated_game = repo.save(after)
    assert updated_game == after
    assert repo.get_game(new.game_id) == after
    assert db_session_repo.query(DBGame).count() == 1


def test_save_is_idempotent(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    model = mock_game()
    repo.save(model)
    repo.save(model)
    assert repo.get_game(model.game_id) == model
    assert db_session_repo.query(DBGame).count() == 1


def test_consecutive_game_updates(db_session_repo: Session) -> None:
    """Tests that we can successfully make multiple updates to the same game."""
    repo = SQLGameRepository(db_session_repo)
    game = mock_game()
    repo.save(game)

    played = [
        MoveModel(column=3, row=0, player="RUBY"),
        MoveModel(column=3, row=1, player="BLUE"),
        MoveModel(column=2, row=0, player="RUBY"),
    ]
    for count in range(1, len(played) + 1):
        game.moves = played[:count]
        game.turn = "BLUE" if count % 2 == 1 else "RUBY"
        repo.save(game)

    after_all_updates = repo.get_game(game.game_id)
    assert after_all_updates is not None
    assert after_all_updates.moves == played
    assert after_all_updates.turn == "BLUE"


def test_finished_game_is_stored(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    game = mock_game()
    game.is_over = True
    game.winner = "BLUE"
    repo.save(game)

    stored = repo.get_game(game.game_id)
    assert stored is not None
    assert stored.is_over
    assert stored.winner == "BLUE"


def test_find_recent_orders_by_start_time(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    games = [mock_game(start_time=START + timedelta(minutes=minutes)) for minutes in [5, 0, 20, 10]]
    for game in games:
        repo.save(game)

    recent = repo.find_recent(3)
    assert [game.start_time for game in recent] == [
        START + timedelta(minutes=20),
        START + timedelta(minutes=10),
        START + timedelta(minutes=5),
    ]


def test_find_recent_on_empty_database(db_session_repo: Session) -> None:
    assert SQLGameRepository(db_session_repo).find_recent(10) == []


# -- TRANSACTIONS --
def test_transaction_commits(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    game = mock_game()
    with repo.transaction():
        repo.save(game)
    db_session_repo.expire_all()
    assert repo.get_game(game.game_id) == game


def test_transaction_rolls_back_on_error(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    game = mock_game()

    with pytest.raises(RuntimeError):
        with repo.transaction():
            repo.save(game)
            raise RuntimeError("something went wrong after saving")

    assert repo.get_game(game.game_id) is None


def test_nested_transaction_joins_outer_one(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    game = mock_game()

    with pytest.raises(RuntimeError):
        with repo.transaction():
            with repo.transaction():
                repo.save(game)
            raise RuntimeError("outer block fails")

    assert repo.get_game(game.game_id) is None


def test_stale_update_is_refused(tmp_path: Path) -> None:
    """Two sessions read the same game. Once one of them stored a change, the other one may not overwrite it."""
    engine = create_engine(f"sqlite:///{tmp_path / 'games.db'}")
    Base.metadata.create_all(bind=engine)
    make_session = sessionmaker(bind=engine)
    game = mock_game()

    with make_session() as setup:
        SQLGameRepository(setup).save(game)

    with make_session() as first, make_session() as second:
        first_repo = SQLGameRepository(first)
        second_repo = SQLGameRepository(second)

        with pytest.raises(ConcurrentUpdateError) as exc_info:
            with first_repo.transaction():
                first_view = first_repo.get_game(game.game_id)
                with second_repo.transaction():
                    second_view = second_repo.get_game(game.game_id)
                    assert second_view is not None
                    second_view.moves = [MoveModel(column=1, row=0, player="RUBY")]
                    second_view.turn = "BLUE"
                    second_repo.save(second_view)

                assert first_view is not None
                first_view.moves = [MoveModel(column=5, row=0, player="RUBY")]
                first_view.turn = "BLUE"
                first_repo.save(first_view)

        assert exc_info.value.game_id == game.game_id

    with make_session() as check:
        stored = SQLGameRepository(check).get_game(game.game_id)
        assert stored is not None
        assert stored.moves == [MoveModel(column=1, row=0, player="RUBY")]
    engine.dispose()
