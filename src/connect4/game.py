"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Self
from uuid import UUID, uuid4

from src.connect4.board import COLUMNS, ROWS, WIN_LENGTH, Board
from src.connect4.moves import Move, PlayerMove
from src.core.exceptions import (
    ColumnFullError,
    GameOverError,
    GameStateError,
    InvalidColumnError,
    NotYourTurnError,
)
from src.core.models import GameModel, utc_now
from src.core.shared_types import INITIAL_PLAYER, Player, Status


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    game_id: UUID
    board: Board
    moves: list[Move]
    turn: Player
    winner: Optional[Player]
    is_over: bool
    start_time: datetime

    @classmethod
    def new_game(cls, rows: int = ROWS, columns: int = COLUMNS) -> Self:
        """Empty board, RUBY to move."""
        return cls(
            game_id=uuid4(),
            board=Board.empty(rows, columns),
            moves=[],
            turn=INITIAL_PLAYER,
            winner=None,
            is_over=False,
            start_time=utc_now(),
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has.

        The board is not stored: it is rebuilt by replaying the moves. The record is corrupt (GameStateError) unless
        * the board is at least WIN_LENGTH in both directions
        * every move lands where gravity would have dropped it, by the player whose turn it was, before the game ended
        * turn, winner and is_over agree with the replayed board
        """
        if model.rows < WIN_LENGTH or model.columns < WIN_LENGTH:
            raise GameStateError(
                f"Board of game [{model.game_id}] is {model.rows}x{model.columns}. Both dimensions must be at least {WIN_LENGTH}."
            )
        if model.turn not in Player.__members__:
            raise GameStateError(
                f"Invalid player to move: {model.turn!r}. \nPick one from {','.join(Player)}"
            )
        if model.winner is not None and model.winner not in Player.__members__:
            raise GameStateError(f"Invalid winner: {model.winner!r}.")

        board = Board.empty(model.rows, model.columns)
        moves: list[Move] = []
        expected_player = INITIAL_PLAYER
        for stored in model.moves:
            if stored.player not in Player.__members__:
                raise GameStateError(f"Invalid player in move history: {stored!r}")
            move = Move.from_model(stored)
            if board.winner() is not None or board.is_full():
                raise GameStateError(
                    f"Move {stored!r} of game [{model.game_id}] was played after the game ended."
                )
            if move.player != expected_player:
                raise GameStateError(
                    f"Move {stored!r} of game [{model.game_id}] was played out of turn. Expected player [{expected_player}]."
                )
            if not board.is_valid_column(move.column):
                raise GameStateError(
                    f"Move {stored!r} of game [{model.game_id}] is outside the board."
                )
            if board.column_top(move.column) != move.row:
                raise GameStateError(
                    f"Move {stored!r} of game [{model.game_id}] does not rest on top of column {move.column}."
                )
            board.place(move)
            moves.append(move)
            expected_player = expected_player.opponent()

        winner = board.winner()
        if model.turn != expected_player:
            raise GameStateError(
                f"Game [{model.game_id}] claims player [{model.turn}] is to move. After {len(moves)} moves it is [{expected_player}]."
            )
        if model.winner != winner:
            raise GameStateError(
                f"Game [{model.game_id}] claims winner [{model.winner}], but the board shows [{winner}]."
            )
        if model.is_over != (winner is not None or board.is_full()):
            raise GameStateError(
                f"Game [{model.game_id}] is_over={model.is_over} does not match the board."
            )

        return cls(
            game_id=model.game_id,
            board=board,
            moves=moves,
            turn=Player(model.turn),
            winner=Player(model.winner) if model.winner is not None else None,
            is_over=model.is_over,
            start_time=model.start_time,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            game_id=self.game_id,
            rows=self.board.rows,
            columns=self.board.columns,
            moves=[move.to_model() for move in self.moves],
            turn=str(self.turn),
            winner=str(self.winner) if self.winner is not None else None,
            is_over=self.is_over,
            start_time=self.start_time,
        )

    @property
    def status(self) -> Status:
        if not self.is_over:
            return Status.IN_PROGRESS
        return Status.WON if self.winner is not None else Status.DRAW

    def make_move(self, column: int, player: Player) -> Move:
        """
        Attempt to make a move
        -----
        1. game must still be running
        2. it must be your turn
        3. column must exist on the board
        4. column must have room left
        (the first failing check decides which error is raised)

        5. drop the disc on top of the column and record the move
        6. pass the turn to the opponent
        7. check for four-in-a-row / full board
        """
        proposed = PlayerMove(column, player)
        self._assert_game_not_over(proposed)
        self._assert_your_turn(proposed)
        self._assert_valid_column(proposed)
        self._assert_column_not_full(proposed)

        row = self.board.column_top(column)
        # the column was just checked, so there is room
        assert row is not None
        move = Move(column, row, player)
        self.moves.append(move)
        self.board.place(move)
        self.turn = player.opponent()

        self._update_game_status(player)
        return move

    def replay(self) -> Board:
        """Rebuild the board from the move history only."""
        return Board.from_moves(self.moves, self.board.rows, self.board.columns)

    # -- PRIVATE HELPERS ---
    def _update_game_status(self, player: Player) -> None:
        """Only the player who just moved can have completed a line."""
        if self.board.has_four_in_a_row(player):
            self.winner = player
            self.is_over = True
            return

        if self.board.is_full():
            self.is_over = True

    def _assert_game_not_over(self, move: PlayerMove) -> None:
        if self.is_over:
            raise GameOverError(
                self.game_id,
                f"Move of player [{move.player}] is not possible. Game [{self.game_id}] is over",
            )

    def _assert_your_turn(self, move: PlayerMove) -> None:
        if move.player != self.turn:
            raise NotYourTurnError(
                self.game_id,
                f"Move of player [{move.player}] is not possible. In game [{self.game_id}] it is player [{self.turn}] turn",
            )

    def _assert_valid_column(self, move: PlayerMove) -> None:
        if not self.board.is_valid_column(move.column):
            raise InvalidColumnError(
                self.game_id,
                f"Move of player [{move.player}] is not possible. Column [{move.column}] does not exist in game [{self.game_id}]. "
                f"Pick a column from 0 to {self.board.columns - 1}",
            )

    def _assert_column_not_full(self, move: PlayerMove) -> None:
        if self.board.is_column_full(move.column):
            raise ColumnFullError(
                self.game_id,
                f"Move of player [{move.player}] is not possible. Column [{move.column}] of game [{self.game_id}] is full",
            )
