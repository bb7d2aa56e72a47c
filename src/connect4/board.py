"""The Game board implements all rules that only depend on the discs in the grid (gravity, full columns, four-in-a-row)"""

from dataclasses import dataclass
from typing import Optional, Self

from src.connect4.moves import Move
from src.core.shared_types import Player

# Classic board. Just in case we want to try some funky stuff, the Board accepts other dimensions as well
ROWS = 6
COLUMNS = 7
WIN_LENGTH = 4

Cell = Optional[Player]
Vector = tuple[int, int]

# (row step, column step). Only forward-facing directions: scanning from every cell covers all lines.
WIN_DIRECTIONS: tuple[Vector, ...] = (
    (0, 1),  # right
    (1, 0),  # up
    (1, 1),  # up & right
    (1, -1),  # up & left
)


@dataclass
class Board:
    """Grid of cells, grid[row][column]. Row 0 is the bottom row."""

    grid: list[list[Cell]]

    @classmethod
    def empty(cls, rows: int = ROWS, columns: int = COLUMNS) -> Self:
        return cls([[None] * columns for _ in range(rows)])

    @classmethod
    def from_moves(
        cls, moves: list[Move], rows: int = ROWS, columns: int = COLUMNS
    ) -> Self:
        """Replay a list of moves on an empty board."""
        board = cls.empty(rows, columns)
        for move in moves:
            board.place(move)
        return board

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def columns(self) -> int:
        return len(self.grid[0])

    def cell(self, row: int, column: int) -> Cell:
        return self.grid[row][column]

    def is_valid_column(self, column: int) -> bool:
        return 0 <= column < self.columns

    def column_top(self, column: int) -> Optional[int]:
        """Drop row: the lowest empty row of the column. None if the column is already full."""
        for row in range(self.rows):
            if self.grid[row][column] is None:
                return row
        return None

    def is_column_full(self, column: int) -> bool:
        return self.grid[self.rows - 1][column] is not None

    def is_full(self) -> bool:
        return all(self.is_column_full(column) for column in range(self.columns))

    def place(self, move: Move) -> None:
        """Put the disc of the move on the board."""
        self.grid[move.row][move.column] = move.player

    def has_four_in_a_row(self, player: Player) -> bool:
        """Scan the whole board, starting from the bottom left, for WIN_LENGTH discs of the player on a line."""
        for row in range(self.rows):
            for column in range(self.columns):
                if self.grid[row][column] != player:
                    continue
                for direction in WIN_DIRECTIONS:
                    if self._is_line_of(player, row, column, direction):
                        return True
        return False

    def winner(self) -> Optional[Player]:
        return next(
            (player for player in Player if self.has_four_in_a_row(player)), None
        )

    def to_rows(self) -> list[list[Optional[str]]]:
        """Plain representation of the grid (bottom row first)."""
        return [
            [str(cell) if cell is not None else None for cell in row]
            for row in self.grid
        ]

    def _is_line_of(
        self, player: Player, row: int, column: int, direction: Vector
    ) -> bool:
        d_row, d_column = direction
        # both ends of the run must lie on the board, each checked against its own axis
        end_row = row + (WIN_LENGTH - 1) * d_row
        end_column = column + (WIN_LENGTH - 1) * d_column
        if not (0 <= end_row < self.rows and 0 <= end_column < self.columns):
            return False
        return all(
            self.grid[row + step * d_row][column + step * d_column] == player
            for step in range(WIN_LENGTH)
        )
