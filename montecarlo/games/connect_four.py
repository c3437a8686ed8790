"""
Connect four rules as a GameState.

The board is a flat numpy array of NUM_ROWS * NUM_COLS cells, index 0 being
the bottom-left cell and the last index the top-right one. Every run of four
cells that can win is precomputed, and after each move only the runs through
the new piece are checked.
"""
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Union

import numpy as np

from montecarlo.core.errors import IllegalActionError, PrematureResultError
from montecarlo.games.players import Player

NUM_ROWS = 6
NUM_COLS = 7
NUM_CELLS = NUM_ROWS * NUM_COLS
RUN_LENGTH = 4

EMPTY = 0
PIECES: Dict[Player, int] = {Player.X: 1, Player.O: 2}
PLAYERS_BY_PIECE: Dict[int, Player] = {piece: player for player, piece in PIECES.items()}


def board_index(row: int, col: int) -> int:
    """Convert a (row, column) coordinate into a flat board index."""
    return row * NUM_COLS + col


def _winning_runs() -> np.ndarray:
    runs = []
    for row in range(NUM_ROWS):
        for col in range(NUM_COLS):
            can_run_right = col <= NUM_COLS - RUN_LENGTH
            can_run_up = row <= NUM_ROWS - RUN_LENGTH
            can_run_down = row >= RUN_LENGTH - 1

            if can_run_right:
                runs.append([board_index(row, col + i) for i in range(RUN_LENGTH)])
            if can_run_up:
                runs.append([board_index(row + i, col) for i in range(RUN_LENGTH)])
            if can_run_right and can_run_up:
                runs.append([board_index(row + i, col + i) for i in range(RUN_LENGTH)])
            if can_run_right and can_run_down:
                runs.append([board_index(row - i, col + i) for i in range(RUN_LENGTH)])
    return np.array(runs, dtype=np.intp)


WINNING_RUNS = _winning_runs()
RUNS_BY_CELL = [WINNING_RUNS[np.any(WINNING_RUNS == cell, axis=1)] for cell in range(NUM_CELLS)]


@dataclass(frozen=True)
class ConnectFourAction:
    """Drop a piece into ``column`` (0 = leftmost)."""
    column: int

    def __str__(self) -> str:
        return str(self.column)


ACTIONS = tuple(ConnectFourAction(col) for col in range(NUM_COLS))


class ConnectFourState:
    """A connect four position. X moves first on an empty board."""

    def __init__(
        self,
        board: Optional[Sequence[Optional[Player]]] = None,
        current_player: Player = Player.X
    ):
        """
        Create a position.

        Args:
            board: NUM_CELLS cells from the bottom-left, row by row
                (None = empty board). Pieces must rest on full columns.
            current_player: Player to move
        """
        cells = np.zeros(NUM_CELLS, dtype=np.int8)
        if board is not None:
            if len(board) != NUM_CELLS:
                raise ValueError(f"board must have {NUM_CELLS} cells, got {len(board)}")
            for index, player in enumerate(board):
                if player is not None:
                    cells[index] = PIECES[player]

        grid = cells.reshape(NUM_ROWS, NUM_COLS)
        heights = np.count_nonzero(grid, axis=0)
        for col in range(NUM_COLS):
            if np.any(grid[heights[col]:, col] != EMPTY):
                raise ValueError(f"column {col} has a floating piece")

        self._board = cells
        self._heights = heights
        self._current_player = current_player
        self._winner = self._find_winner()

    @classmethod
    def from_rows(
        cls,
        rows: Union[str, Sequence[str]],
        current_player: Player = Player.X
    ) -> 'ConnectFourState':
        """
        Create a position from text rows, top row first.

        'X' and 'O' are pieces, any other character is an empty cell. Short
        rows are padded on the right and missing rows are empty rows on top.

        Args:
            rows: Rows as a sequence of strings or one newline-separated string
            current_player: Player to move
        """
        if isinstance(rows, str):
            rows = rows.split("\n")
        if len(rows) > NUM_ROWS:
            raise ValueError(f"at most {NUM_ROWS} rows expected, got {len(rows)}")

        board: List[Optional[Player]] = []
        for row in reversed(rows):
            if len(row) > NUM_COLS:
                raise ValueError(f"row {row!r} is longer than {NUM_COLS} columns")
            padded = row.ljust(NUM_COLS)
            board.extend(Player(c) if c in ("X", "O") else None for c in padded)
        board.extend([None] * (NUM_CELLS - len(board)))
        return cls(board, current_player)

    def _find_winner(self) -> Optional[Player]:
        for player, piece in PIECES.items():
            if np.any(np.all(self._board[WINNING_RUNS] == piece, axis=1)):
                return player
        return None

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    def is_over(self) -> bool:
        return self._winner is not None or bool(np.all(self._heights >= NUM_ROWS))

    def clone(self) -> 'ConnectFourState':
        other = ConnectFourState.__new__(ConnectFourState)
        other._board = self._board.copy()
        other._heights = self._heights.copy()
        other._current_player = self._current_player
        other._winner = self._winner
        return other

    def current_player(self) -> Player:
        return self._current_player

    def legal_actions(self) -> List[ConnectFourAction]:
        """
        Get the columns that still have room.

        Returns:
            Legal actions, empty once someone has connected four or the board is full
        """
        if self._winner is not None:
            return []
        return [ACTIONS[col] for col in range(NUM_COLS) if self._heights[col] < NUM_ROWS]

    def apply_action(self, action: ConnectFourAction) -> None:
        """
        Drop the current player's piece and pass the turn.

        Raises:
            IllegalActionError: If the column does not exist or is full, or the
                game has ended
        """
        if self._winner is not None:
            raise IllegalActionError("The game is already over")

        col = action.column
        if not 0 <= col < NUM_COLS:
            raise IllegalActionError(f"Column {col} does not exist")

        row = int(self._heights[col])
        if row >= NUM_ROWS:
            raise IllegalActionError(f"Column {col} is already full")

        cell = board_index(row, col)
        piece = PIECES[self._current_player]
        self._board[cell] = piece
        self._heights[col] += 1

        if np.any(np.all(self._board[RUNS_BY_CELL[cell]] == piece, axis=1)):
            self._winner = self._current_player

        self._current_player = self._current_player.next

    def result(self, player: Player) -> float:
        """
        Score the finished game for ``player``.

        Returns:
            1.0 for a win, 0.0 for a loss, 0.5 for a draw

        Raises:
            PrematureResultError: If the game has not ended
        """
        if not self.is_over():
            raise PrematureResultError("Game isn't over yet")

        if self._winner is None:
            return 0.5
        return 1.0 if self._winner is player else 0.0

    def get_row(self, row: int) -> Iterator[Optional[Player]]:
        """Yield the cells of ``row`` (0 = bottom), left to right."""
        for piece in self._board[board_index(row, 0):board_index(row, NUM_COLS)]:
            yield PLAYERS_BY_PIECE.get(int(piece))

    def get_column(self, col: int) -> Iterator[Optional[Player]]:
        """Yield the cells of ``col`` (0 = leftmost), bottom to top."""
        for piece in self._board[col::NUM_COLS]:
            yield PLAYERS_BY_PIECE.get(int(piece))

    def __str__(self) -> str:
        rows = []
        for row in range(NUM_ROWS - 1, -1, -1):
            rows.append("".join(" " if p is None else str(p) for p in self.get_row(row)))
        return "\n".join(rows)
