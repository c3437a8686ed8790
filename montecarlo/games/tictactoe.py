"""
Tic-tac-toe rules as a GameState.

The board is a flat list of nine cells, row by row from the top-left, each
holding the Player occupying it or None.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from montecarlo.core.errors import IllegalActionError, PrematureResultError
from montecarlo.games.players import Player

BOARD_SIZE = 9

WINNING_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


@dataclass(frozen=True)
class TicTacToeAction:
    """Place ``player``'s mark on ``position`` (0-8)."""
    position: int
    player: Player

    def __post_init__(self):
        if not 0 <= self.position < BOARD_SIZE:
            raise ValueError("position must be between 0 and 8, inclusive")

    def __str__(self) -> str:
        return f"{self.player}: {self.position}"


class TicTacToeState:
    """A tic-tac-toe position. X moves first on an empty board."""

    def __init__(
        self,
        board: Optional[Sequence[Optional[Player]]] = None,
        current_player: Player = Player.X
    ):
        """
        Create a position.

        Args:
            board: Nine cells, row by row (None = empty board)
            current_player: Player to move
        """
        if board is None:
            board = [None] * BOARD_SIZE
        if len(board) != BOARD_SIZE:
            raise ValueError(f"board must have {BOARD_SIZE} cells, got {len(board)}")

        self._board: List[Optional[Player]] = list(board)
        self._current_player = current_player

    @classmethod
    def from_string(cls, cells: str, current_player: Player = Player.X) -> 'TicTacToeState':
        """
        Create a position from nine characters, e.g. ``"XX.OO...."``.

        'X' and 'O' are marks, any other character is an empty cell.
        Whitespace and '|' separators are ignored.
        """
        marks = [c for c in cells if not c.isspace() and c != "|"]
        board = [Player(c) if c in ("X", "O") else None for c in marks]
        return cls(board, current_player)

    @property
    def board(self):
        """The cells as an immutable tuple."""
        return tuple(self._board)

    def clone(self) -> 'TicTacToeState':
        return TicTacToeState(self._board, self._current_player)

    def current_player(self) -> Player:
        return self._current_player

    def has_winner(self, player: Player) -> bool:
        """Check whether ``player`` has three marks in a row."""
        return any(
            all(self._board[i] is player for i in line)
            for line in WINNING_LINES
        )

    @property
    def winner(self) -> Optional[Player]:
        for player in Player:
            if self.has_winner(player):
                return player
        return None

    def legal_actions(self) -> List[TicTacToeAction]:
        """
        Get the empty cells as actions of the player to move.

        Returns:
            Legal actions, empty once someone has won or the board is full
        """
        if self.winner is not None:
            return []

        return [
            TicTacToeAction(position, self._current_player)
            for position, cell in enumerate(self._board)
            if cell is None
        ]

    def apply_action(self, action: TicTacToeAction) -> None:
        """
        Place a mark and pass the turn.

        Raises:
            IllegalActionError: If the cell is taken, it is not the action's
                player's turn, or the game has ended
        """
        if action not in self.legal_actions():
            raise IllegalActionError(f"Action {action} is not legal in this position")

        self._board[action.position] = action.player
        self._current_player = self._current_player.next

    def result(self, player: Player) -> float:
        """
        Score the finished game for ``player``.

        Returns:
            1.0 for a win, 0.0 for a loss, 0.5 for a draw

        Raises:
            PrematureResultError: If the game has not ended
        """
        if self.legal_actions():
            raise PrematureResultError("Game isn't over yet")

        if self.has_winner(player):
            return 1.0
        if self.has_winner(player.next):
            return 0.0
        return 0.5

    def __str__(self) -> str:
        rows = []
        for row_offset in range(0, BOARD_SIZE, 3):
            cells = []
            for position in range(row_offset, row_offset + 3):
                cell = self._board[position]
                cells.append(str(position) if cell is None else str(cell))
            rows.append("|".join(cells))
        return "\n-----\n".join(rows)
