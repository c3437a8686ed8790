"""Players of the two-player reference games."""
from enum import Enum


class Player(Enum):
    """One side of a two-player game. X always moves first."""
    X = "X"
    O = "O"

    @property
    def next(self) -> 'Player':
        """The player who moves after this one."""
        return Player.O if self is Player.X else Player.X

    def __str__(self) -> str:
        return self.value
