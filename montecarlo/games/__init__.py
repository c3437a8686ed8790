"""
Reference games implementing the GameState contract.

These two-player games are what the tests and the console front end search;
the engine itself does not depend on them.
"""

from montecarlo.games.players import Player
from montecarlo.games.tictactoe import TicTacToeAction, TicTacToeState
from montecarlo.games.connect_four import ConnectFourAction, ConnectFourState

GAMES = {
    "tictactoe": TicTacToeState,
    "connect-four": ConnectFourState,
}

__all__ = [
    'Player',
    'TicTacToeAction', 'TicTacToeState',
    'ConnectFourAction', 'ConnectFourState',
    'GAMES'
]
