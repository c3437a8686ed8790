"""
Montecarlo - Monte Carlo Tree Search for turn-based, perfect-information games.

This package ranks the legal actions of any game that implements the
GameState contract (clone, current_player, legal_actions, apply_action,
result) using UCT search with random playouts. Tic-tac-toe and connect four
are included as reference games.
"""

__version__ = "0.1.0"
__author__ = "Montecarlo Team"

# Make key components available at package level
from montecarlo.core.state import GameState
from montecarlo.mcts.config import MCTSConfig
from montecarlo.mcts.search import RankedAction, rank_actions

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
