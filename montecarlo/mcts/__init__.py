"""
Monte Carlo Tree Search (MCTS) engine.

This package ranks the actions of any game implementing the GameState
contract, without training or domain knowledge. Each iteration:

1. Selection: Starting from the root node, select child nodes using UCT until reaching
   a node with untried actions or a terminal node.
2. Expansion: Create a new child node by taking a random untried action.
3. Simulation: From the new node, perform a random playout to the end of the game.
4. Backpropagation: Update the statistics of all nodes in the path with the result,
   each node scoring it for the player who moved into it.

Iterations repeat until an iteration and/or time budget runs out; the root's
children ordered by visit count are the ranking.
"""

from montecarlo.mcts.node import MCTSNode
from montecarlo.mcts.agent import MCTSAgent, RandomAgent
from montecarlo.mcts.search import (
    RankedAction,
    SearchStats,
    rank_actions,
    mcts_search,
    make_budget,
    build_tree,
    run_iteration,
    select_node,
    expand_node,
    simulate_game,
    backpropagate
)
from montecarlo.mcts.config import MCTSConfig

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=1000,          # Number of MCTS iterations per move
    time_limit_ms=None,       # Optional time limit in milliseconds (None = no limit)
)

__all__ = [
    'MCTSAgent',
    'RandomAgent',
    'MCTSNode',
    'MCTSConfig',
    'RankedAction',
    'SearchStats',
    'rank_actions',
    'mcts_search',
    'make_budget',
    'build_tree',
    'run_iteration',
    'select_node',
    'expand_node',
    'simulate_game',
    'backpropagate',
    'DEFAULT_CONFIG'
]
