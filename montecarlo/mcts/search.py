"""
Monte Carlo Tree Search (MCTS) algorithm.

This module implements the core MCTS algorithm with the four standard phases:
1. Selection: Descend the tree by UCT until a node with untried actions or a terminal node
2. Expansion: Create a child for one random untried action
3. Simulation: Play uniformly random actions until the game ends
4. Backpropagation: Update run and win statistics from the new node up to the root

Iterations are repeated while a budget predicate allows it; the predicate is
only consulted between iterations, so every iteration runs all four phases.
The root's children, ordered by visit count, are the ranking of the actions.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple
import logging
import random
import time

from montecarlo.core.state import GameState
from montecarlo.mcts.config import MCTSConfig
from montecarlo.mcts.node import MCTSNode

logger = logging.getLogger(__name__)

Budget = Callable[[int, float], bool]
"""Predicate of (iterations completed, elapsed milliseconds) -> keep searching"""


class RankedAction(NamedTuple):
    """Search statistics of one action available from the searched state."""
    action: Any
    num_runs: int
    num_wins: float

    @property
    def win_rate(self) -> float:
        if self.num_runs == 0:
            return 0.0
        return self.num_wins / self.num_runs


@dataclass
class SearchStats:
    """Statistics about one call to build_tree."""
    iterations: int = 0
    time_elapsed_ms: float = 0.0
    node_count: int = 1
    total_simulation_steps: int = 0
    max_simulation_steps: int = 0

    @property
    def iterations_per_second(self) -> float:
        return self.iterations / max(0.001, self.time_elapsed_ms / 1000.0)

    @property
    def average_simulation_steps(self) -> float:
        return self.total_simulation_steps / max(1, self.iterations)


def make_budget(
    max_iterations: Optional[int] = None,
    time_budget_ms: Optional[float] = None
) -> Budget:
    """
    Build the predicate deciding whether another iteration may start.

    Args:
        max_iterations: Iteration cap (None = unbounded)
        time_budget_ms: Wall-clock cap in milliseconds (None = unbounded)

    Returns:
        Budget predicate

    Raises:
        ValueError: If both caps are None or either is negative
    """
    if max_iterations is None and time_budget_ms is None:
        raise ValueError("at least one of max_iterations or time_budget_ms must be set")
    if max_iterations is not None and max_iterations < 0:
        raise ValueError("max_iterations must be non-negative")
    if time_budget_ms is not None and time_budget_ms < 0:
        raise ValueError("time_budget_ms must be non-negative")

    iteration_cap = float('inf') if max_iterations is None else max_iterations
    time_cap = float('inf') if time_budget_ms is None else time_budget_ms

    def should_continue(iterations: int, elapsed_ms: float) -> bool:
        return iterations < iteration_cap and elapsed_ms < time_cap

    return should_continue


def select_node(root: MCTSNode, state: GameState) -> MCTSNode:
    """
    Descend from the root using UCT.

    The descent stops at the first node that still has untried actions or
    is terminal. Every traversed action is applied to ``state``, which must
    start out as a copy of the root's state.

    Args:
        root: Root node of the MCTS tree
        state: Working state of the current iteration

    Returns:
        Node to expand or simulate from
    """
    node = root
    while not node.has_untried_actions() and not node.is_terminal():
        node = node.select_child()
        state.apply_action(node.action)
    return node


def expand_node(node: MCTSNode, state: GameState, rng: Any = random) -> MCTSNode:
    """
    Expand a node by one uniformly random untried action.

    Args:
        node: Node returned by the selection phase
        state: Working state, positioned at ``node``
        rng: Random source providing ``choice``

    Returns:
        The new child, or ``node`` itself if it has nothing left to expand
    """
    if not node.has_untried_actions():
        return node

    action = rng.choice(node.untried_actions)
    state.apply_action(action)
    return node.add_child(action, state.clone())


def simulate_game(state: GameState, rng: Any = random) -> int:
    """
    Play uniformly random legal actions until the game ends.

    Args:
        state: Working state, mutated in place into a terminal state
        rng: Random source providing ``choice``

    Returns:
        Number of actions played
    """
    steps = 0
    actions = state.legal_actions()
    while actions:
        state.apply_action(rng.choice(actions))
        steps += 1
        actions = state.legal_actions()
    return steps


def backpropagate(node: MCTSNode, final_state: GameState) -> None:
    """
    Update statistics from ``node`` up to the root inclusive.

    Each node scores ``final_state`` for its own player, the one who moved
    into it, so a parent always compares its children from the point of view
    of the player choosing between them.

    Args:
        node: Node the simulation started from
        final_state: Terminal state reached by the simulation
    """
    current: Optional[MCTSNode] = node
    while current is not None:
        current.update(final_state)
        current = current.parent


def run_iteration(root: MCTSNode, rng: Any = random) -> int:
    """
    Run one full select/expand/simulate/backpropagate cycle.

    Args:
        root: Root node of the MCTS tree
        rng: Random source providing ``choice``

    Returns:
        Number of actions played during the simulation phase
    """
    state = root.state.clone()
    node = select_node(root, state)
    node = expand_node(node, state, rng)
    steps = simulate_game(state, rng)
    backpropagate(node, state)
    return steps


def build_tree(
    root: MCTSNode,
    should_continue: Budget,
    rng: Optional[Any] = None
) -> SearchStats:
    """
    Grow the tree below ``root`` while the budget allows.

    Args:
        root: Root node of the MCTS tree
        should_continue: Budget predicate checked before each iteration
        rng: Random source (None = the process-wide ``random`` module)

    Returns:
        Search statistics
    """
    if rng is None:
        rng = random

    stats = SearchStats()
    start_time = time.perf_counter()

    iterations = 0
    while should_continue(iterations, (time.perf_counter() - start_time) * 1000.0):
        steps = run_iteration(root, rng)
        iterations += 1
        stats.total_simulation_steps += steps
        stats.max_simulation_steps = max(stats.max_simulation_steps, steps)

    stats.iterations = iterations
    stats.time_elapsed_ms = (time.perf_counter() - start_time) * 1000.0
    stats.node_count = count_nodes(root)

    logger.debug(
        "MCTS finished: %d iterations in %.1f ms (%.0f it/s), %d nodes",
        stats.iterations, stats.time_elapsed_ms,
        stats.iterations_per_second, stats.node_count
    )
    return stats


def run_search(
    initial_state: GameState,
    max_iterations: Optional[int] = None,
    time_budget_ms: Optional[float] = None,
    rng: Optional[Any] = None,
    config: Optional[MCTSConfig] = None
) -> Tuple[MCTSNode, SearchStats]:
    """
    Build a search tree for ``initial_state``.

    When neither cap is given, the caps of ``config`` are used.

    Args:
        initial_state: State to search from; it is cloned, never mutated
        max_iterations: Iteration cap (None = unbounded)
        time_budget_ms: Wall-clock cap in milliseconds (None = unbounded)
        rng: Random source (None = the process-wide ``random`` module)
        config: MCTS configuration parameters

    Returns:
        Tuple of (root node, search statistics)
    """
    if config is None:
        config = MCTSConfig()

    if max_iterations is None and time_budget_ms is None:
        max_iterations, time_budget_ms = config.iterations, config.time_limit_ms

    should_continue = make_budget(max_iterations, time_budget_ms)
    root = MCTSNode(state=initial_state.clone(), config=config)

    if root.is_terminal():
        return root, SearchStats()

    return root, build_tree(root, should_continue, rng)


def ranked_children(root: MCTSNode) -> List[RankedAction]:
    """
    Rank the root's children by descending run count.

    Children with equal run counts keep the order in which they were expanded.

    Args:
        root: Root node of the MCTS tree

    Returns:
        Ranked actions
    """
    children = sorted(root.children, key=lambda child: child.num_runs, reverse=True)
    return [RankedAction(child.action, child.num_runs, child.num_wins) for child in children]


def rank_actions(
    initial_state: GameState,
    max_iterations: Optional[int] = None,
    time_budget_ms: Optional[float] = None,
    rng: Optional[Any] = None,
    config: Optional[MCTSConfig] = None
) -> List[RankedAction]:
    """
    Rank the actions available from ``initial_state``.

    Args:
        initial_state: State to search from; it is cloned, never mutated
        max_iterations: Iteration cap (None = unbounded)
        time_budget_ms: Wall-clock cap in milliseconds (None = unbounded)
        rng: Random source (None = the process-wide ``random`` module)
        config: MCTS configuration parameters, also supplying the caps when
            neither cap is given

    Returns:
        Actions with their run and win counts, most visited first. Empty if
        the game has already ended.
    """
    root, _ = run_search(initial_state, max_iterations, time_budget_ms, rng, config)
    return ranked_children(root)


def mcts_search(
    state: GameState,
    config: Optional[MCTSConfig] = None,
    rng: Optional[Any] = None
) -> Tuple[Optional[Any], SearchStats]:
    """
    Run Monte Carlo Tree Search to find the best action.

    Args:
        state: Current game state
        config: MCTS configuration parameters
        rng: Random source (None = the process-wide ``random`` module)

    Returns:
        Tuple of (most visited action or None for a finished game, search statistics)
    """
    root, stats = run_search(state, rng=rng, config=config)
    ranking = ranked_children(root)
    best_action = ranking[0].action if ranking else None
    return best_action, stats


def count_nodes(node: MCTSNode) -> int:
    """
    Count the total number of nodes in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Total number of nodes
    """
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        count += 1
        stack.extend(current.children)
    return count


def get_principal_variation(root: MCTSNode, max_depth: int = 10) -> List[Tuple[Any, float]]:
    """
    Get the principal variation (most visited path) from the root.

    This is useful for analysis and debugging.

    Args:
        root: Root node of the MCTS tree
        max_depth: Maximum depth to explore

    Returns:
        List of (action, win rate) pairs representing the principal variation
    """
    result = []
    current = root

    while current.children and len(result) < max_depth:
        best_child = max(current.children, key=lambda c: c.num_runs)
        result.append((best_child.action, best_child.win_rate))
        current = best_child

    return result


def get_action_statistics(root: MCTSNode) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all actions from the root.

    This is useful for analysis and debugging.

    Args:
        root: Root node of the MCTS tree

    Returns:
        Dictionary mapping action strings to statistics
    """
    result = {}

    for child in root.children:
        result[str(child.action)] = {
            "runs": child.num_runs,
            "wins": child.num_wins,
            "win_rate": child.win_rate,
            "uct": child.uct_score() if child.num_runs > 0 and root.num_runs > 0 else float('inf')
        }

    return result
