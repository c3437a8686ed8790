"""
Game-playing agents built on Monte Carlo Tree Search.

This module provides the MCTSAgent class, a ready-to-use computer player
that ranks the legal actions of any GameState with MCTS and plays the most
visited one, and RandomAgent, a uniformly random baseline.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
import random

from montecarlo.core.state import GameState
from montecarlo.mcts.config import MCTSConfig
from montecarlo.mcts.node import MCTSNode
from montecarlo.mcts.search import (
    RankedAction, SearchStats, get_action_statistics,
    get_principal_variation, ranked_children, run_search
)


class MCTSAgent:
    """
    Monte Carlo Tree Search agent.

    The agent keeps the ranking, statistics and tree of its most recent
    search so callers can display or inspect them.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        name: str = "MCTS Agent",
        verbose: bool = False,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: MCTS configuration parameters
            name: Name of the agent
            verbose: Whether to print a summary after each search
            rng: Random source; defaults to one seeded from ``config.seed``,
                or the process-wide source when no seed is configured
        """
        self.config = config or MCTSConfig()
        self.name = name
        self.verbose = verbose

        if rng is None and self.config.seed is not None:
            rng = random.Random(self.config.seed)
        self.rng = rng

        self.last_ranking: List[RankedAction] = []
        self.last_stats: Optional[SearchStats] = None
        self.last_root: Optional[MCTSNode] = None

    def rank_actions(self, state: GameState) -> List[RankedAction]:
        """
        Search ``state`` and return its actions, most visited first.

        Args:
            state: Current game state (not modified)

        Returns:
            Ranked actions
        """
        root, stats = run_search(state, rng=self.rng, config=self.config)

        self.last_root = root
        self.last_stats = stats
        self.last_ranking = ranked_children(root)

        if self.verbose:
            self._print_search_info(stats)

        return self.last_ranking

    def select_action(self, state: GameState) -> Any:
        """
        Select an action using Monte Carlo Tree Search.

        Args:
            state: Current game state

        Returns:
            Selected action

        Raises:
            ValueError: If the game has already ended
        """
        legal_actions = state.legal_actions()
        if not legal_actions:
            raise ValueError("No legal actions: the game has ended")

        # If there's only one legal action, no need to search
        if len(legal_actions) == 1:
            self.last_ranking = []
            self.last_stats = SearchStats(iterations=0)
            self.last_root = None
            return legal_actions[0]

        ranking = self.rank_actions(state)
        if not ranking:
            # A zero budget expands nothing; fall back to a random action
            return (self.rng or random).choice(legal_actions)
        return ranking[0].action

    def _print_search_info(self, stats: SearchStats) -> None:
        """
        Print information about the search.

        Args:
            stats: Search statistics
        """
        print(f"\n{self.name} searched {stats.iterations} iterations "
              f"in {stats.time_elapsed_ms:.0f} ms ({stats.iterations_per_second:.1f} it/s)")
        print(f"Nodes: {stats.node_count}")

        print("\nTop actions:")
        for i, ranked in enumerate(self.last_ranking[:5]):
            print(f"{i+1}. {ranked.action} - {ranked.num_wins:g}/{ranked.num_runs} "
                  f"({ranked.win_rate:.3f})")

    def get_action_callback(self) -> Callable[[GameState], Any]:
        """
        Get a callback function for selecting actions.

        Returns:
            Callback function that takes a game state and returns an action
        """
        return self.select_action

    def get_principal_variation(self) -> List[Tuple[Any, float]]:
        """
        Get the principal variation (most visited path) from the last search.

        Returns:
            List of (action, win rate) pairs
        """
        if self.last_root is None:
            return []

        return get_principal_variation(self.last_root)

    def get_action_statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Get statistics for all actions from the last search.

        Returns:
            Dictionary mapping action strings to statistics
        """
        if self.last_root is None:
            return {}

        return get_action_statistics(self.last_root)

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_ranking = []
        self.last_stats = None
        self.last_root = None

    def __str__(self) -> str:
        if self.config.iterations is None:
            budget = f"{self.config.time_limit_ms:g} ms"
        else:
            budget = f"{self.config.iterations} iterations"
        return f"{self.name} (MCTS, {budget})"


class RandomAgent:
    """Agent that plays a uniformly random legal action."""

    def __init__(self, name: str = "Random Agent", rng: Optional[random.Random] = None):
        self.name = name
        self.rng = rng if rng is not None else random

    def select_action(self, state: GameState) -> Any:
        legal_actions = state.legal_actions()
        if not legal_actions:
            raise ValueError("No legal actions: the game has ended")
        return self.rng.choice(legal_actions)

    def get_action_callback(self) -> Callable[[GameState], Any]:
        return self.select_action

    def __str__(self) -> str:
        return self.name
