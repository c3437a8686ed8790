"""
Monte Carlo Tree Search node.

This module defines the MCTSNode class which represents a node in the MCTS tree.
Each node owns a snapshot of one game state, the statistics of the simulations
that passed through it (runs, wins) and its child nodes.
"""
from __future__ import annotations
from typing import Generic, List, Optional
import math
import weakref

from montecarlo.core.errors import EmptySelectionError, IllegalActionError
from montecarlo.core.state import ActionT, GameState, PlayerT
from montecarlo.mcts.config import MCTSConfig


class MCTSNode(Generic[PlayerT, ActionT]):
    """
    A node in the Monte Carlo Tree Search.

    Children are owned by their parent; the link back to the parent is a weak
    reference, so dropping a node drops its whole subtree.

    ``num_wins`` is accumulated from the point of view of ``player``, the
    player who made the move leading into this node. For the root, which no
    move leads into, ``player`` is the player to move.
    """

    def __init__(
        self,
        state: GameState[PlayerT, ActionT],
        action: Optional[ActionT] = None,
        parent: Optional['MCTSNode[PlayerT, ActionT]'] = None,
        config: Optional[MCTSConfig] = None,
    ):
        """
        Initialize an MCTS node.

        Args:
            state: The game state this node represents; the node takes ownership
            action: The action that led to this state (None for root)
            parent: The parent node (None for root)
            config: MCTS configuration parameters
        """
        self.state = state
        self.action = action
        self._parent = weakref.ref(parent) if parent is not None else None
        self.config = config or MCTSConfig()

        if parent is not None:
            self.player: PlayerT = parent.state.current_player()
        else:
            self.player = state.current_player()

        # Node statistics
        self.num_runs = 0
        self.num_wins = 0.0
        self.children: List[MCTSNode[PlayerT, ActionT]] = []

        # Ordered and de-duplicated, so expansion order only depends on the
        # game and the random source
        actions = list(dict.fromkeys(state.legal_actions()))
        self.untried_actions: List[ActionT] = actions
        self._terminal = not actions

    @property
    def parent(self) -> Optional['MCTSNode[PlayerT, ActionT]']:
        """The parent node, or None for the root (or a detached subtree)."""
        if self._parent is None:
            return None
        return self._parent()

    def is_root(self) -> bool:
        return self._parent is None

    def is_terminal(self) -> bool:
        """
        Check if this node represents a finished game.

        Returns:
            True if the node's state has no legal actions
        """
        return self._terminal

    def has_untried_actions(self) -> bool:
        return bool(self.untried_actions)

    def is_fully_expanded(self) -> bool:
        """
        Check if every legal action from this node has a child.

        Returns:
            True if no untried actions remain
        """
        return not self.untried_actions

    @property
    def exploitation_value(self) -> float:
        """Average result for this node's player. Requires num_runs > 0."""
        return self.num_wins / self.num_runs

    @property
    def exploration_value(self) -> float:
        """
        UCT exploration bonus, weight * sqrt(ln(parent runs) / runs).

        With the default weight of sqrt(2) this is sqrt(2 * ln(N) / n).
        Requires a parent with at least one run and num_runs > 0.
        """
        parent = self.parent
        if parent is None:
            raise ValueError("The root node has no exploration value")
        return self.config.exploration_weight * math.sqrt(
            math.log(parent.num_runs) / self.num_runs
        )

    def uct_score(self) -> float:
        """
        Calculate the UCT score of this node as seen from its parent.

        UCT = num_wins / num_runs + weight * sqrt(ln(parent.num_runs) / num_runs)

        Returns:
            UCT score
        """
        return self.exploitation_value + self.exploration_value

    @property
    def win_rate(self) -> float:
        """Average result, or 0.0 for a node that was never simulated."""
        if self.num_runs == 0:
            return 0.0
        return self.num_wins / self.num_runs

    def select_child(self) -> 'MCTSNode[PlayerT, ActionT]':
        """
        Select the child with the highest UCT score.

        Exactly equal scores are resolved in favour of the child that was
        added first, which keeps searches reproducible for a fixed random source.

        Returns:
            Selected child node

        Raises:
            EmptySelectionError: If the node has no children
        """
        if not self.children:
            raise EmptySelectionError("Cannot select child from node with no children")

        # max() keeps the first of several maximal elements
        return max(self.children, key=lambda child: child.uct_score())

    def add_child(
        self,
        action: ActionT,
        state: GameState[PlayerT, ActionT]
    ) -> 'MCTSNode[PlayerT, ActionT]':
        """
        Expand the tree with the child reached by ``action``.

        Args:
            action: An untried action of this node
            state: The state after ``action``; the child takes ownership of it

        Returns:
            The new child node

        Raises:
            IllegalActionError: If ``action`` is not an untried action of this node
        """
        try:
            self.untried_actions.remove(action)
        except ValueError:
            raise IllegalActionError(f"{action!r} is not an untried action of this node") from None

        child = MCTSNode(state=state, action=action, parent=self, config=self.config)
        self.children.append(child)
        return child

    def update(self, final_state: GameState[PlayerT, ActionT]) -> None:
        """
        Record one finished simulation that passed through this node.

        Args:
            final_state: Terminal state reached by the simulation
        """
        self.num_runs += 1
        self.num_wins += final_state.result(self.player)

    def __str__(self) -> str:
        """
        Get a string representation of the node.

        Returns:
            String representation
        """
        return (f"MCTSNode(action={self.action}, "
                f"player={self.player}, "
                f"wins={self.num_wins:g}/{self.num_runs}, "
                f"children={len(self.children)}, "
                f"untried={len(self.untried_actions)})")
