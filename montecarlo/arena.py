"""
Play complete games between agents.

Agents are any objects with a ``select_action(state)`` method, keyed by the
player they play for. This is used to check search strength (e.g. MCTS
against random play) and by the console front end.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from tqdm import tqdm

from montecarlo.core.state import GameState


@dataclass
class MatchResult:
    """Outcome counts of a series of games."""
    games: int = 0
    draws: int = 0
    wins: Dict[Any, int] = field(default_factory=lambda: defaultdict(int))
    total_moves: int = 0

    def win_rate(self, player: Any) -> float:
        """Fraction of games won by ``player``."""
        if self.games == 0:
            return 0.0
        return self.wins.get(player, 0) / self.games

    @property
    def average_moves(self) -> float:
        return self.total_moves / max(1, self.games)


def play_game(
    initial_state: GameState,
    agents: Mapping[Any, Any],
    on_move: Optional[Callable[[Any, Any, GameState], None]] = None
) -> GameState:
    """
    Play one game to the end.

    Args:
        initial_state: Starting position (cloned, not modified)
        agents: Agent for each player
        on_move: Optional callback receiving (player, action, state after the move)

    Returns:
        The terminal state

    Raises:
        KeyError: If no agent plays for the player to move
    """
    state = initial_state.clone()

    while state.legal_actions():
        player = state.current_player()
        action = agents[player].select_action(state)
        state.apply_action(action)

        if on_move is not None:
            on_move(player, action, state)

    return state


def play_match(
    state_factory: Callable[[], GameState],
    agents: Mapping[Any, Any],
    num_games: int,
    show_progress: bool = False
) -> MatchResult:
    """
    Play a series of games from fresh starting positions.

    Args:
        state_factory: Creates the starting position of each game
        agents: Agent for each player
        num_games: Number of games to play
        show_progress: Whether to display a progress bar

    Returns:
        Match result
    """
    if num_games <= 0:
        raise ValueError("num_games must be positive")

    result = MatchResult()

    for _ in tqdm(range(num_games), desc="Playing", disable=not show_progress):
        moves = 0

        def count_move(player, action, state):
            nonlocal moves
            moves += 1

        final_state = play_game(state_factory(), agents, on_move=count_move)

        result.games += 1
        result.total_moves += moves

        winners = [player for player in agents if final_state.result(player) == 1.0]
        if winners:
            for player in winners:
                result.wins[player] += 1
        else:
            result.draws += 1

    return result
