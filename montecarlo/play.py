"""
Console front end for playing the reference games against MCTS.

After every human move the computer's ranked plays are shown, then the
computer plays the most visited one.

Example usage:
    # Tic-tac-toe, 50000 iterations per move
    montecarlo-play --game tictactoe --iterations 50000

    # Connect four, at most one second per move
    montecarlo-play --game connect-four --iterations 50000 --time-ms 1000
"""
import argparse
import logging
import sys
from typing import Any, List, Optional

from rich.console import Console
from rich.prompt import IntPrompt
from rich.table import Table

from montecarlo.core.state import GameState
from montecarlo.games import GAMES, ConnectFourState, TicTacToeAction
from montecarlo.mcts.agent import MCTSAgent
from montecarlo.mcts.config import MCTSConfig
from montecarlo.mcts.search import RankedAction

SEPARATOR = "-------"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for game configuration."""
    parser = argparse.ArgumentParser(description="Play a board game against Monte Carlo Tree Search")

    parser.add_argument("--game", type=str, default="tictactoe",
                        choices=sorted(GAMES),
                        help="Game to play")
    parser.add_argument("--iterations", type=int, default=50000,
                        help="Maximum MCTS iterations per computer move")
    parser.add_argument("--time-ms", type=float, default=None,
                        help="Maximum thinking time per computer move in milliseconds")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible computer play")
    parser.add_argument("--computer-first", action="store_true",
                        help="Let the computer make the first move")
    parser.add_argument("--debug", action="store_true",
                        help="Log search statistics")

    return parser.parse_args(argv)


def create_agent(args: argparse.Namespace) -> MCTSAgent:
    """Create the computer player from the command-line arguments."""
    config = MCTSConfig(
        iterations=args.iterations,
        time_limit_ms=args.time_ms,
        seed=args.seed
    )
    return MCTSAgent(config=config, name="Computer")


def action_number(action: Any) -> int:
    """The number a human types to choose ``action``."""
    if isinstance(action, TicTacToeAction):
        return action.position
    return action.column


def display_state(console: Console, state: GameState) -> None:
    console.print(f"CurrentPlayer: [bold]{state.current_player()}[/bold]")
    console.print(str(state), highlight=False)
    if isinstance(state, ConnectFourState):
        console.print("0123456")
    console.print(SEPARATOR)


def ranking_table(ranking: List[RankedAction]) -> Table:
    """Render the computer's ranked plays."""
    table = Table(title="Computer's ranked plays")
    table.add_column("Action")
    table.add_column("Wins/Runs", justify="right")
    table.add_column("Rate", justify="right")

    for ranked in ranking:
        table.add_row(
            str(ranked.action),
            f"{ranked.num_wins:g}/{ranked.num_runs}",
            f"{ranked.win_rate:.3f}"
        )
    return table


def get_human_action(console: Console, state: GameState) -> Any:
    """Ask the human for one of the legal actions."""
    choices = {action_number(action): action for action in state.legal_actions()}
    number = IntPrompt.ask(
        "Choose a free space",
        console=console,
        choices=[str(n) for n in sorted(choices)]
    )
    return choices[number]


def play_game(args: argparse.Namespace, console: Console) -> GameState:
    """Play one game of human versus computer."""
    state = GAMES[args.game]()
    computer = create_agent(args)
    first_player = state.current_player()
    computer_player = first_player if args.computer_first else first_player.next

    while state.legal_actions():
        display_state(console, state)

        if state.current_player() != computer_player:
            state.apply_action(get_human_action(console, state))
            continue

        action = computer.select_action(state)
        if computer.last_ranking:
            console.print(ranking_table(computer.last_ranking))
        state.apply_action(action)

    display_state(console, state)
    console.print("[bold yellow]Game Over[/bold yellow]")

    score = state.result(computer_player)
    if score == 1.0:
        console.print("[bold red]The computer wins![/bold red]")
    elif score == 0.0:
        console.print("[bold green]You win![/bold green]")
    else:
        console.print("[bold]It's a draw.[/bold]")

    return state


def main(argv: Optional[List[str]] = None) -> None:
    """Main function."""
    args = parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    console = Console()
    try:
        play_game(args, console)
    except KeyboardInterrupt:
        console.print("\nGame interrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
