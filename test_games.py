#!/usr/bin/env python
"""
Tests for the reference games.

These check that tic-tac-toe and connect four honour the GameState contract:
legal actions, in-place moves, illegal moves, results and cloning.
"""
import random
import unittest

from montecarlo.core.errors import IllegalActionError, PrematureResultError
from montecarlo.core.state import GameState
from montecarlo.games import (
    ConnectFourAction, ConnectFourState, Player, TicTacToeAction, TicTacToeState
)

X = Player.X
O = Player.O
_ = None


class TestPlayer(unittest.TestCase):

    def test_next(self):
        self.assertIs(X.next, O)
        self.assertIs(O.next, X)

    def test_str(self):
        self.assertEqual(str(X), "X")
        self.assertEqual(str(O), "O")


class TestTicTacToe(unittest.TestCase):
    """Test case for TicTacToeState."""

    def test_satisfies_contract(self):
        self.assertIsInstance(TicTacToeState(), GameState)

    def test_empty_board_has_nine_actions_for_x(self):
        expected = [TicTacToeAction(i, X) for i in range(9)]
        self.assertEqual(TicTacToeState().legal_actions(), expected)

    def test_actions_exclude_occupied_cells(self):
        state = TicTacToeState([
            X, O, _,
            _, _, X,
            O, _, _
        ], O)
        expected = [TicTacToeAction(i, O) for i in (2, 3, 4, 7, 8)]
        self.assertEqual(state.legal_actions(), expected)

    def test_no_actions_when_winner_on_board(self):
        state = TicTacToeState([X, X, X, _, _, _, _, _, _], O)
        self.assertEqual(state.legal_actions(), [])

    def test_every_line_wins(self):
        lines = [
            (0, 1, 2), (3, 4, 5), (6, 7, 8),
            (0, 3, 6), (1, 4, 7), (2, 5, 8),
            (0, 4, 8), (2, 4, 6),
        ]
        for line in lines:
            board = [X if i in line else _ for i in range(9)]
            state = TicTacToeState(board, O)
            self.assertTrue(state.has_winner(X), line)
            self.assertEqual(state.winner, X)
            self.assertEqual(state.legal_actions(), [])

    def test_apply_action_shrinks_actions(self):
        state = TicTacToeState()
        for remaining in range(9, 2, -1):
            self.assertEqual(len(state.legal_actions()), remaining)
            state.apply_action(state.legal_actions()[0])

    def test_apply_action_passes_turn(self):
        state = TicTacToeState()
        state.apply_action(TicTacToeAction(4, X))
        self.assertIs(state.current_player(), O)
        self.assertIs(state.board[4], X)

    def test_illegal_actions(self):
        state = TicTacToeState()
        state.apply_action(TicTacToeAction(4, X))

        with self.assertRaises(IllegalActionError):
            state.apply_action(TicTacToeAction(4, O))
        with self.assertRaises(IllegalActionError):
            state.apply_action(TicTacToeAction(0, X))

        finished = TicTacToeState.from_string("XXXOO....", O)
        with self.assertRaises(IllegalActionError):
            finished.apply_action(TicTacToeAction(5, O))

    def test_illegal_action_is_a_value_error(self):
        with self.assertRaises(ValueError):
            TicTacToeState().apply_action(TicTacToeAction(0, O))

    def test_action_position_is_validated(self):
        with self.assertRaises(ValueError):
            TicTacToeAction(9, X)
        with self.assertRaises(ValueError):
            TicTacToeAction(-1, X)

    def test_actions_are_hashable_values(self):
        self.assertEqual(TicTacToeAction(3, X), TicTacToeAction(3, X))
        self.assertNotEqual(TicTacToeAction(3, X), TicTacToeAction(3, O))
        self.assertEqual(len({TicTacToeAction(3, X), TicTacToeAction(3, X)}), 1)

    def test_result_with_winner(self):
        state = TicTacToeState([
            X, X, X,
            O, O, _,
            O, _, _
        ], X)
        self.assertEqual(state.result(X), 1.0)
        self.assertEqual(state.result(O), 0.0)

    def test_result_draw(self):
        state = TicTacToeState([
            X, X, O,
            O, X, X,
            X, O, O
        ], O)
        self.assertEqual(state.legal_actions(), [])
        self.assertEqual(state.result(X), 0.5)
        self.assertEqual(state.result(O), 0.5)

    def test_premature_result(self):
        with self.assertRaises(PrematureResultError):
            TicTacToeState().result(X)

    def test_clone_is_independent(self):
        state = TicTacToeState.from_string("X...O....", X)
        clone = state.clone()
        clone.apply_action(TicTacToeAction(8, X))

        self.assertIsNone(state.board[8])
        self.assertIs(state.current_player(), X)
        self.assertIs(clone.current_player(), O)

    def test_from_string(self):
        state = TicTacToeState.from_string("XO.|.X.|..O", O)
        self.assertEqual(state.board, (X, O, _, _, X, _, _, _, O))
        self.assertIs(state.current_player(), O)

    def test_str(self):
        state = TicTacToeState([
            _, _, _,
            X, X, X,
            O, O, _
        ], O)
        self.assertEqual(str(state), "0|1|2\n-----\nX|X|X\n-----\nO|O|8")

    def test_random_games_stay_legal(self):
        rng = random.Random(0)
        for _ in range(50):
            state = TicTacToeState()
            while state.legal_actions():
                state.apply_action(rng.choice(state.legal_actions()))
            self.assertIn(state.result(X), (0.0, 0.5, 1.0))
            self.assertEqual(state.result(X) + state.result(O), 1.0)


class TestConnectFour(unittest.TestCase):
    """Test case for ConnectFourState."""

    def test_satisfies_contract(self):
        self.assertIsInstance(ConnectFourState(), GameState)

    def test_empty_board(self):
        state = ConnectFourState()
        self.assertEqual(state.legal_actions(), [ConnectFourAction(c) for c in range(7)])
        self.assertIs(state.current_player(), X)
        self.assertFalse(state.is_over())

    def test_full_run_simple(self):
        state = ConnectFourState()
        for column in (0, 0, 1, 1, 2, 2, 3):
            state.apply_action(ConnectFourAction(column))

        self.assertEqual(state.legal_actions(), [])
        self.assertEqual(state.result(X), 1.0)
        self.assertEqual(state.result(O), 0.0)
        self.assertIs(state.winner, X)

    def test_pieces_stack(self):
        state = ConnectFourState()
        for column in (3, 3, 3):
            state.apply_action(ConnectFourAction(column))
        self.assertEqual(list(state.get_column(3)), [X, O, X, _, _, _])
        self.assertEqual(list(state.get_row(0)), [_, _, _, X, _, _, _])

    def test_full_column_is_illegal(self):
        state = ConnectFourState()
        for _ in range(6):
            state.apply_action(ConnectFourAction(0))

        self.assertNotIn(ConnectFourAction(0), state.legal_actions())
        with self.assertRaises(IllegalActionError):
            state.apply_action(ConnectFourAction(0))

    def test_unknown_column_is_illegal(self):
        with self.assertRaises(IllegalActionError):
            ConnectFourState().apply_action(ConnectFourAction(7))

    def test_no_moves_after_win(self):
        state = ConnectFourState.from_rows(["XXXX"], O)
        with self.assertRaises(IllegalActionError):
            state.apply_action(ConnectFourAction(5))

    def test_result_row(self):
        state = ConnectFourState.from_rows([
            "OOO",
            "XXXX",
        ], O)
        self.assertEqual(state.legal_actions(), [])
        self.assertEqual(state.result(X), 1.0)
        self.assertEqual(state.result(O), 0.0)

    def test_result_column(self):
        state = ConnectFourState.from_rows([
            "X",
            "XO",
            "XO",
            "XO",
        ], O)
        self.assertEqual(state.legal_actions(), [])
        self.assertEqual(state.result(X), 1.0)
        self.assertEqual(state.result(O), 0.0)

    def test_result_diagonal_bottom_top(self):
        state = ConnectFourState.from_rows([
            "   X",
            "  XO",
            " XOO",
            "XOOO",
        ], O)
        self.assertEqual(state.legal_actions(), [])
        self.assertEqual(state.result(X), 1.0)
        self.assertEqual(state.result(O), 0.0)

    def test_result_diagonal_top_bottom(self):
        state = ConnectFourState.from_rows([
            "X   ",
            "OX  ",
            "OOX ",
            "OOOX",
        ], O)
        self.assertEqual(state.legal_actions(), [])
        self.assertEqual(state.result(X), 1.0)
        self.assertEqual(state.result(O), 0.0)

    def test_result_draw(self):
        state = ConnectFourState.from_rows([
            "OOXXOOX",
            "XXOOXXO",
            "OOXXOOX",
            "XXOOXXO",
            "OOXXOOX",
            "XXOOXXO",
        ])
        self.assertIsNone(state.winner)
        self.assertEqual(state.legal_actions(), [])
        self.assertEqual(state.result(X), 0.5)
        self.assertEqual(state.result(O), 0.5)

    def test_premature_result(self):
        state = ConnectFourState()
        state.apply_action(ConnectFourAction(2))
        with self.assertRaises(PrematureResultError):
            state.result(X)

    def test_floating_piece_is_rejected(self):
        with self.assertRaises(ValueError):
            ConnectFourState.from_rows(["X", ""])

    def test_board_size_is_validated(self):
        with self.assertRaises(ValueError):
            ConnectFourState([X] * 10)

    def test_clone_is_independent(self):
        state = ConnectFourState()
        state.apply_action(ConnectFourAction(1))
        clone = state.clone()
        for column in (2, 2, 2, 2, 2, 2):
            clone.apply_action(ConnectFourAction(column))

        self.assertEqual(len(state.legal_actions()), 7)
        self.assertEqual(list(state.get_column(2)), [_] * 6)
        self.assertIs(state.current_player(), O)
        self.assertEqual(len(clone.legal_actions()), 6)

    def test_from_rows_string(self):
        state = ConnectFourState.from_rows("O\nX", O)
        self.assertEqual(list(state.get_column(0)), [X, O, _, _, _, _])
        self.assertIs(state.current_player(), O)

    def test_str(self):
        state = ConnectFourState()
        state.apply_action(ConnectFourAction(0))
        state.apply_action(ConnectFourAction(6))
        lines = str(state).split("\n")
        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[-1], "X     O")
        self.assertEqual(lines[0], " " * 7)

    def test_random_games_stay_legal(self):
        rng = random.Random(1)
        for _ in range(30):
            state = ConnectFourState()
            moves = 0
            while state.legal_actions():
                state.apply_action(rng.choice(state.legal_actions()))
                moves += 1
            self.assertGreaterEqual(moves, 7)
            self.assertLessEqual(moves, 42)
            self.assertEqual(state.result(X) + state.result(O), 1.0)


if __name__ == "__main__":
    unittest.main()
