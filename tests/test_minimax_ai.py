"""
Minimax AI Test Suite

Exercises the alpha-beta search on small hand-built positions where the
right answer is forced, plus smoke checks on the opening positions.
"""
import unittest
from unittest.mock import patch

from taifho.ai.minimax_ai import INFINITY, MinimaxAI
from taifho.ai.move_generator import get_all_legal_moves, simulate_move
from taifho.ai.session import AISession
from taifho.ai.transposition_table import TTFlag
from taifho.ai.zobrist import compute_hash
from taifho.models import AIConfig, PieceType, PlayerColor
from taifho.rules.board_setup import create_initial_board
from taifho.rules.move_validation import is_move_valid

from tests.helpers import make_board, make_piece

RED = PlayerColor.RED
BLUE = PlayerColor.BLUE


class TestMinimaxAI(unittest.TestCase):
    def setUp(self):
        self.session = AISession(rng_seed=7)
        self.board = create_initial_board(2)
        # Red one step from finishing; blue far away.
        self.winning_board = make_board(
            {
                (4, 8): make_piece(PieceType.SQUARE, RED),
                (0, 5): make_piece(PieceType.SQUARE, BLUE),
            }
        )

    def _ai(self, color=RED, **config):
        config.setdefault("randomness", 0)
        return MinimaxAI(color, AIConfig(**config), self.session)

    def assertLegal(self, board, move):
        self.assertIsNotNone(move)
        self.assertTrue(is_move_valid(move.piece, move.from_pos, move.to, board))

    def test_no_moves_returns_none(self):
        board = make_board({(5, 5): make_piece(PieceType.SQUARE, BLUE)})
        self.assertIsNone(self._ai(depth=2).select_move(board))

    def test_takes_winning_move_depth_one(self):
        move = self._ai(depth=1).select_move(self.winning_board)
        self.assertEqual(move.signature(), (4, 8, 4, 9))

    def test_takes_winning_move_depth_two(self):
        move = self._ai(depth=2).select_move(self.winning_board)
        self.assertEqual(move.signature(), (4, 8, 4, 9))

    def test_blocks_opponent_win(self):
        """Red slides along its start line to stop blue reaching row 0."""
        board = make_board(
            {
                (3, 0): make_piece(PieceType.SQUARE, RED),
                (4, 1): make_piece(PieceType.SQUARE, BLUE),
            }
        )
        move = self._ai(depth=2).select_move(board)
        self.assertEqual(move.signature(), (3, 0, 4, 0))

    def test_opening_move_is_legal(self):
        move = self._ai(depth=2).select_move(self.board)
        self.assertLegal(self.board, move)

    def test_transposition_table_remembers_root(self):
        ai = self._ai(depth=2, use_tt=True)
        move = ai.select_move(self.board)
        self.assertLegal(self.board, move)
        tt = self.session.for_player(RED).transposition_table
        stored = tt.best_move(compute_hash(self.board, RED))
        self.assertIsNotNone(stored)
        self.assertTrue(stored.same_squares(move))
        self.assertGreater(len(tt), 1)

    def test_tt_search_agrees_on_forced_win(self):
        move = self._ai(depth=3, use_tt=True).select_move(self.winning_board)
        self.assertEqual(move.signature(), (4, 8, 4, 9))

    def test_iterative_deepening_always_returns_move(self):
        ai = self._ai(
            depth=4, use_tt=True, use_iterative_deepening=True, time_limit=1
        )
        move = ai.select_move(self.board)
        self.assertLegal(self.board, move)

    def test_records_recent_move(self):
        ai = self._ai(depth=1)
        move = ai.select_move(self.board)
        recent = list(self.session.for_player(RED).recent_moves)
        self.assertEqual(len(recent), 1)
        self.assertTrue(recent[0].same_squares(move))
        self.assertEqual(len(self.session.for_player(BLUE).recent_moves), 0)

    def test_seeded_randomness_is_reproducible(self):
        first = MinimaxAI(
            RED, AIConfig(depth=1, randomness=30), AISession(rng_seed=3)
        ).select_move(self.board)
        second = MinimaxAI(
            RED, AIConfig(depth=1, randomness=30), AISession(rng_seed=3)
        ).select_move(self.board)
        self.assertEqual(first.signature(), second.signature())

    def test_depth_zero_searches_one_ply(self):
        move = self._ai(depth=0, use_iterative_deepening=True).select_move(
            self.winning_board
        )
        self.assertEqual(move.signature(), (4, 8, 4, 9))

    def test_counts_nodes(self):
        ai = self._ai(depth=2)
        ai.select_move(self.board)
        self.assertGreater(ai.nodes_visited, 0)

    def _stored_entry(self, color):
        return self.session.for_player(RED).transposition_table.lookup(
            compute_hash(self.winning_board, color), 1
        )

    def test_min_node_in_window_stored_exact(self):
        ai = self._ai(depth=1, use_tt=True)
        score = ai._minimax(self.winning_board, 1, BLUE, -INFINITY, INFINITY, False)
        entry = self._stored_entry(BLUE)
        self.assertEqual(entry.flag, TTFlag.EXACT)
        self.assertEqual(entry.score, score)

    def test_min_node_cutoff_stored_upper(self):
        plain = MinimaxAI(RED, AIConfig(depth=1, randomness=0), AISession())
        exact = plain._minimax(self.winning_board, 1, BLUE, -INFINITY, INFINITY, False)

        ai = self._ai(depth=1, use_tt=True)
        ai._minimax(self.winning_board, 1, BLUE, exact + 1, INFINITY, False)
        self.assertEqual(self._stored_entry(BLUE).flag, TTFlag.UPPER)


class TestMinimaxFourPlayer(unittest.TestCase):
    def setUp(self):
        self.session = AISession(rng_seed=11)
        self.board = create_initial_board(4)
        self.small_board = make_board(
            {
                (2, 2): make_piece(PieceType.SQUARE, RED),
                (7, 2): make_piece(PieceType.SQUARE, PlayerColor.GREEN),
                (7, 7): make_piece(PieceType.SQUARE, BLUE),
                (2, 7): make_piece(PieceType.SQUARE, PlayerColor.YELLOW),
            }
        )

    def test_opening_move_is_legal(self):
        for color in PlayerColor:
            ai = MinimaxAI(color, AIConfig(depth=1, randomness=0), self.session)
            move = ai.select_move(self.board)
            self.assertIsNotNone(move)
            self.assertEqual(move.piece.color, color)
            self.assertTrue(
                is_move_valid(move.piece, move.from_pos, move.to, self.board)
            )

    def _paranoid_value(self, ai, board, depth, player):
        """Plain minimax where only the root color maximizes."""
        moves = get_all_legal_moves(board, player)
        if depth <= 0 or not moves:
            return ai._evaluate_leaf(board, player)
        scores = []
        for move in moves:
            child = simulate_move(board, move)
            scores.append(
                self._paranoid_value(
                    ai, child, depth - 1, ai.next_player(child, player)
                )
            )
        return max(scores) if player == ai.color else min(scores)

    def test_only_root_color_maximizes(self):
        ai = MinimaxAI(RED, AIConfig(depth=3, randomness=0), self.session)
        with patch.object(ai, "_minimax", wraps=ai._minimax) as spy:
            ai.select_move(self.small_board)

        interior = [c for c in spy.call_args_list if c.args[1] > 0]
        self.assertTrue(any(c.args[2] != RED for c in interior))
        for call in spy.call_args_list:
            _, _, player, _, _, maximizing = call.args
            self.assertEqual(maximizing, player == RED)

    def test_three_ply_value_matches_paranoid_minimax(self):
        ai = MinimaxAI(RED, AIConfig(depth=3, randomness=0), self.session)
        score = ai._minimax(self.small_board, 3, RED, -INFINITY, INFINITY, True)
        self.assertAlmostEqual(
            score, self._paranoid_value(ai, self.small_board, 3, RED)
        )

    def test_two_ply_with_table(self):
        ai = MinimaxAI(
            PlayerColor.GREEN, AIConfig(depth=2, randomness=0, use_tt=True), self.session
        )
        move = ai.select_move(self.board)
        self.assertIsNotNone(move)
        self.assertEqual(move.piece.color, PlayerColor.GREEN)


if __name__ == "__main__":
    unittest.main()
