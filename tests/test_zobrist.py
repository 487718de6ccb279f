"""Tests for Zobrist position hashing."""

from taifho.ai.move_generator import get_all_legal_moves, simulate_move
from taifho.ai.zobrist import ZobristHash, compute_hash, update_hash
from taifho.models import PieceType, PlayerColor

from tests.helpers import make_move, make_piece

RED = PlayerColor.RED
BLUE = PlayerColor.BLUE


class TestComputeHash:
    def test_pure(self, initial_board):
        """Hashing the same position twice gives the same value."""
        assert compute_hash(initial_board, RED) == compute_hash(initial_board, RED)

    def test_independent_instances_agree(self, initial_board):
        assert ZobristHash().compute_hash(initial_board, RED) == compute_hash(
            initial_board, RED
        )

    def test_different_seed_gives_different_keys(self, initial_board):
        assert ZobristHash(seed=1).compute_hash(initial_board, RED) != compute_hash(
            initial_board, RED
        )

    def test_side_to_move_matters(self, initial_board):
        assert compute_hash(initial_board, RED) != compute_hash(initial_board, BLUE)

    def test_move_and_back_restores_hash(self, initial_board):
        original = compute_hash(initial_board, RED)
        out = make_move(initial_board, 1, 0, 1, 1)
        moved = simulate_move(initial_board, out)
        assert compute_hash(moved, RED) != original
        back = make_move(moved, 1, 1, 1, 0)
        assert compute_hash(simulate_move(moved, back), RED) == original

    def test_piece_type_matters(self, empty_board):
        square = empty_board.with_piece(4, 4, make_piece(PieceType.SQUARE))
        circle = empty_board.with_piece(4, 4, make_piece(PieceType.CIRCLE))
        assert compute_hash(square, RED) != compute_hash(circle, RED)

    def test_keys_are_64_bit(self):
        zobrist = ZobristHash()
        key = zobrist.piece_key(3, 3, PieceType.DIAMOND, BLUE)
        assert isinstance(key, int)
        assert 0 <= key < 2**64


class TestUpdateHash:
    def test_incremental_matches_full_recompute(self, initial_board):
        base = compute_hash(initial_board, RED)
        for move in get_all_legal_moves(initial_board, RED)[:10]:
            after = simulate_move(initial_board, move)
            assert update_hash(base, move, RED, BLUE) == compute_hash(after, BLUE)
