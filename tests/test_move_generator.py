"""Tests for legal move enumeration and turn rotation."""

from taifho.ai.move_generator import (
    detect_player_count,
    get_all_legal_moves,
    next_player,
    simulate_move,
)
from taifho.models import PieceType, PlayerColor
from taifho.rules.move_validation import is_move_valid

from tests.helpers import make_board, make_move, make_piece

RED = PlayerColor.RED
BLUE = PlayerColor.BLUE
YELLOW = PlayerColor.YELLOW
GREEN = PlayerColor.GREEN


class TestGetAllLegalMoves:
    def test_destinations_always_empty(self, initial_board, initial_board_4p):
        for board in (initial_board, initial_board_4p):
            for color in board.colors():
                for move in get_all_legal_moves(board, color):
                    assert board.is_empty(move.to.x, move.to.y)

    def test_every_move_passes_validation(self, initial_board):
        moves = get_all_legal_moves(initial_board, RED)
        assert moves
        for move in moves:
            assert move.piece.color == RED
            assert initial_board[move.from_pos] == move.piece
            assert is_move_valid(move.piece, move.from_pos, move.to, initial_board)

    def test_single_square_moves(self):
        board = make_board({(5, 5): make_piece(PieceType.SQUARE)})
        targets = {(m.to.x, m.to.y) for m in get_all_legal_moves(board, RED)}
        assert targets == {(5, 6), (5, 4), (4, 5), (6, 5)}

    def test_includes_jumps_and_leaps(self):
        board = make_board(
            {
                (5, 1): make_piece(PieceType.SQUARE),
                (5, 2): make_piece(PieceType.SQUARE, BLUE, 1),
                (7, 1): make_piece(PieceType.SQUARE, BLUE, 2),
            }
        )
        targets = {(m.to.x, m.to.y) for m in get_all_legal_moves(board, RED)}
        assert (5, 3) in targets
        assert (8, 1) in targets

    def test_color_without_pieces(self, initial_board):
        assert get_all_legal_moves(initial_board, YELLOW) == []


class TestSimulateMove:
    def test_returns_new_board(self, initial_board):
        move = make_move(initial_board, 1, 0, 1, 1)
        after = simulate_move(initial_board, move)
        assert after.piece_at(1, 1) == move.piece
        assert after.is_empty(1, 0)
        assert initial_board.piece_at(1, 0) == move.piece


class TestTurnOrder:
    def test_detect_player_count(self, initial_board, initial_board_4p, empty_board):
        assert detect_player_count(initial_board) == 2
        assert detect_player_count(initial_board_4p) == 4
        assert detect_player_count(empty_board) == 2

    def test_two_player_rotation(self, initial_board):
        assert next_player(initial_board, RED) == BLUE
        assert next_player(initial_board, BLUE) == RED

    def test_four_player_rotation(self, initial_board_4p):
        assert next_player(initial_board_4p, RED) == GREEN
        assert next_player(initial_board_4p, GREEN) == BLUE
        assert next_player(initial_board_4p, BLUE) == YELLOW
        assert next_player(initial_board_4p, YELLOW) == RED

    def test_finished_colors_are_skipped(self, initial_board_4p):
        finished = frozenset({GREEN, BLUE})
        assert next_player(initial_board_4p, RED, finished) == YELLOW
