"""Game rules for Taifho: move legality, win detection and opening boards.

    from taifho.rules import create_initial_board, is_move_valid

    board = create_initial_board(player_count=2)
    piece = board.piece_at(1, 0)
    is_move_valid(piece, Position(x=1, y=0), Position(x=1, y=1), board)
"""

from taifho.rules.board_setup import create_initial_board, start_line_cells
from taifho.rules.geometry import (
    FORWARD_DIRECTIONS,
    FOUR_PLAYER_ORDER,
    GOAL_LINES,
    START_LINES,
    TWO_PLAYER_ORDER,
    distance_to_goal,
    in_bounds,
    is_on_goal_line,
    is_on_start_line,
    turn_order,
)
from taifho.rules.move_validation import get_valid_jumps, is_move_valid
from taifho.rules.win_condition import (
    PieceCount,
    check_winner,
    get_piece_counts,
    get_win_progress,
    has_player_finished,
    is_game_over,
)

__all__ = [
    "FORWARD_DIRECTIONS",
    "FOUR_PLAYER_ORDER",
    "GOAL_LINES",
    "START_LINES",
    "TWO_PLAYER_ORDER",
    "PieceCount",
    "check_winner",
    "create_initial_board",
    "distance_to_goal",
    "get_piece_counts",
    "get_valid_jumps",
    "get_win_progress",
    "has_player_finished",
    "in_bounds",
    "is_game_over",
    "is_move_valid",
    "is_on_goal_line",
    "is_on_start_line",
    "start_line_cells",
    "turn_order",
]
