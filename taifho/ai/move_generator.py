"""Legal move enumeration and board simulation."""

from __future__ import annotations

from ..board import Board
from ..models import Move, PlayerColor, Position
from ..rules.geometry import turn_order
from ..rules.move_validation import is_valid_move_xy


def get_all_legal_moves(board: Board, color: PlayerColor) -> list[Move]:
    """Every legal move of ``color`` on ``board``.

    Each of the color's pieces is tried against every empty cell and kept
    when the validator accepts it. Cells off the piece's eight lines are
    never legal and are skipped without calling the validator.
    """
    pieces = board.pieces_of(color)
    if not pieces:
        return []
    empty = list(board.empty_cells())

    moves = []
    for fx, fy, piece in pieces:
        from_pos = Position(x=fx, y=fy)
        for tx, ty in empty:
            dx = tx - fx
            dy = ty - fy
            if dx != 0 and dy != 0 and abs(dx) != abs(dy):
                continue
            if is_valid_move_xy(piece, fx, fy, tx, ty, board):
                moves.append(
                    Move(from_pos=from_pos, to=Position(x=tx, y=ty), piece=piece)
                )
    return moves


def simulate_move(board: Board, move: Move) -> Board:
    """Return the board after ``move``; ``board`` itself is untouched."""
    return board.with_move(move.from_pos.x, move.from_pos.y, move.to.x, move.to.y)


def detect_player_count(board: Board) -> int:
    """4 when more than two colors are on the board, else 2."""
    return 4 if len(board.colors()) > 2 else 2


def next_player(
    board: Board,
    color: PlayerColor,
    finished: frozenset[PlayerColor] = frozenset(),
) -> PlayerColor:
    """Color to move after ``color``, skipping colors that have finished."""
    order = turn_order(detect_player_count(board))
    if color not in order:
        return order[0]
    idx = order.index(color)
    for offset in range(1, len(order) + 1):
        candidate = order[(idx + offset) % len(order)]
        if candidate not in finished:
            return candidate
    return color
