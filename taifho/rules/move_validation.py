"""Move validation for Taifho pieces.

Every legal move runs along a straight line (orthogonal or diagonal):

- **step**: one cell in a direction the piece type allows;
- **jump**: two cells, hopping over an occupied midpoint;
- **leap**: ``2n + 1`` cells (n >= 1), the only obstacle sitting exactly in
  the middle of the path with ``n`` empty cells on either side.

Squares move orthogonally, diamonds diagonally, circles either way.
Triangles may only go diagonally forward or straight backward, relative to
their own color's forward direction. Any piece standing on its start line
may additionally slide one cell sideways along that line.
"""

from __future__ import annotations

from ..board import Board
from ..models import Piece, PieceType, PlayerColor, Position
from .geometry import FORWARD_DIRECTIONS, in_bounds, is_on_start_line


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_direction_allowed(
    piece_type: PieceType, color: PlayerColor, ux: int, uy: int
) -> bool:
    """Check a unit direction ``(ux, uy)`` against the piece's move shape."""
    diagonal = ux != 0 and uy != 0
    if piece_type == PieceType.SQUARE:
        return not diagonal
    if piece_type == PieceType.DIAMOND:
        return diagonal
    if piece_type == PieceType.CIRCLE:
        return True
    if piece_type == PieceType.TRIANGLE:
        fdx, fdy = FORWARD_DIRECTIONS[color]
        if diagonal:
            # Diagonal forward: the component along the race axis matches.
            return (fdy != 0 and uy == fdy) or (fdx != 0 and ux == fdx)
        return ux == -fdx and uy == -fdy
    return False


def _is_sideways_on_start_line(
    color: PlayerColor, fx: int, fy: int, dx: int, dy: int
) -> bool:
    if not is_on_start_line(color, fx, fy):
        return False
    fdx, fdy = FORWARD_DIRECTIONS[color]
    if fdy != 0:
        return dy == 0 and abs(dx) == 1
    return dx == 0 and abs(dy) == 1


def _is_leap_path(
    board: Board, fx: int, fy: int, ux: int, uy: int, total_steps: int
) -> bool:
    if total_steps < 3 or total_steps % 2 == 0:
        return False
    obstacle_step = (total_steps - 1) // 2 + 1
    for step in range(1, total_steps):
        occupied = board.piece_at(fx + ux * step, fy + uy * step) is not None
        if occupied != (step == obstacle_step):
            return False
    return True


def is_valid_move_xy(
    piece: Piece, fx: int, fy: int, tx: int, ty: int, board: Board
) -> bool:
    """Coordinate form of :func:`is_move_valid` used by the move generator."""
    dx = tx - fx
    dy = ty - fy
    if dx == 0 and dy == 0:
        return False
    if not in_bounds(tx, ty):
        return False
    if board.piece_at(tx, ty) is not None:
        return False

    adx = abs(dx)
    ady = abs(dy)
    if not (dx == 0 or dy == 0 or adx == ady):
        return False

    if _is_sideways_on_start_line(piece.color, fx, fy, dx, dy):
        return True

    ux = _sign(dx)
    uy = _sign(dy)
    if not is_direction_allowed(piece.type, piece.color, ux, uy):
        return False

    distance = max(adx, ady)
    if distance == 1:
        return True
    if distance == 2:
        return board.piece_at(fx + ux, fy + uy) is not None
    return _is_leap_path(board, fx, fy, ux, uy, distance)


def is_move_valid(
    piece: Piece, from_pos: Position, to: Position, board: Board
) -> bool:
    """Decide whether ``piece`` may move from ``from_pos`` to ``to``.

    Args:
        piece: The moving piece (its color selects forward and start line)
        from_pos: Current cell of the piece
        to: Destination cell
        board: Current board

    Returns:
        True for a legal step, jump, leap or start-line slide onto an
        empty, in-bounds cell; False otherwise.
    """
    return is_valid_move_xy(piece, from_pos.x, from_pos.y, to.x, to.y, board)


def get_valid_jumps(
    piece: Piece, from_pos: Position, board: Board
) -> list[Position]:
    """Landing cells of the two-cell jumps available to ``piece``."""
    jumps = []
    for ux in (-1, 0, 1):
        for uy in (-1, 0, 1):
            if ux == 0 and uy == 0:
                continue
            tx = from_pos.x + 2 * ux
            ty = from_pos.y + 2 * uy
            if not in_bounds(tx, ty):
                continue
            if is_valid_move_xy(piece, from_pos.x, from_pos.y, tx, ty, board):
                jumps.append(Position(x=tx, y=ty))
    return jumps
