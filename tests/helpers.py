"""Position-building helpers shared by the test modules."""

from typing import Dict, Tuple

from taifho.board import Board
from taifho.models import Move, Piece, PieceType, PlayerColor, Position


def make_piece(
    piece_type: PieceType = PieceType.SQUARE,
    color: PlayerColor = PlayerColor.RED,
    number: int = 1,
) -> Piece:
    return Piece(
        id=f"{color.value}-{piece_type.value}-{number}",
        type=piece_type,
        color=color,
    )


def make_board(placements: Dict[Tuple[int, int], Piece]) -> Board:
    """Build a board from ``{(x, y): piece}``."""
    board = Board()
    for (x, y), piece in placements.items():
        board = board.with_piece(x, y, piece)
    return board


def make_move(board: Board, fx: int, fy: int, tx: int, ty: int) -> Move:
    """Move of whatever piece stands on ``(fx, fy)``."""
    return Move(
        from_pos=Position(x=fx, y=fy),
        to=Position(x=tx, y=ty),
        piece=board.piece_at(fx, fy),
    )
