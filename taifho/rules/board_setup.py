"""Default starting boards.

Each side lines up ``S T D C C D T S`` on its start line, leaving the
corners free. In four-player games yellow and green fill columns 0 and 9
on rows 1-8.
"""

from __future__ import annotations

from ..board import BOARD_SIZE, Board
from ..errors import ConfigurationError
from ..models import Piece, PieceType, PlayerColor
from .geometry import START_LINES

DEFAULT_LINEUP: tuple[PieceType, ...] = (
    PieceType.SQUARE,
    PieceType.TRIANGLE,
    PieceType.DIAMOND,
    PieceType.CIRCLE,
    PieceType.CIRCLE,
    PieceType.DIAMOND,
    PieceType.TRIANGLE,
    PieceType.SQUARE,
)

SUPPORTED_PLAYER_COUNTS = (2, 4)


def start_line_cells(
    color: PlayerColor, first: int = 1, last: int = BOARD_SIZE - 2
) -> list[tuple[int, int]]:
    """Cells ``first..last`` (inclusive) along the color's start line."""
    axis, value = START_LINES[color]
    if axis == "y":
        return [(i, value) for i in range(first, last + 1)]
    return [(value, i) for i in range(first, last + 1)]


def place_lineup(
    board: Board,
    color: PlayerColor,
    pieces: list[Piece],
    cells: list[tuple[int, int]],
) -> Board:
    """Put ``pieces`` onto ``cells`` in order and return the new board."""
    for piece, (x, y) in zip(pieces, cells):
        board = board.with_piece(x, y, piece)
    return board


def _default_pieces(color: PlayerColor) -> list[Piece]:
    counters: dict[PieceType, int] = {}
    pieces = []
    for piece_type in DEFAULT_LINEUP:
        counters[piece_type] = counters.get(piece_type, 0) + 1
        pieces.append(
            Piece(
                id=f"{color.value}-{piece_type.value}-{counters[piece_type]}",
                type=piece_type,
                color=color,
            )
        )
    return pieces


def create_initial_board(player_count: int = 2) -> Board:
    """Build the standard opening position for 2 or 4 players."""
    if player_count not in SUPPORTED_PLAYER_COUNTS:
        raise ConfigurationError(
            f"Unsupported player count: {player_count}",
            config_key="player_count",
            context={"supported": list(SUPPORTED_PLAYER_COUNTS)},
        )
    colors = [PlayerColor.RED, PlayerColor.BLUE]
    if player_count == 4:
        colors += [PlayerColor.YELLOW, PlayerColor.GREEN]

    board = Board()
    for color in colors:
        board = place_lineup(
            board, color, _default_pieces(color), start_line_cells(color)
        )
    return board
