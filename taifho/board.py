"""Immutable 10x10 board for Taifho.

The board is a copy-on-write grid indexed ``[y][x]``. Every transformation
returns a new :class:`Board`; search code can therefore share boards
between tree nodes without copying them.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Optional

from .errors import InvalidStateError
from .models import Piece, PlayerColor, Position

BOARD_SIZE = 10

Cell = Optional[Piece]
OccupiedCell = tuple[int, int, Piece]

_EMPTY_ROW: tuple[Cell, ...] = (None,) * BOARD_SIZE

_PIECE_GLYPHS = {
    "circle": "C",
    "square": "S",
    "triangle": "T",
    "diamond": "D",
}


class Board:
    """Grid of optional pieces, at most one piece per cell."""

    __slots__ = ("_rows", "_occupied", "_hash")

    def __init__(self, rows: Sequence[Sequence[Cell]] | None = None) -> None:
        if rows is None:
            grid = (_EMPTY_ROW,) * BOARD_SIZE
        else:
            grid = tuple(tuple(row) for row in rows)
            if len(grid) != BOARD_SIZE or any(
                len(row) != BOARD_SIZE for row in grid
            ):
                raise InvalidStateError(
                    "Board must be a 10x10 grid",
                    context={
                        "rows": len(grid),
                        "columns": sorted({len(row) for row in grid}),
                    },
                )
        self._rows: tuple[tuple[Cell, ...], ...] = grid
        self._occupied: tuple[OccupiedCell, ...] | None = None
        self._hash: int | None = None

    @classmethod
    def _from_rows(cls, rows: tuple[tuple[Cell, ...], ...]) -> Board:
        board = cls.__new__(cls)
        board._rows = rows
        board._occupied = None
        board._hash = None
        return board

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        return self._rows

    def piece_at(self, x: int, y: int) -> Cell:
        return self._rows[y][x]

    def __getitem__(self, pos: Position) -> Cell:
        return self._rows[pos.y][pos.x]

    def is_empty(self, x: int, y: int) -> bool:
        return self._rows[y][x] is None

    def occupied(self) -> tuple[OccupiedCell, ...]:
        """All ``(x, y, piece)`` triples, scanned row by row."""
        if self._occupied is None:
            self._occupied = tuple(
                (x, y, piece)
                for y, row in enumerate(self._rows)
                for x, piece in enumerate(row)
                if piece is not None
            )
        return self._occupied

    def pieces_of(self, color: PlayerColor) -> list[OccupiedCell]:
        return [cell for cell in self.occupied() if cell[2].color == color]

    def colors(self) -> set[PlayerColor]:
        return {piece.color for _, _, piece in self.occupied()}

    def empty_cells(self) -> Iterator[tuple[int, int]]:
        for y, row in enumerate(self._rows):
            for x, piece in enumerate(row):
                if piece is None:
                    yield x, y

    def with_piece(self, x: int, y: int, piece: Cell) -> Board:
        """Return a copy with ``piece`` (or nothing) at ``(x, y)``."""
        rows = list(self._rows)
        row = list(rows[y])
        row[x] = piece
        rows[y] = tuple(row)
        return Board._from_rows(tuple(rows))

    def with_move(self, fx: int, fy: int, tx: int, ty: int) -> Board:
        """Return a copy with the piece at ``(fx, fy)`` relocated.

        An empty origin leaves the board unchanged.
        """
        piece = self._rows[fy][fx]
        if piece is None:
            return self
        rows = list(self._rows)
        src = list(rows[fy])
        src[fx] = None
        rows[fy] = tuple(src)
        dst = list(rows[ty])
        dst[tx] = piece
        rows[ty] = tuple(dst)
        return Board._from_rows(tuple(rows))

    def render(self) -> str:
        """ASCII rendering, row 0 first, e.g. ``rS`` for a red square."""
        lines = []
        for y, row in enumerate(self._rows):
            cells = []
            for piece in row:
                if piece is None:
                    cells.append(" .")
                else:
                    cells.append(
                        piece.color.value[0] + _PIECE_GLYPHS[piece.type.value]
                    )
            lines.append(f"{y} " + " ".join(cells))
        lines.append("   " + "  ".join(str(x) for x in range(BOARD_SIZE)))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._rows)
        return self._hash

    def __repr__(self) -> str:
        return f"Board(pieces={len(self.occupied())})"
