"""Zobrist hashing for Taifho positions.

One random 64-bit key exists per (cell, piece type, color) and one per
color to move; a position's hash is the XOR of the keys of its occupied
cells and of the side to move. Keys come from a fixed-seed numpy
generator so the same position hashes identically in every process.
"""

from __future__ import annotations

import numpy as np

from ..board import BOARD_SIZE, Board
from ..models import Move, PieceType, PlayerColor

ZOBRIST_SEED = 0x7A1F_4015_2025

_PIECE_TYPES = list(PieceType)
_COLORS = list(PlayerColor)
_TYPE_INDEX = {piece_type: i for i, piece_type in enumerate(_PIECE_TYPES)}
_COLOR_INDEX = {color: i for i, color in enumerate(_COLORS)}


class ZobristHash:
    """Key table plus hashing helpers."""

    def __init__(self, seed: int = ZOBRIST_SEED) -> None:
        rng = np.random.default_rng(seed)
        max_key = np.iinfo(np.uint64).max
        piece_keys = rng.integers(
            0,
            max_key,
            size=(BOARD_SIZE, BOARD_SIZE, len(_PIECE_TYPES), len(_COLORS)),
            dtype=np.uint64,
            endpoint=True,
        )
        turn_keys = rng.integers(
            0, max_key, size=len(_COLORS), dtype=np.uint64, endpoint=True
        )
        # Plain Python ints keep XOR in the hot path off numpy scalars.
        self._piece_keys: list = piece_keys.tolist()
        self._turn_keys: list[int] = turn_keys.tolist()

    def piece_key(
        self, x: int, y: int, piece_type: PieceType, color: PlayerColor
    ) -> int:
        return self._piece_keys[y][x][_TYPE_INDEX[piece_type]][_COLOR_INDEX[color]]

    def turn_key(self, color: PlayerColor) -> int:
        return self._turn_keys[_COLOR_INDEX[color]]

    def compute_hash(self, board: Board, to_move: PlayerColor) -> int:
        h = 0
        keys = self._piece_keys
        for x, y, piece in board.occupied():
            h ^= keys[y][x][_TYPE_INDEX[piece.type]][_COLOR_INDEX[piece.color]]
        return h ^ self.turn_key(to_move)

    def update_hash(
        self,
        current_hash: int,
        move: Move,
        old_player: PlayerColor,
        new_player: PlayerColor,
    ) -> int:
        """Apply ``move`` and the change of side to move incrementally."""
        piece = move.piece
        h = current_hash
        h ^= self.piece_key(move.from_pos.x, move.from_pos.y, piece.type, piece.color)
        h ^= self.piece_key(move.to.x, move.to.y, piece.type, piece.color)
        h ^= self.turn_key(old_player)
        h ^= self.turn_key(new_player)
        return h


_DEFAULT_ZOBRIST = ZobristHash()


def compute_hash(board: Board, to_move: PlayerColor) -> int:
    """Hash ``board`` with ``to_move`` to play, using the shared key table."""
    return _DEFAULT_ZOBRIST.compute_hash(board, to_move)


def update_hash(
    current_hash: int, move: Move, old_player: PlayerColor, new_player: PlayerColor
) -> int:
    return _DEFAULT_ZOBRIST.update_hash(current_hash, move, old_player, new_player)
