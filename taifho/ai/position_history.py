"""Position history and progress tracking.

Counts how often each position (hash plus side to move) has occurred in
the current game, and how long each color has gone without reducing its
total distance to goal. Both feed penalties that steer the search away
from cycling. Positions are recorded by whoever drives the turn loop,
once per applied move.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Optional

from ..board import Board
from ..models import PlayerColor
from ..rules.geometry import distance_to_goal, turn_order
from .move_generator import detect_player_count
from .zobrist import compute_hash

logger = logging.getLogger(__name__)

MAX_REPETITIONS = 3
REPETITION_PENALTY_PER_COUNT = 2000
STAGNATION_PENALTY_BASE = 500
# Moves without progress tolerated before the stagnation penalty starts.
STAGNATION_GRACE = 3


def total_distance(board: Board, color: PlayerColor) -> int:
    """Sum of the distances of ``color``'s pieces to its goal line."""
    return sum(
        distance_to_goal(color, x, y)
        for x, y, piece in board.occupied()
        if piece.color == color
    )


def previous_player(board: Board, current: PlayerColor) -> PlayerColor:
    """The color that moved just before ``current``."""
    order = turn_order(detect_player_count(board))
    if current not in order:
        return order[-1]
    return order[(order.index(current) - 1) % len(order)]


class PositionHistory:
    """Repetition and stagnation bookkeeping for one game."""

    def __init__(self) -> None:
        self._counts: Counter[int] = Counter()
        self._best_distance: dict[PlayerColor, int] = {}
        self._stagnation: dict[PlayerColor, int] = {}
        self.move_count = 0

    def reset(self) -> None:
        self._counts.clear()
        self._best_distance.clear()
        self._stagnation.clear()
        self.move_count = 0

    def record_position(
        self,
        board: Board,
        next_to_move: PlayerColor,
        mover: Optional[PlayerColor] = None,
    ) -> int:
        """Record the position reached after a move.

        Args:
            board: Board after the move
            next_to_move: Color whose turn it now is
            mover: Color that made the move; defaults to the color
                preceding ``next_to_move`` in turn order

        Returns:
            How many times this position has now been seen
        """
        self.move_count += 1
        key = compute_hash(board, next_to_move)
        self._counts[key] += 1
        count = self._counts[key]

        if mover is None:
            mover = previous_player(board, next_to_move)
        distance = total_distance(board, mover)
        if distance < self._best_distance.get(mover, math.inf):
            self._best_distance[mover] = distance
            self._stagnation[mover] = 0
        else:
            self._stagnation[mover] = self._stagnation.get(mover, 0) + 1

        if count > 1:
            logger.debug(
                f"Position repeated {count}x at move {self.move_count} "
                f"({next_to_move.value} to move)"
            )
        return count

    def position_count(self, board: Board, to_move: PlayerColor) -> int:
        return self._counts.get(compute_hash(board, to_move), 0)

    def would_cause_repetition(self, board: Board, to_move: PlayerColor) -> bool:
        return self.position_count(board, to_move) >= MAX_REPETITIONS - 1

    def is_draw_by_repetition(self, board: Board, to_move: PlayerColor) -> bool:
        """Advisory three-fold repetition check; nothing enforces it."""
        return self.position_count(board, to_move) >= MAX_REPETITIONS

    def stagnation_count(self, color: PlayerColor) -> int:
        return self._stagnation.get(color, 0)

    def stagnation_penalty(self, color: PlayerColor) -> float:
        stagnation = self._stagnation.get(color, 0)
        if stagnation < STAGNATION_GRACE:
            return 0.0
        move_multiplier = min(self.move_count / 50, 3)
        return (
            STAGNATION_PENALTY_BASE
            * 1.5 ** (stagnation - STAGNATION_GRACE)
            * move_multiplier
        )

    def repetition_penalty(self, board: Board, to_move: PlayerColor) -> float:
        count = self.position_count(board, to_move)
        if count == 0:
            return 0.0
        move_multiplier = min(1 + self.move_count / 100, 2.5)
        return REPETITION_PENALTY_PER_COUNT * 2 ** (count - 1) * move_multiplier

    def combined_penalty(self, board: Board, to_move: PlayerColor) -> float:
        return self.repetition_penalty(board, to_move) + self.stagnation_penalty(
            to_move
        )

    def unique_position_count(self) -> int:
        return len(self._counts)

    def repeated_position_count(self) -> int:
        return sum(1 for count in self._counts.values() if count > 1)
