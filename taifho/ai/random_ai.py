"""
Random AI implementation for Taifho
Plays a uniformly random legal move, avoiding positions that are about to
repeat for the third time whenever another move exists.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..board import Board
from ..models import Move
from .base import BaseAI

logger = logging.getLogger(__name__)


class RandomAI(BaseAI):
    """AI that selects random moves"""

    def select_move(self, board: Board) -> Optional[Move]:
        """
        Select a random legal move

        Returns:
            Random legal move or None if no legal moves
        """
        moves = self.get_valid_moves(board)
        if not moves:
            return None

        fresh = [m for m in moves if not self.would_repeat(board, m)]
        if not fresh:
            logger.debug(
                f"{self.color.value}: every move repeats a position, "
                f"choosing among all {len(moves)}"
            )
        return self.get_random_element(fresh or moves)
