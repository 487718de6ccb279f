"""
Base AI Player class for Taifho
Abstract base class that all AI implementations inherit from
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..board import Board
from ..models import AIConfig, Move, PlayerColor
from .evaluator import evaluate_board
from .move_generator import get_all_legal_moves, next_player, simulate_move
from .session import AISession, PlayerSearchState, get_default_session


class BaseAI(ABC):
    """Abstract base class for all AI implementations"""

    def __init__(
        self,
        color: PlayerColor,
        config: AIConfig,
        session: Optional[AISession] = None,
    ):
        """
        Initialize AI player

        Args:
            color: The color this AI controls
            config: AI configuration settings
            session: Game session holding caches, history and the RNG;
                the shared default session when omitted
        """
        self.color = color
        self.config = config
        self.session: AISession = session or get_default_session()
        self.search_state: PlayerSearchState = self.session.for_player(color)
        # All stochastic choices draw from the session RNG so that a seeded
        # session replays a game exactly.
        self.rng: random.Random = self.session.rng

    @abstractmethod
    def select_move(self, board: Board) -> Optional[Move]:
        """
        Select the best move for the current board

        Args:
            board: Current board, ``self.color`` to move

        Returns:
            Selected move or None if no valid moves
        """

    def evaluate_position(self, board: Board) -> float:
        """
        Evaluate a board from this AI's perspective

        Returns:
            Evaluation score (positive = good for this AI)
        """
        return evaluate_board(
            board,
            self.color,
            self.session.move_count,
            self.session.finished_set,
        )

    def get_valid_moves(self, board: Board) -> List[Move]:
        return get_all_legal_moves(board, self.color)

    def next_player(self, board: Board, color: PlayerColor) -> PlayerColor:
        return next_player(board, color, self.session.finished_set)

    def would_repeat(self, board: Board, move: Move) -> bool:
        """True when ``move`` leads to a position seen at least twice."""
        child = simulate_move(board, move)
        return self.session.position_history.would_cause_repetition(
            child, self.next_player(child, self.color)
        )

    def get_random_element(self, items: List[Any]) -> Optional[Any]:
        """
        Get random element from list using the session RNG

        Returns:
            Random item or None if list is empty
        """
        if not items:
            return None
        return self.rng.choice(items)
