"""AI factory for Taifho.

Maps the seven named difficulty levels onto concrete :class:`AIConfig`
values and routes a move request to the right search:

- depth 0 without MCTS: :class:`RandomAI`
- MCTS without iterative deepening: :class:`MCTSAI`
- everything else: :class:`MinimaxAI` (fixed depth, or iterative
  deepening when a time limit is configured)

Usage:
    from taifho.ai.factory import get_best_move, get_difficulty_profile

    config = get_difficulty_profile("hard")
    move = get_best_move(board, PlayerColor.RED, config, session)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

from ..board import Board
from ..errors import ConfigurationError
from ..models import AIConfig, Move, PlayerColor
from .base import BaseAI
from .mcts_ai import MCTSAI
from .minimax_ai import MinimaxAI
from .random_ai import RandomAI
from .session import AISession

logger = logging.getLogger(__name__)


class AIDifficulty(str, Enum):
    """Named difficulty levels, weakest first"""
    BEGINNER = "beginner"
    EASY = "easy"
    MEDIUM = "medium"
    CHALLENGING = "challenging"
    HARD = "hard"
    MASTER = "master"
    GRANDMASTER = "grandmaster"


CANONICAL_DIFFICULTY_PROFILES: dict[AIDifficulty, AIConfig] = {
    # Random moves that avoid repeating positions
    AIDifficulty.BEGINNER: AIConfig(depth=0, randomness=100),
    # One-ply lookahead with heavy noise
    AIDifficulty.EASY: AIConfig(depth=1, randomness=30),
    AIDifficulty.MEDIUM: AIConfig(depth=2, randomness=10),
    AIDifficulty.CHALLENGING: AIConfig(depth=3, randomness=0, use_tt=True),
    AIDifficulty.HARD: AIConfig(
        depth=4,
        randomness=0,
        use_tt=True,
        use_iterative_deepening=True,
        time_limit=3000,
    ),
    # Pure MCTS
    AIDifficulty.MASTER: AIConfig(
        depth=0, randomness=0, use_mcts=True, mcts_simulations=2000
    ),
    # Iterative deepening under a 5s budget
    AIDifficulty.GRANDMASTER: AIConfig(
        depth=5,
        randomness=0,
        use_tt=True,
        use_iterative_deepening=True,
        use_mcts=True,
        mcts_simulations=3000,
        time_limit=5000,
    ),
}

DIFFICULTY_DESCRIPTIONS: dict[AIDifficulty, str] = {
    AIDifficulty.BEGINNER: "Random legal moves",
    AIDifficulty.EASY: "One-ply search with noise",
    AIDifficulty.MEDIUM: "Two-ply search with light noise",
    AIDifficulty.CHALLENGING: "Three-ply search with transposition table",
    AIDifficulty.HARD: "Iterative deepening to four plies (3s)",
    AIDifficulty.MASTER: "Monte Carlo Tree Search (2000 simulations)",
    AIDifficulty.GRANDMASTER: "Iterative deepening to five plies (5s)",
}


def get_difficulty_profile(difficulty: Union[AIDifficulty, str]) -> AIConfig:
    """Return the configuration of a named difficulty.

    Raises:
        ConfigurationError: ``difficulty`` names no known level
    """
    try:
        level = AIDifficulty(difficulty)
    except ValueError:
        raise ConfigurationError(
            f"Unknown difficulty: {difficulty!r}",
            config_key="difficulty",
            context={"valid": [d.value for d in AIDifficulty]},
        ) from None
    return CANONICAL_DIFFICULTY_PROFILES[level]


def get_all_difficulties() -> list[AIDifficulty]:
    return list(AIDifficulty)


def get_difficulty_description(difficulty: Union[AIDifficulty, str]) -> str:
    get_difficulty_profile(difficulty)
    return DIFFICULTY_DESCRIPTIONS[AIDifficulty(difficulty)]


def create_ai(
    color: PlayerColor,
    config: AIConfig,
    session: Optional[AISession] = None,
) -> BaseAI:
    """Instantiate the search that ``config`` asks for."""
    if config.depth == 0 and not config.use_mcts:
        return RandomAI(color, config, session)
    if config.use_mcts and not config.use_iterative_deepening:
        return MCTSAI(color, config, session)
    return MinimaxAI(color, config, session)


def get_best_move(
    board: Board,
    color: PlayerColor,
    config: Optional[AIConfig] = None,
    session: Optional[AISession] = None,
) -> Optional[Move]:
    """Choose a move for ``color``.

    Args:
        board: Current board, ``color`` to move
        color: Color to choose for
        config: Search configuration; the medium profile when omitted
        session: Game session; the shared default session when omitted

    Returns:
        The chosen move, or None when ``color`` has no legal move (a
        forfeited turn, not an error)
    """
    if config is None:
        config = CANONICAL_DIFFICULTY_PROFILES[AIDifficulty.MEDIUM]
    ai = create_ai(color, config, session)
    move = ai.select_move(board)
    if move is None:
        logger.debug(f"{color.value} has no legal move")
    return move
