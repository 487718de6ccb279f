"""AI implementations for Taifho.

The recommended entry point is :func:`get_best_move` with a named
difficulty and a per-game session:

    from taifho.ai import AISession, get_best_move, get_difficulty_profile

    session = AISession(rng_seed=7)
    move = get_best_move(board, PlayerColor.RED, get_difficulty_profile("hard"), session)

Architecture:
- base.py: BaseAI abstract base class
- random_ai.py / minimax_ai.py / mcts_ai.py: the three searches
- factory.py: difficulty ladder and search dispatch
- session.py: per-game caches (TT, killers, history, anti-oscillation)
- evaluator.py, move_generator.py, move_ordering.py, zobrist.py,
  transposition_table.py, position_history.py: search building blocks
- setup_strategy.py: AI start-line arrangements
- selfplay.py: AI-vs-AI game loop
"""

from typing import Optional

from taifho.ai.base import BaseAI
from taifho.ai.evaluator import SCORE_LOSS, SCORE_WIN, evaluate_board, evaluate_for_mover
from taifho.ai.factory import (
    CANONICAL_DIFFICULTY_PROFILES,
    DIFFICULTY_DESCRIPTIONS,
    AIDifficulty,
    create_ai,
    get_all_difficulties,
    get_best_move,
    get_difficulty_description,
    get_difficulty_profile,
)
from taifho.ai.mcts_ai import MCTSAI, get_mcts_move, mcts_search, mcts_search_timed
from taifho.ai.minimax_ai import MinimaxAI
from taifho.ai.move_generator import (
    detect_player_count,
    get_all_legal_moves,
    next_player,
    simulate_move,
)
from taifho.ai.move_ordering import (
    HistoryTable,
    KillerMoveTable,
    order_moves,
    order_moves_advanced,
    score_move,
)
from taifho.ai.position_history import PositionHistory
from taifho.ai.random_ai import RandomAI
from taifho.ai.selfplay import GameResult, play_game
from taifho.ai.session import AISession, get_default_session, reset_ai_history
from taifho.ai.setup_strategy import (
    generate_ai_setup,
    get_setup_types,
    place_setup,
    select_template,
)
from taifho.ai.transposition_table import TranspositionTable, TTEntry, TTFlag
from taifho.ai.zobrist import ZobristHash, compute_hash, update_hash
from taifho.board import Board
from taifho.models import PlayerColor


def record_position(
    board: Board,
    next_to_move: PlayerColor,
    session: Optional[AISession] = None,
    mover: Optional[PlayerColor] = None,
) -> int:
    """Record a played position in ``session`` (default: shared session).

    Pass ``mover`` when finished colors are skipped in the turn order, so
    stagnation is charged to the color that actually moved.
    """
    return (session or get_default_session()).position_history.record_position(
        board, next_to_move, mover
    )


__all__ = [
    "AIDifficulty",
    "AISession",
    "BaseAI",
    "CANONICAL_DIFFICULTY_PROFILES",
    "DIFFICULTY_DESCRIPTIONS",
    "GameResult",
    "HistoryTable",
    "KillerMoveTable",
    "MCTSAI",
    "MinimaxAI",
    "PositionHistory",
    "RandomAI",
    "SCORE_LOSS",
    "SCORE_WIN",
    "TTEntry",
    "TTFlag",
    "TranspositionTable",
    "ZobristHash",
    "compute_hash",
    "create_ai",
    "detect_player_count",
    "evaluate_board",
    "evaluate_for_mover",
    "generate_ai_setup",
    "get_all_difficulties",
    "get_all_legal_moves",
    "get_best_move",
    "get_default_session",
    "get_difficulty_description",
    "get_difficulty_profile",
    "get_mcts_move",
    "get_setup_types",
    "mcts_search",
    "mcts_search_timed",
    "next_player",
    "order_moves",
    "order_moves_advanced",
    "place_setup",
    "play_game",
    "record_position",
    "reset_ai_history",
    "score_move",
    "select_template",
    "simulate_move",
    "update_hash",
]
