"""Minimax AI implementation for Taifho.

Depth-limited minimax with alpha-beta pruning. With ``config.use_tt`` the
search also consults the transposition table and orders moves with the
hash move, killer moves and the history heuristic; without it only the
root is statically ordered.

Four-player games use the paranoid simplification: the root player
maximizes and every other color minimizes the root's score. At the
leaves a non-root color to move is scored with
:func:`evaluate_for_mover` and negated back into the root's perspective.

At the root each candidate is further adjusted by anti-oscillation
penalties (undoing one of this player's recent moves, reaching a
position seen before, stagnating) and by ``config.randomness`` noise.
When ``config.use_iterative_deepening`` is set together with
``config.time_limit`` the root search is repeated at increasing depths
until 80% of the budget is spent; the limit is soft and only checked
between iterations.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from ..board import Board
from ..models import Move, PlayerColor
from .base import BaseAI
from .evaluator import evaluate_board, evaluate_for_mover
from .move_generator import detect_player_count, get_all_legal_moves, simulate_move
from .move_ordering import order_moves, order_moves_advanced
from .transposition_table import TTFlag
from .zobrist import compute_hash

logger = logging.getLogger(__name__)

INFINITY = 1_000_000.0
# Subtracted from a root move that undoes one of this player's recent moves.
REPETITION_PENALTY = 1500
# Fraction of the time budget after which no new iteration is started.
ITERATION_BUDGET_FRACTION = 0.8


class MinimaxAI(BaseAI):
    """AI that uses minimax with alpha-beta pruning."""

    nodes_visited: int = 0

    def select_move(self, board: Board) -> Optional[Move]:
        moves = self.get_valid_moves(board)
        if not moves:
            return None

        self.nodes_visited = 0
        start = time.time()
        if self.config.use_iterative_deepening and self.config.time_limit:
            move = self._iterative_deepening(board, moves)
        else:
            move, _ = self._search_root(board, moves, max(self.config.depth, 1))

        if move is not None:
            self.search_state.recent_moves.append(move)
        logger.debug(
            f"Minimax {self.color.value}: {self.nodes_visited} nodes in "
            f"{(time.time() - start) * 1000:.0f}ms"
        )
        return move

    def _iterative_deepening(self, board: Board, moves: list[Move]) -> Optional[Move]:
        start = time.time()
        budget = self.config.time_limit / 1000.0
        best_move: Optional[Move] = None
        self.search_state.killers.clear()

        for depth in range(1, max(self.config.depth, 1) + 1):
            elapsed = time.time() - start
            if best_move is not None and elapsed >= budget * ITERATION_BUDGET_FRACTION:
                logger.debug(
                    f"Iterative deepening stopped before depth {depth} "
                    f"after {elapsed * 1000:.0f}ms"
                )
                break
            move, score = self._search_root(board, moves, depth)
            if move is not None:
                best_move = move
                logger.debug(
                    f"Depth {depth} complete: best {move.signature()} "
                    f"score={score:.1f}"
                )
        return best_move

    def _search_root(
        self, board: Board, moves: list[Move], depth: int
    ) -> tuple[Optional[Move], float]:
        """Score every root move at ``depth`` and return the best one."""
        config = self.config
        state = self.search_state
        history = self.session.position_history
        four_player = detect_player_count(board) == 4

        root_hash = compute_hash(board, self.color) if config.use_tt else None
        if config.use_tt:
            hash_move = state.transposition_table.best_move(root_hash)
            ordered = order_moves_advanced(
                moves, self.color, depth, state.killers, state.history, hash_move
            )
        else:
            ordered = order_moves(moves, self.color)

        alpha = -INFINITY
        beta = INFINITY
        best_move: Optional[Move] = None
        best_score = -INFINITY

        for move in ordered:
            child = simulate_move(board, move)
            nxt = self.next_player(child, self.color)
            child_maximizing = four_player and nxt == self.color
            score = self._minimax(child, depth - 1, nxt, alpha, beta, child_maximizing)

            if config.use_repetition_penalty:
                if state.is_reverse_of_recent(move):
                    score -= REPETITION_PENALTY
                score -= history.combined_penalty(child, nxt)
            if config.randomness > 0:
                score += (self.rng.random() - 0.5) * config.randomness * 10

            if best_move is None or score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        if config.use_tt and best_move is not None:
            state.transposition_table.store(
                root_hash, depth, best_score, TTFlag.EXACT, best_move
            )
        return best_move, best_score

    def _evaluate_leaf(self, board: Board, player: PlayerColor) -> float:
        move_count = self.session.move_count
        finished = self.session.finished_set
        if player != self.color and detect_player_count(board) == 4:
            return -evaluate_for_mover(board, player, self.color, move_count, finished)
        return evaluate_board(board, self.color, move_count, finished)

    def _minimax(
        self,
        board: Board,
        depth: int,
        player: PlayerColor,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        """
        Alpha-beta search; scores are always from the root player's side.
        """
        self.nodes_visited += 1
        use_tt = self.config.use_tt
        state = self.search_state
        tt = state.transposition_table

        state_hash = 0
        if use_tt:
            state_hash = compute_hash(board, player)
            entry = tt.lookup(state_hash, depth)
            if entry is not None:
                if entry.flag == TTFlag.EXACT:
                    return entry.score
                if entry.flag == TTFlag.LOWER:
                    alpha = max(alpha, entry.score)
                elif entry.flag == TTFlag.UPPER:
                    beta = min(beta, entry.score)
                if alpha >= beta:
                    return entry.score

        if depth <= 0:
            return self._evaluate_leaf(board, player)

        moves = get_all_legal_moves(board, player)
        if not moves:
            return self._evaluate_leaf(board, player)

        if use_tt:
            moves = order_moves_advanced(
                moves, player, depth, state.killers, state.history,
                tt.best_move(state_hash),
            )

        four_player = detect_player_count(board) == 4
        orig_alpha = alpha
        orig_beta = beta
        best_score = -INFINITY if maximizing else INFINITY
        best_move: Optional[Move] = None

        for move in moves:
            child = simulate_move(board, move)
            nxt = self.next_player(child, player)
            child_maximizing = (nxt == self.color) if four_player else not maximizing
            score = self._minimax(child, depth - 1, nxt, alpha, beta, child_maximizing)

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)

            if beta <= alpha:
                if use_tt:
                    state.killers.store(move, depth)
                    state.history.update(move, depth)
                break

        if use_tt:
            if best_score <= orig_alpha:
                flag = TTFlag.UPPER
            elif best_score >= orig_beta:
                flag = TTFlag.LOWER
            else:
                flag = TTFlag.EXACT
            tt.store(state_hash, depth, best_score, flag, best_move)
        return best_score
