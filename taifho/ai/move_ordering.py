"""
Move Ordering Heuristics for Taifho AI.

Good move ordering improves alpha-beta pruning by examining likely-best
moves first.

The module provides:
- `score_move()` - Static score of a single move
- `KillerMoveTable` - Tracks killer moves (refutation moves) at each depth
- `HistoryTable` - Cumulative cutoff credit per move signature
- `order_moves()` / `order_moves_advanced()` - Sort moves for search

Usage Example:
```python
from taifho.ai.move_ordering import HistoryTable, KillerMoveTable, order_moves_advanced

killers = KillerMoveTable()
history = HistoryTable()

ordered = order_moves_advanced(
    moves, color, depth=3, killers=killers, history=history, hash_move=tt_move
)

# After finding a cutoff
killers.store(move, depth)
history.update(move, depth)
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..models import Move, PlayerColor
from ..rules.geometry import distance_to_goal, is_on_goal_line

HASH_MOVE_SCORE = 10000
GOAL_BONUS = 5000
KILLER_BONUS = 3000
JUMP_BONUS = 1000
JUMP_DISTANCE_BONUS = 100
PROGRESS_BONUS = 100
CENTER_WEIGHT = 5
BOARD_CENTER = 4.5


def score_move(
    move: Move, color: PlayerColor, hash_move: Optional[Move] = None
) -> float:
    """Static ordering score of ``move`` for ``color``.

    Parameters
    ----------
    move : Move
        The move to score.
    color : PlayerColor
        The moving color; selects goal line and forward direction.
    hash_move : Move, optional
        Best move remembered by the transposition table. A matching move
        scores ``HASH_MOVE_SCORE`` outright.

    Returns
    -------
    float
        Ordering score (higher = search first).
    """
    if hash_move is not None and move.same_squares(hash_move):
        return HASH_MOVE_SCORE

    fx, fy = move.from_pos.x, move.from_pos.y
    tx, ty = move.to.x, move.to.y
    score = 0.0

    if is_on_goal_line(color, tx, ty):
        score += GOAL_BONUS

    dx = abs(tx - fx)
    dy = abs(ty - fy)
    if dx > 1 or dy > 1:
        score += JUMP_BONUS + (dx + dy) * JUMP_DISTANCE_BONUS

    progress = distance_to_goal(color, fx, fy) - distance_to_goal(color, tx, ty)
    score += progress * PROGRESS_BONUS

    center_distance = abs(tx - BOARD_CENTER) + abs(ty - BOARD_CENTER)
    score += (10 - center_distance) * CENTER_WEIGHT
    return score


def order_moves(
    moves: list[Move], color: PlayerColor, hash_move: Optional[Move] = None
) -> list[Move]:
    """Sort moves by static score, best first. Returns a new list."""
    return sorted(moves, key=lambda m: score_move(m, color, hash_move), reverse=True)


@dataclass
class KillerMoveTable:
    """Tracks killer moves at each search depth.

    Killer moves are quiet moves that caused beta cutoffs at the same
    depth in sibling nodes. The newest killer sits first; at most
    ``max_per_depth`` are kept.

    Attributes
    ----------
    max_per_depth : int
        Maximum killer moves to store per depth.
    """

    max_per_depth: int = 2
    _table: dict[int, list[Move]] = field(default_factory=dict)

    def store(self, move: Move, depth: int) -> None:
        killers = self._table.setdefault(depth, [])
        if any(move.same_squares(k) for k in killers):
            return
        killers.insert(0, move)
        if len(killers) > self.max_per_depth:
            killers.pop()

    def get(self, depth: int) -> list[Move]:
        return self._table.get(depth, [])

    def is_killer(self, move: Move, depth: int) -> bool:
        return any(move.same_squares(k) for k in self._table.get(depth, ()))

    def clear(self) -> None:
        self._table.clear()

    def __len__(self) -> int:
        return sum(len(v) for v in self._table.values())


@dataclass
class HistoryTable:
    """Cutoff credit per ``(fx, fy, tx, ty)`` move signature.

    Each cutoff at remaining depth ``d`` adds ``d * d``, so cutoffs found
    near the root weigh more.
    """

    _scores: dict[tuple[int, int, int, int], int] = field(default_factory=dict)

    def update(self, move: Move, depth: int) -> None:
        key = move.signature()
        self._scores[key] = self._scores.get(key, 0) + depth * depth

    def score(self, move: Move) -> int:
        return self._scores.get(move.signature(), 0)

    def clear(self) -> None:
        self._scores.clear()

    def __len__(self) -> int:
        return len(self._scores)


def order_moves_advanced(
    moves: list[Move],
    color: PlayerColor,
    depth: int,
    killers: KillerMoveTable,
    history: HistoryTable,
    hash_move: Optional[Move] = None,
) -> list[Move]:
    """Static score plus killer bonus and history credit, best first."""

    def priority(move: Move) -> float:
        score = score_move(move, color, hash_move)
        if killers.is_killer(move, depth):
            score += KILLER_BONUS
        return score + history.score(move)

    return sorted(moves, key=priority, reverse=True)
