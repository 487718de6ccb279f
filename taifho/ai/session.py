"""Per-game search context.

An :class:`AISession` owns every piece of mutable state the engine keeps
between moves of one game:

- the position history (shared by all players of the game),
- the colors that have already finished,
- one RNG for all stochastic choices,
- per color: transposition table, killer/history tables and the two
  anti-oscillation buffers (minimax and MCTS).

Search caches are kept per color because stored scores are relative to
the player that ran the search.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from ..models import Move, PlayerColor
from .move_ordering import HistoryTable, KillerMoveTable
from .position_history import PositionHistory
from .transposition_table import TranspositionTable

logger = logging.getLogger(__name__)

MAX_RECENT_MOVES = 12


@dataclass
class PlayerSearchState:
    """Caches owned by a single color's searches."""

    transposition_table: TranspositionTable = field(default_factory=TranspositionTable)
    killers: KillerMoveTable = field(default_factory=KillerMoveTable)
    history: HistoryTable = field(default_factory=HistoryTable)
    recent_moves: deque = field(
        default_factory=lambda: deque(maxlen=MAX_RECENT_MOVES)
    )
    mcts_recent_moves: deque = field(
        default_factory=lambda: deque(maxlen=MAX_RECENT_MOVES)
    )

    def is_reverse_of_recent(self, move: Move) -> bool:
        return any(move.is_reverse_of(m) for m in self.recent_moves)

    def is_mcts_oscillation(self, move: Move) -> bool:
        """Reverse or repeat of a move recently chosen by MCTS."""
        return any(
            move.is_reverse_of(m) or move.same_squares(m)
            for m in self.mcts_recent_moves
        )

    def clear(self) -> None:
        self.transposition_table.clear()
        self.killers.clear()
        self.history.clear()
        self.recent_moves.clear()
        self.mcts_recent_moves.clear()


class AISession:
    """Mutable engine state for one game."""

    def __init__(self, rng_seed: Optional[int] = None) -> None:
        self.rng_seed = rng_seed
        self.rng: random.Random = random.Random(rng_seed)
        self.position_history = PositionHistory()
        self.finished: list[PlayerColor] = []
        self._players: dict[PlayerColor, PlayerSearchState] = {}

    def for_player(self, color: PlayerColor) -> PlayerSearchState:
        state = self._players.get(color)
        if state is None:
            state = PlayerSearchState()
            self._players[color] = state
        return state

    @property
    def move_count(self) -> int:
        return self.position_history.move_count

    @property
    def finished_set(self) -> frozenset[PlayerColor]:
        return frozenset(self.finished)

    def mark_finished(self, color: PlayerColor) -> None:
        if color not in self.finished:
            self.finished.append(color)
            logger.info(f"{color.value} finished in place {len(self.finished)}")

    def reset(self, rng_seed: Optional[int] = None) -> None:
        """Forget everything learned in the previous game."""
        for state in self._players.values():
            state.clear()
        self._players.clear()
        self.position_history.reset()
        self.finished.clear()
        if rng_seed is not None:
            self.rng_seed = rng_seed
        self.rng = random.Random(self.rng_seed)


_default_session = AISession()


def get_default_session() -> AISession:
    """Session used by callers that do not pass one explicitly."""
    return _default_session


def reset_ai_history(session: Optional[AISession] = None) -> None:
    """Clear every cache of ``session`` (default: the shared session)."""
    (session or _default_session).reset()
