"""Depth-preferred transposition table with bulk eviction."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models import Move

logger = logging.getLogger(__name__)

# Entry cap; the oldest quarter is dropped once the table grows past it.
TT_MAX_ENTRIES = int(os.getenv("TAIFHO_TT_MAX_ENTRIES", str(1 << 18)))


class TTFlag(str, Enum):
    """How a stored score relates to the true value of the position"""
    EXACT = "exact"
    LOWER = "lower"
    UPPER = "upper"


@dataclass(frozen=True)
class TTEntry:
    hash: int
    depth: int
    score: float
    flag: TTFlag
    best_move: Optional[Move] = None


class TranspositionTable:
    """Insertion-ordered cache of search results keyed by Zobrist hash."""

    def __init__(self, max_entries: int = TT_MAX_ENTRIES) -> None:
        """Initialize the transposition table.

        Args:
            max_entries: Maximum number of entries before bulk eviction
        """
        self._table: dict[int, TTEntry] = {}
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def store(
        self,
        hash_key: int,
        depth: int,
        score: float,
        flag: TTFlag,
        best_move: Optional[Move] = None,
    ) -> None:
        """Store a result unless a deeper one is already cached.

        Args:
            hash_key: Position hash
            depth: Remaining search depth the score was computed with
            score: Search score from the root player's perspective
            flag: Bound type of ``score``
            best_move: Move that produced ``score``, if any
        """
        existing = self._table.get(hash_key)
        if existing is not None and existing.depth > depth:
            return
        self._table[hash_key] = TTEntry(hash_key, depth, score, flag, best_move)

        if len(self._table) > self.max_entries:
            evict = (len(self._table) + 3) // 4
            for key in list(self._table)[:evict]:
                del self._table[key]
            self.evictions += evict
            logger.debug(
                f"Transposition table evicted {evict} entries "
                f"({len(self._table)} remain)"
            )

    def lookup(self, hash_key: int, depth: int) -> Optional[TTEntry]:
        """Return the entry only when it was searched at least ``depth`` deep.

        Args:
            hash_key: Position hash
            depth: Remaining depth the caller needs

        Returns:
            The entry if usable at ``depth``, None otherwise
        """
        entry = self._table.get(hash_key)
        if entry is not None and entry.depth >= depth:
            self.hits += 1
            return entry
        self.misses += 1
        return None

    def get(self, hash_key: int) -> Optional[TTEntry]:
        """Return any entry for ``hash_key`` regardless of depth."""
        return self._table.get(hash_key)

    def best_move(self, hash_key: int) -> Optional[Move]:
        entry = self._table.get(hash_key)
        return entry.best_move if entry is not None else None

    def __contains__(self, hash_key: int) -> bool:
        """Check if key exists in table."""
        return hash_key in self._table

    def __len__(self) -> int:
        """Return number of entries in table."""
        return len(self._table)

    def clear(self) -> None:
        """Clear all entries and reset stats."""
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def stats(self) -> dict:
        """Return usage statistics.

        Returns:
            Dictionary with size, max_size, hits, misses, evictions and
            hit_rate.
        """
        total_lookups = self.hits + self.misses
        hit_rate = self.hits / total_lookups if total_lookups > 0 else 0.0
        return {
            "size": len(self._table),
            "max_size": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": hit_rate,
        }
