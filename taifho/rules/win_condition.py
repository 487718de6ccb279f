"""Win detection.

A color finishes once every one of its pieces stands on its goal line.
Two-player games end with the first finisher; four-player games keep
going until three colors have finished.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple, Optional

from ..board import Board
from ..models import PlayerColor
from .geometry import WINNER_CHECK_ORDER, is_on_goal_line


class PieceCount(NamedTuple):
    total: int
    at_goal: int


def get_piece_counts(board: Board) -> dict[PlayerColor, PieceCount]:
    """Total and at-goal piece counts for every color."""
    totals = {color: 0 for color in PlayerColor}
    at_goal = {color: 0 for color in PlayerColor}
    for x, y, piece in board.occupied():
        totals[piece.color] += 1
        if is_on_goal_line(piece.color, x, y):
            at_goal[piece.color] += 1
    return {
        color: PieceCount(totals[color], at_goal[color])
        for color in PlayerColor
    }


def has_player_finished(board: Board, color: PlayerColor) -> bool:
    total, at_goal = get_piece_counts(board)[color]
    return total > 0 and total == at_goal


def check_winner(
    board: Board, placements: Iterable[PlayerColor] = ()
) -> Optional[PlayerColor]:
    """Return the first newly finished color, or None.

    Colors already listed in ``placements`` are skipped, so in a
    four-player game each call reports the next finisher.
    """
    placed = set(placements)
    counts = get_piece_counts(board)
    for color in WINNER_CHECK_ORDER:
        if color in placed:
            continue
        total, at_goal = counts[color]
        if total > 0 and total == at_goal:
            return color
    return None


def is_game_over(placements: Iterable[PlayerColor], player_count: int) -> bool:
    finished = len(list(placements))
    if player_count == 2:
        return finished >= 1
    return finished >= 3


def get_win_progress(board: Board, color: PlayerColor) -> PieceCount:
    """How many of ``color``'s pieces already stand on the goal line."""
    return get_piece_counts(board)[color]
