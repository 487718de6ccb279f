"""Static evaluation of Taifho positions.

Positive scores favour ``color``. A position is worth material, distance
covered toward the goal and pieces already on the goal line; the same
terms are subtracted for every opponent. Progress and goal weights grow
with the move count so that late-game positions push harder toward
finishing.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..board import BOARD_SIZE, Board
from ..models import PlayerColor
from ..rules.geometry import distance_to_goal, is_on_goal_line
from ..rules.win_condition import check_winner

SCORE_WIN = 999999
SCORE_LOSS = -999999

W_MATERIAL = 100
W_PROGRESS_BASE = 50
W_GOAL_BASE = 2000
W_ALMOST_WIN = 10000
W_FALLING_BEHIND = 500
# Move number after which trailing the leader is penalized.
FALLING_BEHIND_AFTER = 50

# Weight of the mover's own score when a non-root color is to move in a
# four-player search; the remainder is the root player's score.
MOVER_WEIGHT = 0.7
ROOT_WEIGHT = 0.3

ROLLOUT_SCALE = 100000


def progress_multiplier(move_count: int) -> float:
    return min(1 + move_count / 100, 3)


def evaluate_board(
    board: Board,
    color: PlayerColor,
    move_count: int = 0,
    finished: Iterable[PlayerColor] = (),
) -> float:
    """Score ``board`` from ``color``'s point of view.

    Args:
        board: Position to score
        color: Perspective
        move_count: Moves played so far in the game
        finished: Colors that already finished; they no longer count as
            winners or opponents

    Returns:
        ``SCORE_WIN`` / ``SCORE_LOSS`` once some unfinished color has all
        pieces on its goal line, otherwise the heuristic score.
    """
    finished = frozenset(finished)
    winner = check_winner(board, finished)
    if winner == color:
        return SCORE_WIN
    if winner is not None:
        return SCORE_LOSS

    multiplier = progress_multiplier(move_count)
    w_progress = W_PROGRESS_BASE * multiplier
    w_goal = W_GOAL_BASE * multiplier

    score = 0.0
    my_total = 0
    my_at_goal = 0
    opp_totals: dict[PlayerColor, int] = {}
    opp_at_goal: dict[PlayerColor, int] = {}

    for x, y, piece in board.occupied():
        piece_color = piece.color
        if piece_color != color and piece_color in finished:
            continue
        at_goal = is_on_goal_line(piece_color, x, y)
        value = W_MATERIAL + (
            BOARD_SIZE - 1 - distance_to_goal(piece_color, x, y)
        ) * w_progress
        if at_goal:
            value += w_goal

        if piece_color == color:
            score += value
            my_total += 1
            my_at_goal += at_goal
        else:
            score -= value
            opp_totals[piece_color] = opp_totals.get(piece_color, 0) + 1
            opp_at_goal[piece_color] = opp_at_goal.get(piece_color, 0) + at_goal

    if my_total > 0 and my_at_goal >= my_total - 1:
        score += W_ALMOST_WIN
    for opp, total in opp_totals.items():
        if opp_at_goal[opp] >= total - 1:
            score -= W_ALMOST_WIN

    if move_count > FALLING_BEHIND_AFTER:
        leader_at_goal = max(max(opp_at_goal.values(), default=0), 1)
        if my_at_goal < leader_at_goal:
            behind = leader_at_goal - my_at_goal
            score -= W_FALLING_BEHIND * behind * multiplier

    return score


def evaluate_for_mover(
    board: Board,
    mover: PlayerColor,
    root: PlayerColor,
    move_count: int = 0,
    finished: Iterable[PlayerColor] = (),
) -> float:
    """Four-player blend for a non-root color: mostly its own score, partly
    working against the root player."""
    finished = frozenset(finished)
    own = evaluate_board(board, mover, move_count, finished)
    root_score = evaluate_board(board, root, move_count, finished)
    return own * MOVER_WEIGHT - root_score * ROOT_WEIGHT


def normalize_score(score: float) -> float:
    """Map a score onto [0, 1]; 0.5 is an even position."""
    value = (score + ROLLOUT_SCALE) / (2 * ROLLOUT_SCALE)
    return max(0.0, min(1.0, value))
