"""AI-vs-AI game loop.

Drives a complete game between computer players: asks each color for a
move, re-validates and applies it, records the position in the session
history and tracks finishers. Two-player games end at the first finisher;
four-player games run until three colors have finished. Every game is
bounded by a move cap and ends as a draw when the cap is reached.

Usage:
    from taifho.ai.selfplay import play_game

    result = play_game(
        {PlayerColor.RED: "easy", PlayerColor.BLUE: "medium"},
        player_count=2,
        max_moves=150,
    )
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from ..board import Board
from ..errors import InvalidMoveError
from ..models import AIConfig, Move, PlayerColor
from ..rules.board_setup import create_initial_board
from ..rules.geometry import turn_order
from ..rules.move_validation import is_move_valid
from ..rules.win_condition import check_winner, is_game_over
from .factory import AIDifficulty, get_best_move, get_difficulty_profile
from .move_generator import simulate_move
from .session import AISession

logger = logging.getLogger(__name__)

MAX_MOVES_2P = 150
MAX_MOVES_4P = 300

END_WINNER = "winner"
END_FINISHED = "finished"
END_MOVE_CAP = "move_cap"
END_NO_MOVES = "no_moves"
END_REPETITION = "repetition"

PlayerSetting = Union[AIDifficulty, str, AIConfig]
MoveCallback = Callable[[int, PlayerColor, Move, Board], None]


@dataclass
class GameResult:
    """Outcome of one self-play game."""

    winner: Optional[PlayerColor]
    placements: list[PlayerColor]
    moves_played: int
    end_reason: str
    final_board: Board
    moves: list[Move] = field(default_factory=list)
    duration_s: float = 0.0

    @property
    def is_draw(self) -> bool:
        return self.winner is None


def _resolve_config(setting: PlayerSetting) -> AIConfig:
    if isinstance(setting, AIConfig):
        return setting
    return get_difficulty_profile(setting)


def _next_live_player(
    current: PlayerColor,
    order: tuple[PlayerColor, ...],
    placements: list[PlayerColor],
) -> PlayerColor:
    idx = order.index(current)
    for offset in range(1, len(order) + 1):
        candidate = order[(idx + offset) % len(order)]
        if candidate not in placements:
            return candidate
    return current


def play_game(
    players: Mapping[PlayerColor, PlayerSetting],
    player_count: int = 2,
    max_moves: Optional[int] = None,
    session: Optional[AISession] = None,
    board: Optional[Board] = None,
    stop_on_repetition: bool = False,
    on_move: Optional[MoveCallback] = None,
) -> GameResult:
    """Play one AI-vs-AI game to completion or to the move cap.

    Args:
        players: Difficulty name or explicit config per color; missing
            colors play at medium
        player_count: 2 or 4
        max_moves: Move cap; 150 for two players, 300 for four by default
        session: Session to play in; reset before the first move
        board: Starting position; the standard opening when omitted
        stop_on_repetition: End the game as a draw on a three-fold
            repetition instead of only penalizing it
        on_move: Called after every applied move with
            ``(move_number, color, move, board)``

    Returns:
        The game result

    Raises:
        InvalidMoveError: A search returned a move the validator rejects
    """
    if max_moves is None:
        max_moves = MAX_MOVES_4P if player_count == 4 else MAX_MOVES_2P
    if board is None:
        board = create_initial_board(player_count)

    session = session or AISession()
    session.reset()
    order = turn_order(player_count)
    configs = {
        color: _resolve_config(players.get(color, AIDifficulty.MEDIUM))
        for color in order
    }
    placements = session.finished

    start = time.time()
    current = order[0]
    moves: list[Move] = []
    passes = 0
    end_reason = END_MOVE_CAP

    while len(moves) < max_moves:
        if is_game_over(placements, player_count):
            end_reason = END_WINNER if player_count == 2 else END_FINISHED
            break

        move = get_best_move(board, current, configs[current], session)
        if move is None:
            passes += 1
            live = [c for c in order if c not in placements]
            logger.debug(f"{current.value} has no legal moves, turn passes")
            if passes >= len(live):
                end_reason = END_NO_MOVES
                break
            current = _next_live_player(current, order, placements)
            continue
        passes = 0

        if move.piece.color != current or not is_move_valid(
            move.piece, move.from_pos, move.to, board
        ):
            raise InvalidMoveError(
                "Search returned an illegal move",
                context={
                    "color": current.value,
                    "from": move.from_pos.to_key(),
                    "to": move.to.to_key(),
                    "move_number": len(moves) + 1,
                },
            )

        board = simulate_move(board, move)
        moves.append(move)
        if on_move is not None:
            on_move(len(moves), current, move, board)

        finisher = check_winner(board, placements)
        if finisher is not None:
            session.mark_finished(finisher)

        mover = current
        current = _next_live_player(current, order, placements)
        session.position_history.record_position(board, current, mover=mover)
        if stop_on_repetition and session.position_history.is_draw_by_repetition(
            board, current
        ):
            end_reason = END_REPETITION
            break
    else:
        if is_game_over(placements, player_count):
            end_reason = END_WINNER if player_count == 2 else END_FINISHED

    result = GameResult(
        winner=placements[0] if placements else None,
        placements=list(placements),
        moves_played=len(moves),
        end_reason=end_reason,
        final_board=board,
        moves=moves,
        duration_s=time.time() - start,
    )
    logger.info(
        f"Game over after {result.moves_played} moves ({end_reason}): "
        f"placements={[c.value for c in result.placements]} "
        f"in {result.duration_s:.1f}s"
    )
    return result
