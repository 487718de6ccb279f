"""Start lines, goal lines and forward directions per color.

This table is the single source of truth for "forward", "progress" and
"finished"; the validator, the evaluator and the move orderer all read it.
"""

from __future__ import annotations

from ..board import BOARD_SIZE
from ..models import PlayerColor

# (axis, value): red/blue race along y, yellow/green along x.
START_LINES: dict[PlayerColor, tuple[str, int]] = {
    PlayerColor.RED: ("y", 0),
    PlayerColor.BLUE: ("y", BOARD_SIZE - 1),
    PlayerColor.YELLOW: ("x", 0),
    PlayerColor.GREEN: ("x", BOARD_SIZE - 1),
}

GOAL_LINES: dict[PlayerColor, tuple[str, int]] = {
    PlayerColor.RED: ("y", BOARD_SIZE - 1),
    PlayerColor.BLUE: ("y", 0),
    PlayerColor.YELLOW: ("x", BOARD_SIZE - 1),
    PlayerColor.GREEN: ("x", 0),
}

# (dx, dy) unit vector pointing from the start line to the goal line.
FORWARD_DIRECTIONS: dict[PlayerColor, tuple[int, int]] = {
    PlayerColor.RED: (0, 1),
    PlayerColor.BLUE: (0, -1),
    PlayerColor.YELLOW: (1, 0),
    PlayerColor.GREEN: (-1, 0),
}

TWO_PLAYER_ORDER: tuple[PlayerColor, ...] = (
    PlayerColor.RED,
    PlayerColor.BLUE,
)
FOUR_PLAYER_ORDER: tuple[PlayerColor, ...] = (
    PlayerColor.RED,
    PlayerColor.GREEN,
    PlayerColor.BLUE,
    PlayerColor.YELLOW,
)
# Order in which a simultaneous finish is resolved.
WINNER_CHECK_ORDER: tuple[PlayerColor, ...] = (
    PlayerColor.RED,
    PlayerColor.BLUE,
    PlayerColor.YELLOW,
    PlayerColor.GREEN,
)


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def is_on_start_line(color: PlayerColor, x: int, y: int) -> bool:
    axis, value = START_LINES[color]
    return (y if axis == "y" else x) == value


def is_on_goal_line(color: PlayerColor, x: int, y: int) -> bool:
    axis, value = GOAL_LINES[color]
    return (y if axis == "y" else x) == value


def distance_to_goal(color: PlayerColor, x: int, y: int) -> int:
    """Rows (or columns) left between ``(x, y)`` and the color's goal line."""
    axis, value = GOAL_LINES[color]
    return abs(value - (y if axis == "y" else x))


def turn_order(player_count: int) -> tuple[PlayerColor, ...]:
    return FOUR_PLAYER_ORDER if player_count == 4 else TWO_PLAYER_ORDER
