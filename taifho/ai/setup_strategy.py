"""AI setup strategy.

Decides how a computer player lines up its pieces on the start line
before the first move. Two-player sides place eight pieces on columns
1-8; four-player sides place six pieces (no circles) on columns 2-7.

Stronger difficulties score many candidate arrangements with
:func:`evaluate_setup` and pick among the best few; weaker ones shuffle
or fall back to the balanced template.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence, Union

from ..board import Board
from ..models import Piece, PieceType, PlayerColor
from ..rules.board_setup import place_lineup, start_line_cells
from .factory import AIDifficulty, get_difficulty_profile

logger = logging.getLogger(__name__)

VALID_COLUMNS_2P = (1, 2, 3, 4, 5, 6, 7, 8)
VALID_COLUMNS_4P = (2, 3, 4, 5, 6, 7)

S, T, D, C = (
    PieceType.SQUARE,
    PieceType.TRIANGLE,
    PieceType.DIAMOND,
    PieceType.CIRCLE,
)

SETUP_TEMPLATES: dict[str, tuple[PieceType, ...]] = {
    # Circles in the middle, mixed flanks
    "balanced": (S, T, D, C, C, D, T, S),
    "aggressive": (T, S, C, D, D, C, S, T),
    # Triangles sheltered in the middle, squares on the flanks
    "defensive": (S, D, T, C, C, T, D, S),
    # Circles on the edges for wide attacks
    "flanking": (C, D, T, S, S, T, D, C),
    "centerControl": (T, S, C, D, D, C, S, T),
    # Diamonds in the middle for a diagonal breakthrough
    "diamondRush": (S, C, D, T, T, D, C, S),
    "squareAdvance": (C, T, S, D, D, S, T, C),
}

SETUP_TEMPLATES_4P: dict[str, tuple[PieceType, ...]] = {
    "balanced": (S, T, D, D, T, S),
    "aggressive": (T, D, S, S, D, T),
    "defensive": (S, D, T, T, D, S),
    "flanking": (D, S, T, T, S, D),
}

# Random arrangements scored per difficulty; unlisted levels skip scoring.
EVALUATION_ITERATIONS: dict[AIDifficulty, int] = {
    AIDifficulty.MEDIUM: 50,
    AIDifficulty.CHALLENGING: 100,
    AIDifficulty.HARD: 200,
    AIDifficulty.MASTER: 500,
    AIDifficulty.GRANDMASTER: 500,
}
TEMPLATE_BONUS = 5
TOP_CANDIDATES = 5

SETUP_STRATEGIES = ("random", "balanced", "aggressive", "defensive", "counter")


def create_unplaced_pieces(
    color: PlayerColor, is_four_player: bool = False
) -> list[Piece]:
    """The pieces a side brings to the setup phase."""
    types = [S, S, T, T, D, D]
    if not is_four_player:
        types += [C, C]
    counters: dict[PieceType, int] = {}
    pieces = []
    for piece_type in types:
        counters[piece_type] = counters.get(piece_type, 0) + 1
        pieces.append(
            Piece(
                id=f"{color.value}-{piece_type.value}-{counters[piece_type]}",
                type=piece_type,
                color=color,
            )
        )
    return pieces


def evaluate_setup(
    arrangement: Sequence[PieceType],
    is_four_player: bool,
    opponent_setup: Optional[Sequence[PieceType]] = None,
    rng: Optional[random.Random] = None,
) -> float:
    """Score an arrangement of piece types; higher is better."""
    rng = rng or random.Random()
    columns = VALID_COLUMNS_4P if is_four_player else VALID_COLUMNS_2P
    center = (len(columns) - 1) / 2
    score = 0.0

    for index, piece_type in enumerate(arrangement):
        from_center = abs(index - center)
        if piece_type == C:
            score += (center - from_center) * 15
        elif piece_type == T:
            if index <= 1 or index >= len(columns) - 2:
                score += 8
        elif piece_type == D:
            if from_center <= 2:
                score += 6
        elif piece_type == S:
            score += 3

    for left, right in zip(arrangement, arrangement[1:]):
        if left == right:
            score += 2

    if opponent_setup:
        opponent_circles = {i for i, t in enumerate(opponent_setup) if t == C}
        for index, piece_type in enumerate(arrangement):
            if piece_type == C and index not in opponent_circles:
                score += 5

    return score + rng.random() * 3


def order_by_template(
    pieces: Sequence[Piece], template: Sequence[PieceType]
) -> list[Piece]:
    """Arrange ``pieces`` to follow ``template``; leftovers go last."""
    available = list(pieces)
    result = []
    for piece_type in template:
        for i, piece in enumerate(available):
            if piece.type == piece_type:
                result.append(available.pop(i))
                break
    return result + available


def _templates(is_four_player: bool) -> dict[str, tuple[PieceType, ...]]:
    return SETUP_TEMPLATES_4P if is_four_player else SETUP_TEMPLATES


def _evaluated_setup(
    pieces: list[Piece],
    is_four_player: bool,
    iterations: int,
    opponent_setup: Optional[Sequence[PieceType]],
    rng: random.Random,
) -> list[Piece]:
    candidates: list[tuple[float, list[Piece]]] = []
    for _ in range(iterations):
        arrangement = list(pieces)
        rng.shuffle(arrangement)
        types = [p.type for p in arrangement]
        candidates.append(
            (evaluate_setup(types, is_four_player, opponent_setup, rng), arrangement)
        )
    for template in _templates(is_four_player).values():
        score = evaluate_setup(template, is_four_player, opponent_setup, rng)
        candidates.append(
            (score + TEMPLATE_BONUS, order_by_template(pieces, template))
        )

    candidates.sort(key=lambda c: c[0], reverse=True)
    top = candidates[: min(TOP_CANDIDATES, len(candidates))]
    return rng.choice(top)[1]


def select_template(
    strategy: str,
    is_four_player: bool,
    opponent_setup: Optional[Sequence[PieceType]] = None,
    rng: Optional[random.Random] = None,
) -> tuple[PieceType, ...]:
    """Template for a named strategy; ``counter`` reacts to the opponent."""
    rng = rng or random.Random()
    templates = _templates(is_four_player)
    if strategy == "random":
        return templates[rng.choice(list(templates))]
    if strategy in ("balanced", "aggressive", "defensive"):
        return templates[strategy]
    if strategy == "counter":
        if not opponent_setup:
            return templates["balanced"]
        distances = [abs(i - 3.5) for i, t in enumerate(opponent_setup) if t == C]
        average = sum(distances) / len(distances) if distances else 0
        # Circles bunched in the middle are answered by going wide.
        if average < 2:
            return templates.get("flanking", templates["balanced"])
        return templates.get("centerControl", templates["balanced"])
    return templates["balanced"]


def generate_ai_setup(
    color: PlayerColor,
    difficulty: Union[AIDifficulty, str, None],
    is_four_player: bool = False,
    opponent_setup: Optional[Sequence[PieceType]] = None,
    rng: Optional[random.Random] = None,
) -> list[Piece]:
    """Arrange ``color``'s pieces for the start line, left to right."""
    rng = rng or random.Random()
    pieces = create_unplaced_pieces(color, is_four_player)
    level = None
    if difficulty is not None:
        get_difficulty_profile(difficulty)
        level = AIDifficulty(difficulty)

    if level == AIDifficulty.BEGINNER:
        rng.shuffle(pieces)
        return pieces
    if level in EVALUATION_ITERATIONS:
        return _evaluated_setup(
            pieces,
            is_four_player,
            EVALUATION_ITERATIONS[level],
            opponent_setup,
            rng,
        )
    return order_by_template(pieces, _templates(is_four_player)["balanced"])


def get_setup_types(pieces: Sequence[Piece]) -> list[PieceType]:
    return [p.type for p in pieces]


def place_setup(
    board: Board,
    color: PlayerColor,
    arrangement: Sequence[Piece],
    is_four_player: bool = False,
) -> Board:
    """Put an arrangement onto the color's start line."""
    columns = VALID_COLUMNS_4P if is_four_player else VALID_COLUMNS_2P
    cells = start_line_cells(color, columns[0], columns[-1])
    logger.debug(
        f"{color.value} setup: {' '.join(p.type.value[0].upper() for p in arrangement)}"
    )
    return place_lineup(board, color, list(arrangement), cells)
