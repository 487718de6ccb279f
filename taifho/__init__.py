"""Taifho: rules, search and self-play engine for a 10x10 race game.

Packages:
- taifho.rules: move validation, win detection, opening boards
- taifho.ai: move generation, evaluation, minimax and MCTS search
"""

from taifho.board import BOARD_SIZE, Board
from taifho.models import AIConfig, Move, Piece, PieceType, PlayerColor, Position

__version__ = "0.1.0"

__all__ = [
    "AIConfig",
    "BOARD_SIZE",
    "Board",
    "Move",
    "Piece",
    "PieceType",
    "PlayerColor",
    "Position",
]
