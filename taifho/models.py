"""
Pydantic Models for Taifho Game State
Value types shared by the rules, the search and the self-play runner.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, Field


class PlayerColor(str, Enum):
    """Player color enumeration"""
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"


class PieceType(str, Enum):
    """Piece type enumeration"""
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    DIAMOND = "diamond"


class Position(BaseModel):
    """Board cell (x = column, y = row)"""
    x: int
    y: int

    class Config:
        frozen = True

    def to_key(self) -> str:
        """Convert position to string key"""
        return f"{self.x},{self.y}"


class Piece(BaseModel):
    """A single piece. Moves relocate it; they never mutate it."""
    id: str
    type: PieceType
    color: PlayerColor

    class Config:
        frozen = True


class Move(BaseModel):
    """A piece relocation from one cell to another"""
    from_pos: Position = Field(alias="from")
    to: Position
    piece: Piece
    # No current rule removes pieces; kept for callers that serialize moves.
    captured: Optional[Piece] = None

    class Config:
        populate_by_name = True
        frozen = True

    def signature(self) -> Tuple[int, int, int, int]:
        """Return ``(fx, fy, tx, ty)``, the key used by history tables."""
        return (self.from_pos.x, self.from_pos.y, self.to.x, self.to.y)

    def is_reverse_of(self, other: "Move") -> bool:
        """True when this move undoes ``other`` (same cells, swapped)."""
        return (
            self.from_pos.x == other.to.x
            and self.from_pos.y == other.to.y
            and self.to.x == other.from_pos.x
            and self.to.y == other.from_pos.y
        )

    def same_squares(self, other: "Move") -> bool:
        """True when both moves use the same origin and destination."""
        return self.signature() == other.signature()


class AIConfig(BaseModel):
    """Search configuration for one computer player"""
    depth: int = Field(0, ge=0)
    # Percentage (0-100) of score noise added at the root.
    randomness: float = Field(0, ge=0, le=100)
    use_repetition_penalty: bool = Field(True, alias="useRepetitionPenalty")
    use_tt: bool = Field(False, alias="useTT")
    use_iterative_deepening: bool = Field(
        False, alias="useIterativeDeepening"
    )
    use_mcts: bool = Field(False, alias="useMCTS")
    mcts_simulations: Optional[int] = Field(
        None, ge=1, alias="mctsSimulations"
    )
    # Soft wall-clock budget in milliseconds.
    time_limit: Optional[int] = Field(None, ge=1, alias="timeLimit")

    class Config:
        populate_by_name = True
        frozen = True
