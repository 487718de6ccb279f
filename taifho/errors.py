"""
Taifho Error Hierarchy

Exceptions raised when a caller breaks the engine's contract. The search
itself never raises for ordinary situations: a player without legal moves
simply gets ``None`` back.

Usage:
    from taifho.errors import ConfigurationError

    try:
        config = get_difficulty_profile(name)
    except ConfigurationError as e:
        logger.warning(f"Unknown difficulty: {e.message}")
"""

from typing import Any

__all__ = [
    "ConfigurationError",
    "InvalidMoveError",
    "InvalidStateError",
    "TaifhoError",
]


class TaifhoError(Exception):
    """Base exception for all Taifho errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "TAIFHO_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class InvalidStateError(TaifhoError):
    """Malformed board or game state.

    Raised when a board is built from a grid that is not 10x10.
    """
    code: str = "INVALID_STATE"


class InvalidMoveError(TaifhoError):
    """Move that cannot be applied to the current board.

    Raised by the self-play runner when a move it is asked to play fails
    validation.
    """
    code: str = "INVALID_MOVE"


class ConfigurationError(TaifhoError):
    """Invalid or unknown configuration.

    Raised for unknown difficulty names and unsupported player counts.
    """
    code: str = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.config_key = config_key
        if config_key:
            self.context["config_key"] = config_key
