"""
Macanan Error Hierarchy

Unified exception hierarchy for consistent error handling across the service.
All custom exceptions inherit from MacananError for easy catching and filtering.

Usage:
    from macanan.errors import InvalidMoveError

    try:
        state = GameEngine.apply_move(state, move)
    except InvalidMoveError as e:
        logger.warning("Invalid move: %s", e.message)
"""

from typing import Any

__all__ = [
    "AIError",
    "ConfigurationError",
    "InvalidMoveError",
    "InvalidStateError",
    "MacananError",
    "RulesViolationError",
]


class MacananError(Exception):
    """Base exception for all Macanan errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "MACANAN_ERROR"

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


# =============================================================================
# Game Rules Errors
# =============================================================================


class RulesViolationError(MacananError):
    """Move rejected by the movement or capture rules.

    Attributes:
        rule: Short name of the rule that rejected the move
            (e.g. "restricted_orthogonal", "occupied_destination")
    """
    code: str = "RULES_VIOLATION"

    def __init__(
        self,
        message: str,
        rule: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.rule = rule
        if rule:
            self.context["rule"] = rule


class InvalidStateError(MacananError):
    """Corrupted or unexpected game state.

    Raised when the game state is in a configuration that should not be
    reachable through normal play (e.g. a finished game being advanced).
    """
    code: str = "INVALID_STATE"


class InvalidMoveError(RulesViolationError):
    """Move that cannot be applied to the current state.

    Raised when a move is structurally valid but cannot be applied
    (wrong side, wrong action kind for the phase, illegal destination).
    """
    code: str = "INVALID_MOVE"


# =============================================================================
# AI Errors
# =============================================================================


class AIError(MacananError):
    """Base class for AI-related errors."""
    code: str = "AI_ERROR"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MacananError):
    """Invalid configuration value.

    Raised when an environment variable or config field holds a value
    outside its accepted range.
    """
    code: str = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        key: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if key:
            self.context["key"] = key
