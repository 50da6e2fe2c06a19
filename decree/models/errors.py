"""Exceptions raised by the rules engine.

Every error carries an ``ErrorCode`` so outer layers can report a reason
without parsing messages.
"""

from decree.models.enums import ErrorCode


class GameError(Exception):
    """Base class for all rules-engine errors."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            code: Machine-readable reason
            message: Optional human-readable detail (defaults to the code)

        """
        super().__init__(message or code.value)
        self.code = code
        self.message = message or code.value


class PreconditionError(GameError, ValueError):
    """An operation was called with input outside its documented domain."""


class IllegalMoveError(GameError):
    """A player attempted a move the rules forbid. Game state is unchanged."""


class AIInvariantError(GameError):
    """The AI reached a state that should be unreachable."""
