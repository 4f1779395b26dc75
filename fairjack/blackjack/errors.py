"""
Exceptions raised by the blackjack engine.

Every refusal a caller can provoke derives from `GameError` and leaves the
game exactly as it was, so the caller may retry with a different action.
`DeckExhaustedError` is the exception: it ends the round. `InternalStateError`
signals a bug in the engine and is not a `GameError`.
"""


class GameError(Exception):
    """Base class for errors a caller can trigger through normal play."""


class InvalidActionError(GameError):
    """Raised when an operation is not valid in the current state."""


class InsufficientFundsError(GameError):
    """Raised when a player does not have enough money to perform an action."""

    def __init__(self, shortfall: int):
        super().__init__(f"Insufficient chips: short by {shortfall}")
        self.shortfall = shortfall


class DoubleAfterSplitError(GameError):
    """Raised when doubling a split hand under rules that forbid it."""


class SurrenderNotAllowedError(GameError):
    """Raised when surrendering under rules that do not offer surrender."""


class DeckExhaustedError(GameError):
    """
    Raised when the deck runs out mid-round. The outstanding bet has been
    refunded and the game is left in the error state.
    """


class InternalStateError(RuntimeError):
    """Raised when an engine invariant does not hold."""
