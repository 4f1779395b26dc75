"""
The blackjack round engine: hands, rules, the player's bankroll and the
state machine that plays a round.
"""

from fairjack.blackjack.action import Action
from fairjack.blackjack.errors import (
    GameError,
    InvalidActionError,
    InsufficientFundsError,
    DoubleAfterSplitError,
    SurrenderNotAllowedError,
    DeckExhaustedError,
    InternalStateError,
)
from fairjack.blackjack.hand import BlackjackHand, HandValue
from fairjack.blackjack.rules import Ruleset
from fairjack.blackjack.player import Player
from fairjack.blackjack.game import Game, Last, Outcome, Phase, Result, State, View

__all__ = [
    "Action",
    "GameError",
    "InvalidActionError",
    "InsufficientFundsError",
    "DoubleAfterSplitError",
    "SurrenderNotAllowedError",
    "DeckExhaustedError",
    "InternalStateError",
    "BlackjackHand",
    "HandValue",
    "Ruleset",
    "Player",
    "Game",
    "Last",
    "Outcome",
    "Phase",
    "Result",
    "State",
    "View",
]
