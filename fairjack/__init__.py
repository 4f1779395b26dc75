"""
fairjack: a multi-hand blackjack engine with a provably fair shuffle.

The house and the player each shuffle the deck with their own seeded
generator before the bet; the house commits to its seed and deck order in
advance, and after the round anyone can replay both shuffles and check the
deal.
"""

from fairjack.common.card import Card, Rank, Suit
from fairjack.common.deck import Deck
from fairjack.blackjack import (
    Action,
    BlackjackHand,
    Game,
    GameError,
    Outcome,
    Phase,
    Player,
    Result,
    Ruleset,
    State,
    View,
)
from fairjack.fairness import FairnessVerifier, PcgRng, RoundRecord, Seed

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Deck",
    "Action",
    "BlackjackHand",
    "Game",
    "GameError",
    "Outcome",
    "Phase",
    "Player",
    "Result",
    "Ruleset",
    "State",
    "View",
    "FairnessVerifier",
    "PcgRng",
    "RoundRecord",
    "Seed",
]
