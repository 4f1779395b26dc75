"""
The player seated at a blackjack game: a chip count and the hands in play.
"""

from dataclasses import dataclass, field
from typing import List

from fairjack.blackjack.hand import BlackjackHand


@dataclass
class Player:
    """
    Attributes:
        chips: Current bankroll. The game debits it when a bet, double or split
            is placed and credits it only when a finished round is settled.
        hands: The hands in play, in order. Index 0 unless a split occurred.
    """

    chips: int = 0
    hands: List[BlackjackHand] = field(default_factory=lambda: [BlackjackHand()])

    def __post_init__(self):
        if self.chips < 0:
            raise ValueError("Chip count cannot be negative")
        if not self.hands:
            self.hands = [BlackjackHand()]

    @property
    def hand(self) -> BlackjackHand:
        """The first hand."""
        return self.hands[0]

    def count(self) -> int:
        """Number of cards held across all hands."""
        return sum(len(hand) for hand in self.hands)

    def reset_hands(self) -> None:
        self.hands = [BlackjackHand()]
