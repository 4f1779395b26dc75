from fairjack.common.card import Card, Rank, Suit
from fairjack.common.deck import Deck
from fairjack.common.hand import Hand

__all__ = ["Card", "Rank", "Suit", "Deck", "Hand"]
