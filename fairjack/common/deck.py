"""
This module contains the Deck class, which represents one or more
concatenated 52-card decks.

The freshly built order is fixed (suit by suit, rank by rank, repeated per
deck) so that shuffling is the only source of disorder and a shuffled order
can be replayed exactly from the seeds that produced it.

>>> deck = Deck()
>>> deck.size
52
>>> deck.draw()
Card(Suit.DIAMONDS, Rank.ACE)
>>> deck.size
51
"""

import random
from typing import List, Optional, Protocol, Union

from fairjack.common.card import Card, Rank, Suit


class RangeSource(Protocol):
    """Anything that can pick a uniform integer in ``[start, stop)``."""

    def randrange(self, start: int, stop: int) -> int: ...


class Deck:
    """
    A class representing an ordered pile of cards. The end of the list is the
    top of the deck.
    """

    # Precompute the default deck
    _default_deck = [Card(suit, rank) for suit in Suit for rank in Rank]

    def __init__(self, decks: int = 1, cards: Union[List[Card], None] = None):
        """
        Initialize a Deck instance.

        :param decks: Number of standard 52-card decks to concatenate.
        :param cards: A list of Card instances to populate the deck (optional).
                      If provided, ``decks`` is ignored.
        >>> Deck(2).size
        104
        """
        if cards is None:
            if decks < 1:
                raise ValueError("Number of decks must be at least 1")
            self.cards: List[Card] = self.initialize_default_deck() * decks
        else:
            self.cards = cards.copy()

    def initialize_default_deck(self) -> List[Card]:
        """
        Construct a single deck with all combinations of suits and ranks.

        :return: A list of Card instances in enumeration order.
        """
        return self._default_deck.copy()

    @classmethod
    def from_notation(cls, notation: str) -> "Deck":
        """Rebuild a deck from the output of :meth:`notation`."""
        return cls(cards=[Card.from_notation(token) for token in notation.split()])

    def shuffle(self, rng: Optional[RangeSource] = None) -> "Deck":
        """
        Fisher-Yates shuffle in place, walking from the last position down and
        swapping each position with a uniformly chosen one at or below it.

        :param rng: Source of uniform draws. Defaults to the ``random`` module.
        """
        if rng is None:
            rng = random
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = rng.randrange(0, i + 1)
            cards[i], cards[j] = cards[j], cards[i]
        return self

    def draw(self) -> Optional[Card]:
        """
        Remove and return the top card, or None when the deck is exhausted.
        """
        if not self.cards:
            return None
        return self.cards.pop()

    def notation(self) -> str:
        """
        Space-joined card notations in current order. This string is the input
        of the deck commitment hash and is not used for play.

        >>> Deck(cards=[Card(Suit.HEARTS, Rank.ACE), Card(Suit.SPADES, Rank.KING)]).notation()
        'Ah Ks'
        """
        return " ".join(card.notation for card in self.cards)

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.
        """
        return len(self.cards)

    def count(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        """
        Check if the deck is empty.
        """
        return len(self.cards) == 0

    def copy(self) -> "Deck":
        return Deck(cards=self.cards)

    def __eq__(self, other):
        if isinstance(other, Deck):
            return self.cards == other.cards
        return NotImplemented

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the deck.
        """
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the deck.

        >>> str(Deck())
        'Deck of 52 cards'
        """
        return f"Deck of {len(self.cards)} cards"
