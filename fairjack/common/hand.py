"""
This module contains classes to represent a hand of cards in a card game.

It includes an abstract base class `AbstractHand`, and a concrete implementation `Hand`.
A hand is append-only: cards are dealt onto it and never taken back, with the
single exception of a blackjack split (see `BlackjackHand.split_off`).

Classes:

AbstractHand: An abstract base class for a hand of cards.
Hand: A concrete implementation of a hand of cards.
"""
from abc import ABC
from typing import Iterable, Optional, Tuple

from fairjack.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for a hand of cards.

    This class provides a basic structure for a hand of cards: an ordered
    sequence that only grows. Subclasses should override the __repr__ and
    __str__ methods to provide a string representation of the hand.
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards = list(cards) if cards is not None else []

    @property
    def cards(self) -> Tuple[Card, ...]:
        """Returns the cards in the hand, in the order they were dealt."""
        return tuple(self._cards)

    def add_card(self, card: Card) -> None:
        """
        Adds a card to the hand.

        Args:
            card: The card to add.
        """
        self._cards.append(card)

    def __len__(self) -> int:
        return len(self._cards)

    def __eq__(self, other):
        if isinstance(other, AbstractHand):
            return type(self) is type(other) and self._cards == other._cards
        return NotImplemented


class Hand(AbstractHand):
    """
    A concrete implementation of a hand of cards.

    This class provides a string representation of a hand of cards for both debugging and display purposes.
    """

    def __repr__(self) -> str:
        """
        Returns a string representation of the hand for debugging.

        Returns:
            A string in the form "Hand([Card(...), ...])".
        """
        return f"{type(self).__name__}({self._cards!r})"

    def __str__(self) -> str:
        """
        Returns a string representation of the hand for display.

        Returns:
            A string in the form "Card(...), ...".
        """
        return ", ".join(str(card) for card in self._cards)
