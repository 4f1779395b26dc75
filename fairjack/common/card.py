"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Spades, Clubs, and Diamonds.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Two through Ten, Jack, Queen, King, and Ace.

- `Card`: An immutable playing card. A card has a suit and a rank, a blackjack
point value, and a two-character notation (``"Ah"``, ``"Td"``) used when a
deck order is hashed for a fairness commitment.

Enumeration order of both enums is part of the fairness contract: a fresh
deck is built suit by suit, rank by rank, in declaration order.
"""

from dataclasses import dataclass
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck. The value is the notation letter.
    """

    HEARTS = "h"
    SPADES = "s"
    CLUBS = "c"
    DIAMONDS = "d"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
}


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck. The value is the notation symbol.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def rank_value(self) -> int:
        """The blackjack value of the rank, with an Ace counted as 11."""
        return _RANK_VALUES[self]

    @property
    def rank_str(self):
        """A string representation of the rank."""
        if self == Rank.TEN:
            return "10"
        return self.value

    def __str__(self) -> str:
        return self.rank_str


_RANK_VALUES = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
    Rank.ACE: 11,
}


@dataclass(frozen=True)
class Card:
    """
    Class representing a playing card. Cards are values: two cards with the
    same rank and suit are equal and interchangeable.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    2 of ♥
    >>> card.notation
    '2h'
    """

    suit: Suit
    rank: Rank

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank}")

    @property
    def value(self) -> int:
        """Point value of the card, with an Ace counted as 11."""
        return self.rank.rank_value

    @property
    def notation(self) -> str:
        """Two-character notation: rank symbol followed by suit letter."""
        return f"{self.rank.value}{self.suit.value}"

    @classmethod
    def from_notation(cls, notation: str) -> "Card":
        """
        Parse a two-character notation such as ``"Ks"`` back into a card.

        :raises ValueError: If the notation does not name a card.
        """
        if len(notation) != 2:
            raise ValueError(f"Invalid card notation: {notation!r}")
        try:
            return cls(Suit(notation[1]), Rank(notation[0]))
        except ValueError as exc:
            raise ValueError(f"Invalid card notation: {notation!r}") from exc

    def __repr__(self) -> str:
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        return f"{self.rank.rank_str} of {self.suit}"
