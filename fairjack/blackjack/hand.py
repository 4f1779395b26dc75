"""
BlackjackHand: a hand scored under blackjack rules.
"""

from typing import Iterable, NamedTuple, Optional

from fairjack.blackjack.constants import ACE_REDUCTION, BLACKJACK, BLACKJACK_VALUES
from fairjack.blackjack.errors import InternalStateError
from fairjack.common.card import Card, Rank
from fairjack.common.hand import Hand


class HandValue(NamedTuple):
    """A hand total and whether an Ace is still counted as 11."""

    total: int
    soft: bool


class BlackjackHand(Hand):
    """A hand in the game of Blackjack."""

    __slots__ = ("_cards", "_is_split", "_split_aces")

    def __init__(
        self,
        cards: Optional[Iterable[Card]] = None,
        is_split: bool = False,
        split_aces: bool = False,
    ):
        super().__init__(cards)
        self._is_split = is_split
        self._split_aces = split_aces

    def _evaluate(self) -> HandValue:
        """
        Count every Ace as 11, then count them down to 1 one at a time for as
        long as the total is over 21.
        """
        total = 0
        high_aces = 0
        for card in self._cards:
            total += BLACKJACK_VALUES[card.rank]
            if card.rank == Rank.ACE:
                high_aces += 1
        while total > BLACKJACK and high_aces:
            total -= ACE_REDUCTION
            high_aces -= 1
        return HandValue(total, high_aces > 0)

    def value(self) -> HandValue:
        return self._evaluate()

    def score(self) -> int:
        """Calculate the optimal value of the hand with ace handling."""
        return self._evaluate().total

    def initial_value(self) -> Optional[HandValue]:
        """Value of the first two cards, or None if fewer were dealt."""
        if len(self._cards) < 2:
            return None
        return BlackjackHand(self._cards[:2]).value()

    @property
    def is_soft(self) -> bool:
        """Determine if the hand is soft (contains an ace counted as 11)."""
        return self._evaluate().soft

    @property
    def is_blackjack(self) -> bool:
        """A natural: exactly two cards totalling 21, not produced by a split."""
        return (
            len(self._cards) == 2 and not self._is_split and self.score() == BLACKJACK
        )

    @property
    def is_bust(self) -> bool:
        return self.score() > BLACKJACK

    @property
    def is_splittable(self) -> bool:
        """Two cards of equal value; a Ten and a King qualify."""
        return len(self._cards) == 2 and self._cards[0].value == self._cards[1].value

    @property
    def is_pair_of_aces(self) -> bool:
        return len(self._cards) == 2 and all(c.rank == Rank.ACE for c in self._cards)

    @property
    def is_split(self) -> bool:
        """Return whether this hand was created from a split."""
        return self._is_split

    @property
    def split_aces(self) -> bool:
        """Return whether this hand came from splitting a pair of Aces."""
        return self._split_aces

    def deal(self, card: Card) -> None:
        self.add_card(card)

    def split_off(self) -> "BlackjackHand":
        """
        Detach the second card into a new hand. Both hands are marked as split,
        and as split aces when the pair was Aces.

        :raises InternalStateError: If the hand does not hold exactly two cards.
        """
        if len(self._cards) != 2:
            raise InternalStateError(
                f"Cannot split a hand of {len(self._cards)} cards"
            )
        aces = self.is_pair_of_aces
        second = self._cards.pop()
        self._is_split = True
        self._split_aces = aces
        return BlackjackHand([second], is_split=True, split_aces=aces)

    def hidden_hole(self) -> "BlackjackHand":
        """Copy of the hand without its first card."""
        return BlackjackHand(self._cards[1:], self._is_split, self._split_aces)

    def copy(self) -> "BlackjackHand":
        return BlackjackHand(self._cards, self._is_split, self._split_aces)

    def __eq__(self, other):
        if isinstance(other, BlackjackHand):
            return (
                self._cards == other._cards
                and self._is_split == other._is_split
                and self._split_aces == other._split_aces
            )
        return NotImplemented
