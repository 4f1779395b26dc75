"""
Table rules for a round of blackjack.

A `Ruleset` is an immutable value. The builder-style ``with_*`` methods return
a modified copy, so one ruleset can be shared by any number of games.
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict

from fairjack.blackjack.constants import DEALER_STAND_TOTAL
from fairjack.blackjack.hand import BlackjackHand


@dataclass(frozen=True)
class Ruleset:
    decks: int = 1
    stand_on_soft_17: bool = True
    double_after_split: bool = True
    surrender_allowed: bool = False

    def __post_init__(self):
        if self.decks < 1:
            raise ValueError("Number of decks must be at least 1")

    def with_decks(self, decks: int) -> "Ruleset":
        """Set the number of decks to be used in the game."""
        return replace(self, decks=decks)

    def with_stand_on_soft_17(self, stand: bool) -> "Ruleset":
        """If `stand` is True, the dealer stands on a soft 17."""
        return replace(self, stand_on_soft_17=stand)

    def with_double_after_split(self, allowed: bool) -> "Ruleset":
        return replace(self, double_after_split=allowed)

    def with_surrender(self, allowed: bool) -> "Ruleset":
        return replace(self, surrender_allowed=allowed)

    def dealer_should_hit(self, hand: BlackjackHand) -> bool:
        """Determine if the dealer should hit based on the game rules."""
        value = hand.value()
        if value.total < DEALER_STAND_TOTAL:
            return True
        return (
            value.total == DEALER_STAND_TOTAL
            and value.soft
            and not self.stand_on_soft_17
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert rules to a dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ruleset":
        """Build a ruleset from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

