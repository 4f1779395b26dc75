"""
Commitment hashes for the commit-reveal protocol.

Before any card is seen the house publishes the hash of its seed and the hash
of the deck order it shuffled. After the round it reveals the seed; anyone can
then rebuild the deck, replay both shuffles and compare hashes.
"""

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Union

from fairjack.common.deck import Deck
from fairjack.fairness.pcg import Seed


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def deck_commitment(deck: Union[Deck, str]) -> str:
    """SHA-256 over a deck's notation string (or the string itself)."""
    notation = deck.notation() if isinstance(deck, Deck) else deck
    return sha256_hex(notation.encode("ascii"))


def seed_commitment(seed: Seed) -> str:
    """SHA-256 over the 16-byte little-endian encoding of a seed."""
    return seed.sha256()


@dataclass(frozen=True)
class HouseCommitment:
    """
    What the house publishes before the player sees a card.

    Attributes:
        seed_hash: SHA-256 of the house seed.
        deck_hash: SHA-256 of the deck order after the house shuffle.
        decks: Number of 52-card decks in play.
    """

    seed_hash: str
    deck_hash: str
    decks: int

    @classmethod
    def create(cls, seed: Seed, deck: Deck, decks: int) -> "HouseCommitment":
        return cls(seed_commitment(seed), deck_commitment(deck), decks)

    def to_dict(self) -> Dict[str, Any]:
        return {"seed_hash": self.seed_hash, "deck_hash": self.deck_hash, "decks": self.decks}
