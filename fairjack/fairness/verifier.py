"""
Independent verification of a finished round.

Given the seeds revealed after play and the commitments published before it,
the verifier rebuilds an unshuffled deck, replays the house shuffle and then
the player shuffle, and checks every published hash and the dealt cards
against the replay. Any mismatch proves the deck was not the one committed to.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple
import logging

from fairjack.common.deck import Deck
from fairjack.fairness.commitment import HouseCommitment, deck_commitment, seed_commitment
from fairjack.fairness.pcg import PcgRng, Seed


class VerificationType(Enum):
    """Types of verification checks."""

    SEED_COMMITMENT = auto()
    HOUSE_DECK = auto()
    FINAL_DECK = auto()
    DEAL_SEQUENCE = auto()


class VerificationResult:
    """
    Result of a verification check.

    Attributes:
        verification_type: The type of verification check
        passed: Whether the check passed
        error_detail: Details about the error if the check failed
    """

    def __init__(
        self,
        verification_type: VerificationType,
        passed: bool,
        error_detail: Optional[str] = None,
    ):
        self.verification_type = verification_type
        self.passed = passed
        self.error_detail = error_detail

    def __str__(self) -> str:
        status = "PASSED" if self.passed else "FAILED"
        result = f"{self.verification_type.name}: {status}"
        if not self.passed and self.error_detail:
            result += f" - {self.error_detail}"
        return result

    def __repr__(self) -> str:
        return f"VerificationResult({self.verification_type.name}, passed={self.passed})"


@dataclass(frozen=True)
class RoundRecord:
    """
    Everything needed to audit one round.

    Attributes:
        commitment: Hashes the house published before play.
        house_seed: The house seed, revealed after play.
        player_seed: The player's shuffle seed, if the player reshuffled.
        final_deck_hash: Deck hash the player observed just before betting.
        dealt: Notation of every card drawn in the round, in order.
    """

    commitment: HouseCommitment
    house_seed: Seed
    player_seed: Optional[Seed] = None
    final_deck_hash: Optional[str] = None
    dealt: Tuple[str, ...] = field(default_factory=tuple)


def replay_deck(decks: int, house_seed: Seed, player_seed: Optional[Seed] = None) -> Deck:
    """Rebuild the deck order the house shuffle, then the player shuffle, produced."""
    deck = Deck(decks)
    deck.shuffle(PcgRng.from_seed(house_seed))
    if player_seed is not None:
        deck.shuffle(PcgRng.from_seed(player_seed))
    return deck


def top_cards(deck: Deck, count: int) -> Tuple[str, ...]:
    """Notation of the next ``count`` cards in draw order."""
    return tuple(card.notation for card in reversed(deck.cards[len(deck.cards) - count :]))


class FairnessVerifier:
    """
    Verifies a `RoundRecord` against an independent replay of its shuffles.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def verify(self, record: RoundRecord) -> List[VerificationResult]:
        """
        Run every check that the record has data for.

        Returns:
            A list of verification results
        """
        commitment = record.commitment
        results = [self._verify_seed(record.house_seed, commitment.seed_hash)]

        house_deck = replay_deck(commitment.decks, record.house_seed)
        results.append(
            self._compare(
                VerificationType.HOUSE_DECK,
                deck_commitment(house_deck),
                commitment.deck_hash,
            )
        )

        final_deck = replay_deck(commitment.decks, record.house_seed, record.player_seed)
        if record.final_deck_hash is not None:
            results.append(
                self._compare(
                    VerificationType.FINAL_DECK,
                    deck_commitment(final_deck),
                    record.final_deck_hash,
                )
            )
        if record.dealt:
            results.append(self._verify_deal(final_deck, record.dealt))

        for result in results:
            if not result.passed:
                self.logger.warning("Fairness check failed: %s", result)
        return results

    def is_fair(self, record: RoundRecord) -> bool:
        return all(result.passed for result in self.verify(record))

    def _verify_seed(self, seed: Seed, expected: str) -> VerificationResult:
        return self._compare(VerificationType.SEED_COMMITMENT, seed_commitment(seed), expected)

    def _verify_deal(self, deck: Deck, dealt: Sequence[str]) -> VerificationResult:
        if len(dealt) > deck.size:
            return VerificationResult(
                VerificationType.DEAL_SEQUENCE,
                False,
                f"{len(dealt)} cards dealt from a deck of {deck.size}",
            )
        expected = top_cards(deck, len(dealt))
        for position, (seen, wanted) in enumerate(zip(dealt, expected)):
            if seen != wanted:
                return VerificationResult(
                    VerificationType.DEAL_SEQUENCE,
                    False,
                    f"Card {position} was {seen}, replay gives {wanted}",
                )
        return VerificationResult(VerificationType.DEAL_SEQUENCE, True)

    @staticmethod
    def _compare(
        verification_type: VerificationType, actual: str, expected: str
    ) -> VerificationResult:
        if actual == expected:
            return VerificationResult(verification_type, True)
        return VerificationResult(
            verification_type, False, f"expected {expected}, replay gives {actual}"
        )
