"""
Provably fair shuffling for the fairjack engine.

This package provides the deterministic generator, the commitment hashes the
house publishes before play, an independent verifier for finished rounds, a
SQLite ledger for commitments and reveals, and statistical shuffle audits.
"""

from fairjack.fairness.pcg import PcgRng, Seed
from fairjack.fairness.commitment import (
    HouseCommitment,
    deck_commitment,
    seed_commitment,
    sha256_hex,
)
from fairjack.fairness.verifier import (
    VerificationType,
    VerificationResult,
    RoundRecord,
    FairnessVerifier,
    replay_deck,
)
from fairjack.fairness.storage import SQLiteCommitmentStore

__all__ = [
    "PcgRng",
    "Seed",
    "HouseCommitment",
    "deck_commitment",
    "seed_commitment",
    "sha256_hex",
    "VerificationType",
    "VerificationResult",
    "RoundRecord",
    "FairnessVerifier",
    "replay_deck",
    "SQLiteCommitmentStore",
]
