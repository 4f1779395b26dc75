"""
SQLite storage for round commitments and reveals.

The ledger lives with whoever runs the protocol (house or auditor). The game
engine never touches it: seeds are handed to the ledger by the caller.
"""

import json
import sqlite3
from typing import Any, Dict, Iterable, List, Optional

from fairjack.fairness.commitment import HouseCommitment
from fairjack.fairness.pcg import Seed
from fairjack.fairness.schema import initialize_database
from fairjack.fairness.verifier import RoundRecord, VerificationResult


class SQLiteCommitmentStore:
    """
    Store commitments before play and reveals after it, and load them back
    as `RoundRecord` objects for verification.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the store.

        Args:
            db_path: Optional path to the database file. If None, uses an in-memory database.
        """
        self.db_path = db_path
        self.conn = initialize_database(db_path if db_path else ":memory:")

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def record_commitment(
        self,
        commitment: HouseCommitment,
        rules_config: Optional[Dict[str, Any]] = None,
    ) -> int:
        """
        Store what the house published before play.

        Returns:
            The ID of the new round
        """
        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO rounds (rules_config, num_decks, seed_hash, deck_hash)
            VALUES (?, ?, ?, ?)
            """,
            (
                json.dumps(rules_config or {}),
                commitment.decks,
                commitment.seed_hash,
                commitment.deck_hash,
            ),
        )
        self.conn.commit()
        return cursor.lastrowid

    def record_final_deck(self, round_id: int, final_deck_hash: str) -> None:
        """Store the deck hash the player saw after their own shuffle."""
        self._update(round_id, "final_deck_hash = ?", (final_deck_hash,))

    def record_reveal(
        self,
        round_id: int,
        house_seed: Seed,
        player_seed: Optional[Seed] = None,
        dealt: Iterable[str] = (),
        outcomes: Iterable[str] = (),
    ) -> None:
        """Store the revealed seeds and the deal transcript of a finished round."""
        self._update(
            round_id,
            """
            house_seed = ?, player_seed = ?, dealt = ?, outcomes = ?,
            revealed_at = CURRENT_TIMESTAMP
            """,
            (
                house_seed.to_hex(),
                player_seed.to_hex() if player_seed is not None else None,
                " ".join(dealt),
                json.dumps(list(outcomes)),
            ),
        )

    def _update(self, round_id: int, assignments: str, params: tuple) -> None:
        cursor = self.conn.cursor()
        cursor.execute(
            f"UPDATE rounds SET {assignments} WHERE round_id = ?",
            (*params, round_id),
        )
        if cursor.rowcount == 0:
            raise KeyError(f"Round {round_id} not found")
        self.conn.commit()

    def get_round(self, round_id: int) -> Optional[sqlite3.Row]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM rounds WHERE round_id = ?", (round_id,))
        return cursor.fetchone()

    def load_record(self, round_id: int) -> RoundRecord:
        """
        Build a `RoundRecord` for a revealed round.

        Raises:
            KeyError: If the round does not exist
            ValueError: If the house seed has not been revealed yet
        """
        row = self.get_round(round_id)
        if row is None:
            raise KeyError(f"Round {round_id} not found")
        if row["house_seed"] is None:
            raise ValueError(f"Round {round_id} has not been revealed")
        return RoundRecord(
            commitment=HouseCommitment(row["seed_hash"], row["deck_hash"], row["num_decks"]),
            house_seed=Seed.from_hex(row["house_seed"]),
            player_seed=Seed.from_hex(row["player_seed"]) if row["player_seed"] else None,
            final_deck_hash=row["final_deck_hash"],
            dealt=tuple((row["dealt"] or "").split()),
        )

    def store_verification_results(
        self, round_id: int, results: Iterable[VerificationResult]
    ) -> None:
        cursor = self.conn.cursor()
        cursor.executemany(
            """
            INSERT INTO verification_results (
                round_id, verification_type, passed, error_detail
            ) VALUES (?, ?, ?, ?)
            """,
            [
                (round_id, r.verification_type.name, r.passed, r.error_detail)
                for r in results
            ],
        )
        self.conn.commit()

    def get_verification_results(self, round_id: int) -> List[Dict[str, Any]]:
        cursor = self.conn.cursor()
        cursor.execute(
            """
            SELECT verification_type, passed, error_detail
            FROM verification_results WHERE round_id = ?
            ORDER BY verification_id
            """,
            (round_id,),
        )
        return [dict(row) for row in cursor.fetchall()]
