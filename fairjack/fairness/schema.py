"""
Database schema for the commitment ledger.

Each round is written twice: once when the house commits (hashes only, the
seed stays secret) and once when the round is over and the seeds and the deal
transcript are revealed.
"""

import sqlite3

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS rounds (
    round_id INTEGER PRIMARY KEY,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    rules_config TEXT,  -- JSON of the ruleset
    num_decks INTEGER NOT NULL,
    seed_hash TEXT NOT NULL,
    deck_hash TEXT NOT NULL,
    final_deck_hash TEXT,
    house_seed TEXT,  -- hex, NULL until revealed
    player_seed TEXT,  -- hex, NULL if the player did not reshuffle
    dealt TEXT,  -- space separated card notation
    outcomes TEXT,  -- JSON array of results
    revealed_at DATETIME
);

CREATE TABLE IF NOT EXISTS verification_results (
    verification_id INTEGER PRIMARY KEY,
    round_id INTEGER,
    verification_type TEXT,
    passed BOOLEAN,
    error_detail TEXT,
    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (round_id) REFERENCES rounds(round_id)
);

CREATE INDEX IF NOT EXISTS idx_verification_round ON verification_results(round_id);
"""


def initialize_database(db_path: str) -> sqlite3.Connection:
    """
    Create the ledger tables if needed and return an open connection.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.executescript(SCHEMA_SQL)
    conn.commit()
    return conn
