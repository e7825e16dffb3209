"""Vote model - one row per (poll, user, identity)."""

VOTE_DDL = """
CREATE TABLE IF NOT EXISTS vote (
    id VARCHAR PRIMARY KEY,
    poll_id VARCHAR NOT NULL,
    user_id VARCHAR NOT NULL,
    identity_mode VARCHAR NOT NULL,
    vote_option VARCHAR NOT NULL,
    section INTEGER NOT NULL,
    section_multiplier DOUBLE NOT NULL,
    base_weight INTEGER NOT NULL,
    final_weight INTEGER NOT NULL,
    reasoning VARCHAR,
    change_count INTEGER NOT NULL DEFAULT 0,
    is_delegated BOOLEAN NOT NULL DEFAULT FALSE,
    delegated_by VARCHAR,
    reputation_at_vote DOUBLE,
    timing_jitter_seconds INTEGER NOT NULL DEFAULT 0,
    cast_at TIMESTAMP NOT NULL,
    displayed_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL,
    UNIQUE (poll_id, user_id, identity_mode)
)
"""
