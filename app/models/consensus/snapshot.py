"""Shadow consensus snapshot - one row per poll, overwritten on recompute."""

CONSENSUS_SNAPSHOT_DDL = """
CREATE TABLE IF NOT EXISTS consensus_snapshot (
    poll_id VARCHAR PRIMARY KEY,
    true_self_yes_count INTEGER NOT NULL,
    true_self_no_count INTEGER NOT NULL,
    true_self_abstain_count INTEGER NOT NULL,
    shadow_yes_count INTEGER NOT NULL,
    shadow_no_count INTEGER NOT NULL,
    shadow_abstain_count INTEGER NOT NULL,
    true_self_yes_pct DOUBLE NOT NULL,
    shadow_yes_pct DOUBLE NOT NULL,
    gap_pct DOUBLE NOT NULL,
    gap_interpretation VARCHAR NOT NULL,
    confidence_interval DOUBLE NOT NULL,
    sample_size INTEGER NOT NULL,
    trend_direction VARCHAR NOT NULL,
    recorded_at TIMESTAMP NOT NULL
)
"""
