"""Poll model - a proposal with its section multipliers and running tallies."""

POLL_DDL = """
CREATE TABLE IF NOT EXISTS poll (
    id VARCHAR PRIMARY KEY,
    title VARCHAR NOT NULL,
    description VARCHAR NOT NULL,
    poll_type VARCHAR NOT NULL,
    status VARCHAR NOT NULL,
    proposal_url VARCHAR,
    created_by VARCHAR,
    start_at TIMESTAMP NOT NULL,
    end_at TIMESTAMP NOT NULL,
    section_multipliers DOUBLE[] NOT NULL,
    yes_count INTEGER NOT NULL DEFAULT 0,
    no_count INTEGER NOT NULL DEFAULT 0,
    abstain_count INTEGER NOT NULL DEFAULT 0,
    yes_weight BIGINT NOT NULL DEFAULT 0,
    no_weight BIGINT NOT NULL DEFAULT 0,
    abstain_weight BIGINT NOT NULL DEFAULT 0,
    minimum_quorum INTEGER NOT NULL,
    approval_threshold DOUBLE NOT NULL,
    parameter_name VARCHAR,
    parameter_current_value VARCHAR,
    parameter_proposed_value VARCHAR,
    action_id VARCHAR,
    rollback_target_action_id VARCHAR,
    creation_cost BIGINT NOT NULL DEFAULT 0,
    final_yes_pct DOUBLE,
    final_no_pct DOUBLE,
    final_abstain_pct DOUBLE,
    quorum_met BOOLEAN,
    closed_at TIMESTAMP,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""
