"""Governance action model - the execution of an approved poll."""

ACTION_DDL = """
CREATE TABLE IF NOT EXISTS governance_action (
    id VARCHAR PRIMARY KEY,
    poll_id VARCHAR NOT NULL,
    action_type VARCHAR NOT NULL,
    status VARCHAR NOT NULL,
    parameter_name VARCHAR,
    old_value VARCHAR,
    new_value VARCHAR,
    is_constitutional BOOLEAN NOT NULL DEFAULT FALSE,
    scheduled_at TIMESTAMP,
    executed_at TIMESTAMP,
    rollback_window_hours INTEGER NOT NULL,
    rollback_window_expires_at TIMESTAMP,
    error_message VARCHAR,
    rolled_back_at TIMESTAMP,
    rollback_initiation_type VARCHAR,
    rollback_initiated_by VARCHAR,
    rollback_poll_id VARCHAR,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""
