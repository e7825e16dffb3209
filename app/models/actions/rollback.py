"""Rollback request model - audit of every accepted rollback initiation."""

ROLLBACK_REQUEST_DDL = """
CREATE TABLE IF NOT EXISTS rollback_request (
    id VARCHAR PRIMARY KEY,
    action_id VARCHAR NOT NULL,
    initiation_type VARCHAR NOT NULL,
    initiated_by VARCHAR,
    signer_count INTEGER,
    authority_percentage INTEGER,
    reasons VARCHAR,
    rollback_poll_id VARCHAR NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""
