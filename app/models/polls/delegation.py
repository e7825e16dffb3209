"""Delegation model - an identity handing its vote to a verified delegate."""

DELEGATION_DDL = """
CREATE TABLE IF NOT EXISTS delegation (
    id VARCHAR PRIMARY KEY,
    delegator_id VARCHAR NOT NULL,
    identity_mode VARCHAR NOT NULL,
    delegate_id VARCHAR NOT NULL,
    delegation_type VARCHAR NOT NULL,
    target_poll_id VARCHAR,
    active_from TIMESTAMP NOT NULL,
    active_until TIMESTAMP,
    revoked_at TIMESTAMP,
    created_at TIMESTAMP NOT NULL
)
"""
