"""Stake pool and stake models - outcome prediction market per poll."""

STAKE_POOL_DDL = """
CREATE TABLE IF NOT EXISTS stake_pool (
    poll_id VARCHAR PRIMARY KEY,
    status VARCHAR NOT NULL,
    total_yes_stake BIGINT NOT NULL DEFAULT 0,
    total_no_stake BIGINT NOT NULL DEFAULT 0,
    yes_staker_count INTEGER NOT NULL DEFAULT 0,
    no_staker_count INTEGER NOT NULL DEFAULT 0,
    average_yes_stake DOUBLE NOT NULL DEFAULT 0,
    average_no_stake DOUBLE NOT NULL DEFAULT 0,
    largest_stake BIGINT NOT NULL DEFAULT 0,
    winning_option VARCHAR,
    total_distributed BIGINT NOT NULL DEFAULT 0,
    platform_retained BIGINT NOT NULL DEFAULT 0,
    closed_at TIMESTAMP,
    distributed_at TIMESTAMP,
    created_at TIMESTAMP NOT NULL
)
"""

STAKE_DDL = """
CREATE TABLE IF NOT EXISTS stake (
    id VARCHAR PRIMARY KEY,
    poll_id VARCHAR NOT NULL,
    user_id VARCHAR NOT NULL,
    identity_mode VARCHAR NOT NULL,
    position VARCHAR NOT NULL,
    amount BIGINT NOT NULL,
    confidence_level VARCHAR NOT NULL,
    reasoning VARCHAR,
    reputation_at_stake DOUBLE,
    status VARCHAR NOT NULL,
    reward BIGINT,
    created_at TIMESTAMP NOT NULL,
    resolved_at TIMESTAMP,
    UNIQUE (poll_id, user_id, identity_mode)
)
"""
