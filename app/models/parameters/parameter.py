"""Parameter model - whitelist of platform values governance may change."""

PARAMETER_DDL = """
CREATE TABLE IF NOT EXISTS parameter (
    name VARCHAR PRIMARY KEY,
    category VARCHAR NOT NULL,
    description VARCHAR,
    value_type VARCHAR NOT NULL,
    current_value VARCHAR NOT NULL,
    default_value VARCHAR NOT NULL,
    min_value DOUBLE,
    max_value DOUBLE,
    is_voteable BOOLEAN NOT NULL DEFAULT TRUE,
    requires_supermajority BOOLEAN NOT NULL DEFAULT FALSE,
    is_emergency BOOLEAN NOT NULL DEFAULT FALSE,
    frozen_until TIMESTAMP,
    rollback_count INTEGER NOT NULL DEFAULT 0,
    times_changed INTEGER NOT NULL DEFAULT 0,
    last_changed_at TIMESTAMP,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""
