"""In-store token ledger - balances, locks and an append-only journal.

Lives in the governance database so ledger writes share the governance
transaction.
"""

TOKEN_ACCOUNT_DDL = """
CREATE TABLE IF NOT EXISTS token_account (
    user_id VARCHAR NOT NULL,
    identity_mode VARCHAR NOT NULL,
    token_type VARCHAR NOT NULL,
    balance BIGINT NOT NULL DEFAULT 0,
    locked BIGINT NOT NULL DEFAULT 0,
    updated_at TIMESTAMP NOT NULL,
    PRIMARY KEY (user_id, identity_mode, token_type)
)
"""

TOKEN_LOCK_DDL = """
CREATE TABLE IF NOT EXISTS token_lock (
    reference_id VARCHAR NOT NULL,
    user_id VARCHAR NOT NULL,
    identity_mode VARCHAR NOT NULL,
    token_type VARCHAR NOT NULL,
    amount BIGINT NOT NULL,
    released BOOLEAN NOT NULL DEFAULT FALSE,
    created_at TIMESTAMP NOT NULL,
    released_at TIMESTAMP,
    PRIMARY KEY (reference_id, user_id, identity_mode, token_type)
)
"""

TOKEN_TRANSACTION_DDL = """
CREATE TABLE IF NOT EXISTS token_transaction (
    id VARCHAR PRIMARY KEY,
    user_id VARCHAR NOT NULL,
    identity_mode VARCHAR NOT NULL,
    token_type VARCHAR NOT NULL,
    kind VARCHAR NOT NULL,
    amount BIGINT NOT NULL,
    memo VARCHAR,
    reference_id VARCHAR,
    created_at TIMESTAMP NOT NULL
)
"""
