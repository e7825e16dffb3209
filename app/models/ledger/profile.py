"""User profile - reputation score, verification flag and deletion marker."""

USER_PROFILE_DDL = """
CREATE TABLE IF NOT EXISTS user_profile (
    user_id VARCHAR PRIMARY KEY,
    reputation DOUBLE,
    is_verified BOOLEAN NOT NULL DEFAULT FALSE,
    created_at TIMESTAMP NOT NULL,
    deleted_at TIMESTAMP
)
"""
