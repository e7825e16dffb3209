"""Constitutional article model - seeded once, never changed by votes."""

ARTICLE_DDL = """
CREATE TABLE IF NOT EXISTS constitutional_article (
    number INTEGER PRIMARY KEY,
    title VARCHAR NOT NULL,
    principle VARCHAR NOT NULL,
    protected_rule VARCHAR NOT NULL,
    created_at TIMESTAMP NOT NULL
)
"""
