"""Vote repository - one row per (poll, user, identity), enforced by the store."""

import duckdb

from app.errors import DuplicateVote
from app.models import Vote
from app.repositories.base import BaseRepository
from app.repositories.db import Transaction


class VoteRepository(BaseRepository):
    """Repository for vote rows."""

    table = "vote"
    entity = Vote
    label = "Vote"

    def insert(self, tx: Transaction, entity: Vote) -> None:
        try:
            super().insert(tx, entity)
        except duckdb.ConstraintException as exc:
            raise DuplicateVote(f"Already voted on poll {entity.poll_id} as {entity.identity_mode}") from exc

    def find(self, tx: Transaction, poll_id: str, user_id: str, identity_mode: str) -> Vote | None:
        votes = self.select(
            tx,
            "poll_id = ? AND user_id = ? AND identity_mode = ?",
            [poll_id, user_id, identity_mode],
        )
        return votes[0] if votes else None

    def for_user(self, tx: Transaction, poll_id: str, user_id: str) -> list[Vote]:
        return self.select(tx, "poll_id = ? AND user_id = ?", [poll_id, user_id], order_by="identity_mode DESC")

    def for_poll(self, tx: Transaction, poll_id: str) -> list[Vote]:
        return self.select(tx, "poll_id = ?", [poll_id], order_by="displayed_at")

    def unique_voters(self, tx: Transaction, poll_id: str) -> int:
        return int(tx.scalar("SELECT COUNT(DISTINCT user_id) FROM vote WHERE poll_id = ?", [poll_id]))

    def breakdown(self, tx: Transaction, poll_id: str) -> list[dict]:
        """Count and weight per (identity, option)."""
        return tx.fetch_dicts(
            """
            SELECT identity_mode, vote_option,
                   COUNT(*) AS count,
                   SUM(final_weight) AS weight
            FROM vote
            WHERE poll_id = ?
            GROUP BY identity_mode, vote_option
            """,
            [poll_id],
        )

    def sections(self, tx: Transaction, poll_id: str) -> list[dict]:
        return tx.fetch_dicts(
            """
            SELECT section, COUNT(*) AS count, SUM(final_weight) AS weight
            FROM vote
            WHERE poll_id = ?
            GROUP BY section
            ORDER BY section
            """,
            [poll_id],
        )
