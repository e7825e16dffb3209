"""Consensus snapshot repository - point-in-time summary, last write wins."""

from loguru import logger

from app.models import ConsensusSnapshot
from app.repositories.base import BaseRepository
from app.repositories.db import Transaction


class ConsensusRepository(BaseRepository):
    """Repository for consensus_snapshot rows."""

    table = "consensus_snapshot"
    entity = ConsensusSnapshot
    key = "poll_id"
    label = "Consensus snapshot"

    def upsert(self, tx: Transaction, snapshot: ConsensusSnapshot) -> None:
        """Insert or overwrite the poll's snapshot."""
        values = [getattr(snapshot, c) for c in self._columns]
        updates = ", ".join(f"{c} = EXCLUDED.{c}" for c in self._columns if c != self.key)
        tx.execute(
            f"""
            INSERT INTO consensus_snapshot ({', '.join(self._columns)})
            VALUES ({', '.join('?' for _ in self._columns)})
            ON CONFLICT (poll_id) DO UPDATE SET {updates}
            """,
            values,
        )
        logger.debug("Consensus snapshot saved: poll={}", snapshot.poll_id)

    def reputation_breakdown(self, tx: Transaction, poll_id: str) -> list[dict]:
        """Votes with the voter's reputation at vote time, for bucketing."""
        return tx.fetch_dicts(
            """
            SELECT identity_mode, vote_option, reputation_at_vote
            FROM vote
            WHERE poll_id = ? AND reputation_at_vote IS NOT NULL
            """,
            [poll_id],
        )
