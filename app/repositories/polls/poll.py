"""Poll repository - polls and their running tallies."""

from datetime import datetime

from loguru import logger

from app.models import Poll
from app.models.common import PollStatus, PollType, VoteOption
from app.repositories.base import BaseRepository
from app.repositories.db import Transaction


class PollRepository(BaseRepository):
    """Repository for poll rows."""

    table = "poll"
    entity = Poll
    label = "Poll"

    def list_polls(
        self,
        tx: Transaction,
        status: str | None = None,
        poll_type: str | None = None,
        created_by: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Poll]:
        clauses, params = [], []
        if status:
            clauses.append("status = ?")
            params.append(status)
        if poll_type:
            clauses.append("poll_type = ?")
            params.append(poll_type)
        if created_by:
            clauses.append("created_by = ?")
            params.append(created_by)
        where = " AND ".join(clauses)
        polls = self.select(tx, where, params, order_by=f"created_at DESC LIMIT {int(limit)} OFFSET {int(offset)}")
        logger.debug("list polls(status={}, type={}): {}", status, poll_type, len(polls))
        return polls

    def apply_tally(
        self,
        tx: Transaction,
        poll_id: str,
        option: VoteOption,
        count_delta: int,
        weight_delta: int,
        now: datetime,
    ) -> None:
        """Increment (or decrement) one option's count and weighted sum."""
        option = VoteOption(option)
        tx.execute(
            f"""
            UPDATE poll
            SET {option}_count = {option}_count + ?,
                {option}_weight = {option}_weight + ?,
                updated_at = ?
            WHERE id = ?
            """,
            [count_delta, weight_delta, now, poll_id],
        )

    def due_for_activation(self, tx: Transaction, now: datetime) -> list[Poll]:
        return self.select(tx, "status = ? AND start_at <= ?", [PollStatus.PENDING, now], order_by="start_at")

    def expired_active(self, tx: Transaction, now: datetime) -> list[Poll]:
        return self.select(tx, "status = ? AND end_at < ?", [PollStatus.ACTIVE, now], order_by="end_at")

    def open_rollback_poll(self, tx: Transaction, action_id: str) -> Poll | None:
        """Rollback poll for the action that has not finished voting yet."""
        polls = self.select(
            tx,
            "poll_type = ? AND rollback_target_action_id = ? AND status IN (?, ?)",
            [PollType.EMERGENCY_ROLLBACK, action_id, PollStatus.PENDING, PollStatus.ACTIVE],
        )
        return polls[0] if polls else None

    def parameter_history(self, tx: Transaction, parameter_name: str) -> list[Poll]:
        return self.select(tx, "parameter_name = ?", [parameter_name], order_by="created_at DESC")

    def first_created_at(self, tx: Transaction) -> datetime | None:
        return tx.scalar("SELECT MIN(created_at) FROM poll")

    def status_counts(self, tx: Transaction) -> dict[str, int]:
        rows = tx.fetchall("SELECT status, COUNT(*) FROM poll GROUP BY status")
        return {r[0]: int(r[1]) for r in rows}
