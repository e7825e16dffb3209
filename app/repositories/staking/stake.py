"""Stake repositories - pools and individual stakes."""

import duckdb
from loguru import logger

from app.errors import DuplicateStake
from app.models import Stake, StakePool
from app.models.common import StakeStatus
from app.repositories.base import BaseRepository
from app.repositories.db import Transaction


class StakePoolRepository(BaseRepository):
    """Repository for stake_pool rows (one per poll)."""

    table = "stake_pool"
    entity = StakePool
    key = "poll_id"
    label = "Stake pool"

    def refresh_totals(self, tx: Transaction, poll_id: str) -> None:
        """Recompute totals, counts, averages and largest stake from active stakes."""
        tx.execute(
            """
            UPDATE stake_pool SET
                total_yes_stake = s.yes_total,
                total_no_stake = s.no_total,
                yes_staker_count = s.yes_n,
                no_staker_count = s.no_n,
                average_yes_stake = CASE WHEN s.yes_n > 0 THEN s.yes_total / s.yes_n ELSE 0 END,
                average_no_stake = CASE WHEN s.no_n > 0 THEN s.no_total / s.no_n ELSE 0 END,
                largest_stake = s.largest
            FROM (
                SELECT
                    COALESCE(SUM(CASE WHEN position = 'yes' THEN amount END), 0) AS yes_total,
                    COALESCE(SUM(CASE WHEN position = 'no' THEN amount END), 0) AS no_total,
                    COUNT(CASE WHEN position = 'yes' THEN 1 END) AS yes_n,
                    COUNT(CASE WHEN position = 'no' THEN 1 END) AS no_n,
                    COALESCE(MAX(amount), 0) AS largest
                FROM stake
                WHERE poll_id = ? AND status = ?
            ) AS s
            WHERE stake_pool.poll_id = ?
            """,
            [poll_id, StakeStatus.ACTIVE, poll_id],
        )
        logger.debug("Stake pool {} totals refreshed", poll_id)


class StakeRepository(BaseRepository):
    """Repository for stake rows."""

    table = "stake"
    entity = Stake
    label = "Stake"

    def insert(self, tx: Transaction, entity: Stake) -> None:
        try:
            super().insert(tx, entity)
        except duckdb.ConstraintException as exc:
            raise DuplicateStake(f"Already staked on poll {entity.poll_id} as {entity.identity_mode}") from exc

    def find(self, tx: Transaction, poll_id: str, user_id: str, identity_mode: str) -> Stake | None:
        stakes = self.select(
            tx,
            "poll_id = ? AND user_id = ? AND identity_mode = ?",
            [poll_id, user_id, identity_mode],
        )
        return stakes[0] if stakes else None

    def for_poll(self, tx: Transaction, poll_id: str, status: str | None = None) -> list[Stake]:
        if status:
            return self.select(tx, "poll_id = ? AND status = ?", [poll_id, status], order_by="created_at")
        return self.select(tx, "poll_id = ?", [poll_id], order_by="created_at")

    def for_user(self, tx: Transaction, user_id: str, poll_id: str | None = None) -> list[Stake]:
        if poll_id:
            return self.select(tx, "user_id = ? AND poll_id = ?", [user_id, poll_id], order_by="identity_mode DESC")
        return self.select(tx, "user_id = ?", [user_id], order_by="created_at DESC")

    def user_summary(self, tx: Transaction, user_id: str) -> dict:
        row = tx.fetch_dict(
            """
            SELECT COUNT(*) AS total_stakes,
                   COALESCE(SUM(amount), 0) AS total_staked,
                   COUNT(CASE WHEN status = 'won' THEN 1 END) AS won,
                   COUNT(CASE WHEN status = 'lost' THEN 1 END) AS lost,
                   COUNT(CASE WHEN status = 'refunded' THEN 1 END) AS refunded,
                   COALESCE(SUM(CASE WHEN status = 'won' THEN reward - amount END), 0)
                     - COALESCE(SUM(CASE WHEN status = 'lost' THEN amount END), 0) AS net_profit
            FROM stake
            WHERE user_id = ?
            """,
            [user_id],
        )
        return {k: int(v) for k, v in row.items()}
