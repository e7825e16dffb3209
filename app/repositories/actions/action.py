"""Action and rollback request repositories."""

from datetime import datetime

from app.models import Action, RollbackRequest
from app.models.common import ActionStatus, RollbackInitiationType
from app.repositories.base import BaseRepository
from app.repositories.db import Transaction


class ActionRepository(BaseRepository):
    """Repository for governance_action rows."""

    table = "governance_action"
    entity = Action
    label = "Action"

    def due(self, tx: Transaction, now: datetime) -> list[Action]:
        """Scheduled actions whose time has come. Safe to call repeatedly."""
        return self.select(
            tx,
            "status = ? AND scheduled_at <= ?",
            [ActionStatus.SCHEDULED, now],
            order_by="scheduled_at",
        )

    def pending(self, tx: Transaction) -> list[Action]:
        return self.select(
            tx,
            "status IN (?, ?)",
            [ActionStatus.PENDING, ActionStatus.SCHEDULED],
            order_by="COALESCE(scheduled_at, created_at)",
        )

    def for_poll(self, tx: Transaction, poll_id: str) -> Action | None:
        actions = self.select(tx, "poll_id = ?", [poll_id], order_by="created_at DESC")
        return actions[0] if actions else None

    def for_parameter(self, tx: Transaction, parameter_name: str) -> list[Action]:
        return self.select(tx, "parameter_name = ?", [parameter_name], order_by="created_at DESC")


class RollbackRequestRepository(BaseRepository):
    """Repository for rollback_request rows."""

    table = "rollback_request"
    entity = RollbackRequest
    label = "Rollback request"

    def founder_uses(self, tx: Transaction) -> int:
        return int(
            tx.scalar(
                "SELECT COUNT(*) FROM rollback_request WHERE initiation_type = ?",
                [RollbackInitiationType.FOUNDER_UNILATERAL],
            )
        )

    def for_action(self, tx: Transaction, action_id: str) -> list[RollbackRequest]:
        return self.select(tx, "action_id = ?", [action_id], order_by="created_at")

    def for_poll(self, tx: Transaction, rollback_poll_id: str) -> RollbackRequest | None:
        rows = self.select(tx, "rollback_poll_id = ?", [rollback_poll_id])
        return rows[0] if rows else None
