"""Delegation repository."""

from datetime import datetime

from app.models import Delegation
from app.repositories.base import BaseRepository
from app.repositories.db import Transaction


class DelegationRepository(BaseRepository):
    """Repository for delegation rows."""

    table = "delegation"
    entity = Delegation
    label = "Delegation"

    def active_for(self, tx: Transaction, delegator_id: str, identity_mode: str, now: datetime) -> list[Delegation]:
        rows = self.select(
            tx,
            "delegator_id = ? AND identity_mode = ? AND revoked_at IS NULL",
            [delegator_id, identity_mode],
            order_by="created_at DESC",
        )
        return [d for d in rows if d.is_active(now)]

    def active_by_delegator(self, tx: Transaction, delegator_id: str, now: datetime) -> list[Delegation]:
        rows = self.select(tx, "delegator_id = ? AND revoked_at IS NULL", [delegator_id])
        return [d for d in rows if d.is_active(now)]

    def active_to_delegate(self, tx: Transaction, delegate_id: str, now: datetime) -> list[Delegation]:
        rows = self.select(tx, "delegate_id = ? AND revoked_at IS NULL", [delegate_id], order_by="created_at")
        return [d for d in rows if d.is_active(now)]

    def for_user(self, tx: Transaction, user_id: str) -> list[Delegation]:
        return self.select(tx, "delegator_id = ? OR delegate_id = ?", [user_id, user_id], order_by="created_at DESC")
