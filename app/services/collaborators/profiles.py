"""Reputation, verification and user-count lookups from ``user_profile``."""

from collections.abc import Callable
from datetime import datetime

from loguru import logger

from app.repositories.db import Transaction


class StoreProfiles:
    """ReputationService, IdentityService and PlatformMetrics over the local profile table."""

    def __init__(self, clock: Callable, default_score: float = 50.0):
        self._clock = clock
        self._default_score = default_score

    def get_score(self, tx: Transaction, user_id: str) -> float:
        score = tx.scalar("SELECT reputation FROM user_profile WHERE user_id = ?", [user_id])
        if score is None:
            logger.debug("No reputation for {}, using default {}", user_id, self._default_score)
            return self._default_score
        return float(score)

    def is_verified_human(self, tx: Transaction, user_id: str) -> bool:
        verified = tx.scalar(
            "SELECT is_verified FROM user_profile WHERE user_id = ? AND deleted_at IS NULL",
            [user_id],
        )
        return bool(verified)

    def total_users(self, tx: Transaction) -> int:
        return int(tx.scalar("SELECT COUNT(*) FROM user_profile"))

    def deleted_since(self, tx: Transaction, since: datetime) -> int:
        return int(tx.scalar("SELECT COUNT(*) FROM user_profile WHERE deleted_at >= ?", [since]))

    def upsert(
        self,
        tx: Transaction,
        user_id: str,
        reputation: float | None = None,
        is_verified: bool = False,
    ) -> None:
        """Create or update a profile (seeding, identity sync)."""
        exists = tx.scalar("SELECT COUNT(*) FROM user_profile WHERE user_id = ?", [user_id])
        if exists:
            tx.execute(
                "UPDATE user_profile SET reputation = ?, is_verified = ? WHERE user_id = ?",
                [reputation, is_verified, user_id],
            )
        else:
            tx.execute(
                "INSERT INTO user_profile (user_id, reputation, is_verified, created_at) VALUES (?, ?, ?, ?)",
                [user_id, reputation, is_verified, self._clock()],
            )

    def mark_deleted(self, tx: Transaction, user_id: str) -> None:
        tx.execute("UPDATE user_profile SET deleted_at = ? WHERE user_id = ?", [self._clock(), user_id])
        logger.info("User {} marked deleted", user_id)
