"""Contracts the engine expects from its external collaborators.

Every call receives the governance transaction so that an implementation
backed by the same store commits or rolls back together with the engine.
"""

from datetime import datetime
from typing import Protocol

from app.repositories.db import Transaction


class LedgerService(Protocol):
    def check_balance(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, amount: int) -> bool: ...

    def available(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str) -> int: ...

    def debit(
        self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, amount: int, memo: str,
        reference_id: str | None = None,
    ) -> None: ...

    def credit(
        self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, amount: int, memo: str,
        reference_id: str | None = None,
    ) -> None: ...

    def lock(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, amount: int, reference_id: str) -> None: ...

    def unlock(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, amount: int, reference_id: str) -> None: ...

    def credit_as_reward(
        self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, amount: int, reference_id: str
    ) -> None: ...

    def burn(self, tx: Transaction, token_type: str, amount: int, memo: str, reference_id: str | None = None) -> None: ...

    def credit_rewards_pool(
        self, tx: Transaction, token_type: str, amount: int, memo: str, reference_id: str | None = None
    ) -> None: ...


class ReputationService(Protocol):
    def get_score(self, tx: Transaction, user_id: str) -> float:
        """Score in [0, 100]; the default when the user has none."""
        ...


class IdentityService(Protocol):
    def is_verified_human(self, tx: Transaction, user_id: str) -> bool: ...


class PlatformMetrics(Protocol):
    def total_users(self, tx: Transaction) -> int: ...

    def deleted_since(self, tx: Transaction, since: datetime) -> int: ...
