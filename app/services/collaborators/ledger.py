"""Token ledger kept in the governance store.

Balances live in ``token_account``. A lock moves an amount into ``locked``:
it stays part of ``balance`` but is no longer available. Every movement is
journaled in ``token_transaction``.
"""

import functools
import uuid
from collections.abc import Callable

import duckdb
from loguru import logger

from app.errors import DependencyFailure, InsufficientBalance
from app.repositories.db import Transaction

PLATFORM_ACCOUNT = "platform"
SYSTEM_IDENTITY = "system"
REWARDS_POOL_ACCOUNT = "platform:rewards_pool"


def _ledger_call(fn: Callable) -> Callable:
    """Surface store failures as DependencyFailure; transaction conflicts pass through."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except duckdb.TransactionException:
            raise
        except duckdb.Error as exc:
            logger.error("Ledger {} failed: {}", fn.__name__, exc)
            raise DependencyFailure(f"Ledger {fn.__name__} failed: {exc}") from exc

    return wrapper


class StoreLedger:
    """LedgerService backed by ledger tables in the same DuckDB database."""

    def __init__(self, clock: Callable):
        self._clock = clock

    def _account(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str) -> tuple[int, int] | None:
        row = tx.fetchone(
            """
            SELECT balance, locked FROM token_account
            WHERE user_id = ? AND identity_mode = ? AND token_type = ?
            """,
            [user_id, identity_mode, token_type],
        )
        return (int(row[0]), int(row[1])) if row else None

    def _journal(
        self,
        tx: Transaction,
        user_id: str,
        identity_mode: str,
        token_type: str,
        kind: str,
        amount: int,
        memo: str | None,
        reference_id: str | None,
    ) -> None:
        tx.execute(
            """
            INSERT INTO token_transaction
                (id, user_id, identity_mode, token_type, kind, amount, memo, reference_id, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [str(uuid.uuid4()), user_id, identity_mode, token_type, kind, amount, memo, reference_id, self._clock()],
        )

    def _add_balance(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, delta: int) -> None:
        now = self._clock()
        if self._account(tx, user_id, identity_mode, token_type) is None:
            tx.execute(
                """
                INSERT INTO token_account (user_id, identity_mode, token_type, balance, locked, updated_at)
                VALUES (?, ?, ?, ?, 0, ?)
                """,
                [user_id, identity_mode, token_type, delta, now],
            )
            return
        tx.execute(
            """
            UPDATE token_account SET balance = balance + ?, updated_at = ?
            WHERE user_id = ? AND identity_mode = ? AND token_type = ?
            """,
            [delta, now, user_id, identity_mode, token_type],
        )

    @_ledger_call
    def available(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str) -> int:
        account = self._account(tx, user_id, identity_mode, token_type)
        if account is None:
            return 0
        balance, locked = account
        return balance - locked

    def check_balance(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, amount: int) -> bool:
        return self.available(tx, user_id, identity_mode, token_type) >= amount

    def _require(self, tx: Transaction, user_id: str, identity_mode: str, token_type: str, amount: int) -> None:
        available = self.available(tx, user_id, identity_mode, token_type)
        if available < amount:
            raise InsufficientBalance(token_type, amount, available)

    @_ledger_call
    def debit(self, tx, user_id, identity_mode, token_type, amount, memo, reference_id=None) -> None:
        self._require(tx, user_id, identity_mode, token_type, amount)
        self._add_balance(tx, user_id, identity_mode, token_type, -amount)
        self._journal(tx, user_id, identity_mode, token_type, "debit", -amount, memo, reference_id)
        logger.debug("Ledger debit {} {} from {}/{}", amount, token_type, user_id, identity_mode)

    @_ledger_call
    def credit(self, tx, user_id, identity_mode, token_type, amount, memo, reference_id=None) -> None:
        self._add_balance(tx, user_id, identity_mode, token_type, amount)
        self._journal(tx, user_id, identity_mode, token_type, "credit", amount, memo, reference_id)
        logger.debug("Ledger credit {} {} to {}/{}", amount, token_type, user_id, identity_mode)

    @_ledger_call
    def lock(self, tx, user_id, identity_mode, token_type, amount, reference_id) -> None:
        self._require(tx, user_id, identity_mode, token_type, amount)
        now = self._clock()
        tx.execute(
            """
            UPDATE token_account SET locked = locked + ?, updated_at = ?
            WHERE user_id = ? AND identity_mode = ? AND token_type = ?
            """,
            [amount, now, user_id, identity_mode, token_type],
        )
        tx.execute(
            """
            INSERT INTO token_lock (reference_id, user_id, identity_mode, token_type, amount, released, created_at)
            VALUES (?, ?, ?, ?, ?, FALSE, ?)
            """,
            [reference_id, user_id, identity_mode, token_type, amount, now],
        )
        self._journal(tx, user_id, identity_mode, token_type, "lock", amount, None, reference_id)

    @_ledger_call
    def unlock(self, tx, user_id, identity_mode, token_type, amount, reference_id) -> None:
        held = tx.scalar(
            """
            SELECT amount FROM token_lock
            WHERE reference_id = ? AND user_id = ? AND identity_mode = ? AND token_type = ? AND NOT released
            """,
            [reference_id, user_id, identity_mode, token_type],
        )
        if held is None or int(held) != amount:
            raise DependencyFailure(f"No active lock of {amount} {token_type} for reference {reference_id}")
        now = self._clock()
        tx.execute(
            """
            UPDATE token_account SET locked = locked - ?, updated_at = ?
            WHERE user_id = ? AND identity_mode = ? AND token_type = ?
            """,
            [amount, now, user_id, identity_mode, token_type],
        )
        tx.execute(
            """
            UPDATE token_lock SET released = TRUE, released_at = ?
            WHERE reference_id = ? AND user_id = ? AND identity_mode = ? AND token_type = ?
            """,
            [now, reference_id, user_id, identity_mode, token_type],
        )
        self._journal(tx, user_id, identity_mode, token_type, "unlock", amount, None, reference_id)

    @_ledger_call
    def credit_as_reward(self, tx, user_id, identity_mode, token_type, amount, reference_id) -> None:
        self._add_balance(tx, user_id, identity_mode, token_type, amount)
        self._journal(tx, user_id, identity_mode, token_type, "reward", amount, "Stake reward", reference_id)

    @_ledger_call
    def burn(self, tx, token_type, amount, memo, reference_id=None) -> None:
        self._journal(tx, PLATFORM_ACCOUNT, SYSTEM_IDENTITY, token_type, "burn", amount, memo, reference_id)
        logger.debug("Burned {} {}", amount, token_type)

    @_ledger_call
    def credit_rewards_pool(self, tx, token_type, amount, memo, reference_id=None) -> None:
        self._add_balance(tx, REWARDS_POOL_ACCOUNT, SYSTEM_IDENTITY, token_type, amount)
        self._journal(tx, REWARDS_POOL_ACCOUNT, SYSTEM_IDENTITY, token_type, "rewards_pool", amount, memo, reference_id)

    @_ledger_call
    def journal(self, tx: Transaction, reference_id: str) -> list[dict]:
        """Ledger entries for one reference (poll id, stake id)."""
        return tx.fetch_dicts(
            "SELECT * FROM token_transaction WHERE reference_id = ? ORDER BY created_at, kind",
            [reference_id],
        )
