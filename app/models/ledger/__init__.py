"""Collaborator tables kept in the governance store - ledger and profiles."""

from app.models.ledger.account import TOKEN_ACCOUNT_DDL, TOKEN_LOCK_DDL, TOKEN_TRANSACTION_DDL
from app.models.ledger.profile import USER_PROFILE_DDL

__all__ = [
    "TOKEN_ACCOUNT_DDL",
    "TOKEN_LOCK_DDL",
    "TOKEN_TRANSACTION_DDL",
    "USER_PROFILE_DDL",
]
