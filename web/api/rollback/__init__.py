"""Rollback API."""

from web.api.rollback.views import (
    check_automatic_rollback,
    execute_rollback,
    get_founder_authority,
    get_rollback_status,
    initiate_founder_rollback,
    petition_rollback,
)

__all__ = [
    "initiate_founder_rollback",
    "petition_rollback",
    "check_automatic_rollback",
    "get_rollback_status",
    "get_founder_authority",
    "execute_rollback",
]
