"""Action domain models - executions and rollbacks."""

from app.models.actions.action import ACTION_DDL
from app.models.actions.entities import (
    Action,
    ExecutionResult,
    FounderAuthority,
    RollbackRequest,
    RollbackStatus,
)
from app.models.actions.rollback import ROLLBACK_REQUEST_DDL

__all__ = [
    "ACTION_DDL",
    "ROLLBACK_REQUEST_DDL",
    "Action",
    "RollbackRequest",
    "ExecutionResult",
    "RollbackStatus",
    "FounderAuthority",
]
