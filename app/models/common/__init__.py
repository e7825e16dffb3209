"""Common models - base entity and shared enums."""

from app.models.common.base import BaseEntity
from app.models.common.enums import (
    FINISHED_POLL_STATUSES,
    ActionStatus,
    ActionType,
    DelegationType,
    IdentityMode,
    ParameterCategory,
    PollStatus,
    PollType,
    PoolStatus,
    RollbackInitiationType,
    StakeStatus,
    TokenType,
    ValueType,
    VoteOption,
)

__all__ = [
    "BaseEntity",
    "FINISHED_POLL_STATUSES",
    "ActionStatus",
    "ActionType",
    "DelegationType",
    "IdentityMode",
    "ParameterCategory",
    "PollStatus",
    "PollType",
    "PoolStatus",
    "RollbackInitiationType",
    "StakeStatus",
    "TokenType",
    "ValueType",
    "VoteOption",
]
