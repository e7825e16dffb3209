"""Action and rollback entities."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity


@dataclass
class Action(BaseEntity):
    id: str
    poll_id: str
    action_type: str
    status: str
    parameter_name: str | None
    old_value: str | None
    new_value: str | None
    is_constitutional: bool
    scheduled_at: datetime | None
    executed_at: datetime | None
    rollback_window_hours: int
    rollback_window_expires_at: datetime | None
    error_message: str | None
    rolled_back_at: datetime | None
    rollback_initiation_type: str | None
    rollback_initiated_by: str | None
    rollback_poll_id: str | None
    created_at: datetime
    updated_at: datetime


@dataclass
class RollbackRequest(BaseEntity):
    id: str
    action_id: str
    initiation_type: str
    initiated_by: str | None
    signer_count: int | None
    authority_percentage: int | None
    reasons: str | None
    rollback_poll_id: str
    created_at: datetime


@dataclass
class ExecutionResult(BaseEntity):
    action_id: str
    status: str
    success: bool
    error_message: str | None = None


@dataclass
class RollbackStatus(BaseEntity):
    action_id: str
    action_status: str
    can_rollback: bool
    reason: str | None
    window_expires_at: datetime | None
    hours_remaining: float
    rollback_count: int
    parameter_frozen: bool
    open_rollback_poll_id: str | None


@dataclass
class FounderAuthority(BaseEntity):
    founder_user_id: str | None
    tokens_total: int
    tokens_used: int
    tokens_remaining: int
    years_since_launch: float
    authority_percentage: int
    can_rollback: bool
