"""Action API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CreateActionRequest(BaseModel):
    poll_id: str
    scheduled_at: datetime | None = None
    execute_immediately: bool = False


class ActionResponse(BaseModel):
    """Governance action with rollback provenance."""

    model_config = ConfigDict(from_attributes=True)

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


class ActionsResponse(BaseModel):
    items: list[ActionResponse]


class ExecutionResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action_id: str
    status: str
    success: bool
    error_message: str | None


class ProcessDueResponse(BaseModel):
    """Outcome of one sweep over due scheduled actions."""

    executed: list[str]
    failed: list[str]
    errors: list[str]
