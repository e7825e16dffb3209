"""Rollback API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FounderRollbackRequest(BaseModel):
    user_id: str
    action_id: str
    reason: str = Field(min_length=1)


class PetitionRollbackRequest(BaseModel):
    initiator_id: str
    action_id: str
    signer_ids: list[str]
    reason: str = Field(min_length=1)


class RollbackPollResponse(BaseModel):
    """Emergency poll opened by a rollback initiation."""

    rollback_poll_id: str
    action_id: str
    end_at: datetime
    minimum_quorum: int
    approval_threshold: float


class RollbackStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action_id: str
    action_status: str
    can_rollback: bool
    reason: str | None
    window_expires_at: datetime | None
    hours_remaining: float
    rollback_count: int
    parameter_frozen: bool
    open_rollback_poll_id: str | None


class FounderAuthorityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    founder_user_id: str | None
    tokens_total: int
    tokens_used: int
    tokens_remaining: int
    years_since_launch: float
    authority_percentage: int
    can_rollback: bool


class AutomaticRollbackResponse(BaseModel):
    action_id: str
    triggers: list[str]
    rollback_poll_id: str | None
