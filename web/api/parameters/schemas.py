"""Parameter and constitution API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ParameterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    category: str
    description: str | None
    value_type: str
    current_value: str
    default_value: str
    min_value: float | None
    max_value: float | None
    is_voteable: bool
    requires_supermajority: bool
    is_emergency: bool
    frozen_until: datetime | None
    rollback_count: int
    times_changed: int
    last_changed_at: datetime | None


class ParametersResponse(BaseModel):
    items: list[ParameterResponse]


class ValidateParameterRequest(BaseModel):
    name: str
    value: str


class ValidationResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    is_valid: bool
    errors: list[str]
    warnings: list[str]


class ConstitutionCheckRequest(BaseModel):
    """Proposal to test against the constitution before creating a poll."""

    parameter_name: str | None = None
    proposed_value: str | None = None
    description: str = ""


class ViolationItem(BaseModel):
    article_number: int
    title: str
    reason: str


class ConstitutionCheckResponse(BaseModel):
    is_violation: bool
    violations: list[ViolationItem]


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: int
    title: str
    principle: str
    protected_rule: str


class ArticlesResponse(BaseModel):
    items: list[ArticleResponse]


class ParameterHistoryItem(BaseModel):
    poll_id: str
    title: str
    status: str
    proposed_value: str | None
    previous_value: str | None
    yes_pct: float | None
    quorum_met: bool | None
    created_at: datetime
    closed_at: datetime | None


class ParameterHistoryResponse(BaseModel):
    name: str
    items: list[ParameterHistoryItem]
