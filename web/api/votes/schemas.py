"""Vote and delegation API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.common import DelegationType, IdentityMode, VoteOption


class CastVoteRequest(BaseModel):
    """Cast or change a vote for one identity."""

    user_id: str
    poll_id: str
    identity_mode: IdentityMode
    option: VoteOption
    reasoning: str | None = Field(default=None, max_length=2000)


class DelegatedVoteRequest(BaseModel):
    """A delegate voting for everyone who delegated to them."""

    delegate_id: str
    poll_id: str
    option: VoteOption
    reasoning: str | None = Field(default=None, max_length=2000)


class VoteResponse(BaseModel):
    """Vote as shown to its owner. Only the jittered time is exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    poll_id: str
    identity_mode: str
    vote_option: str
    section: int
    section_multiplier: float
    final_weight: int
    reasoning: str | None
    change_count: int
    is_delegated: bool
    displayed_at: datetime


class VotesResponse(BaseModel):
    poll_id: str
    items: list[VoteResponse]


class VoteBreakdownResponse(BaseModel):
    """Counts and weights per identity and option."""

    model_config = ConfigDict(from_attributes=True)

    poll_id: str
    true_self: dict[str, dict[str, int]]
    shadow: dict[str, dict[str, int]]


class JitterReportResponse(BaseModel):
    poll_id: str
    count: int
    min: int
    max: int
    mean: float
    median: float
    max_formatted: str


class CreateDelegationRequest(BaseModel):
    user_id: str
    identity_mode: IdentityMode
    delegate_id: str
    delegation_type: DelegationType = DelegationType.ALL_GOVERNANCE
    target_poll_id: str | None = None
    active_until: datetime | None = None


class DelegationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    delegator_id: str
    identity_mode: str
    delegate_id: str
    delegation_type: str
    target_poll_id: str | None
    active_from: datetime
    active_until: datetime | None
    revoked_at: datetime | None


class DelegationsResponse(BaseModel):
    user_id: str
    items: list[DelegationResponse]
