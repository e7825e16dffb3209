"""Poll API request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.common import IdentityMode, PollType


class CreatePollRequest(BaseModel):
    """New poll proposal."""

    user_id: str
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    poll_type: PollType = PollType.GENERAL_COMMUNITY
    parameter_name: str | None = None
    proposed_value: str | None = None
    duration_days: int | None = Field(default=None, gt=0)
    start_at: datetime | None = None
    proposal_url: str | None = None
    identity_mode: IdentityMode = IdentityMode.TRUE_SELF


class ClosePollRequest(BaseModel):
    poll_id: str
    force: bool = False


class PollResponse(BaseModel):
    """Poll with running tallies."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    poll_type: str
    status: str
    proposal_url: str | None
    created_by: str | None
    start_at: datetime
    end_at: datetime
    section_multipliers: list[float]
    yes_count: int
    no_count: int
    abstain_count: int
    total_votes: int
    minimum_quorum: int
    approval_threshold: float
    parameter_name: str | None
    parameter_current_value: str | None
    parameter_proposed_value: str | None
    action_id: str | None
    rollback_target_action_id: str | None
    creation_cost: int
    final_yes_pct: float | None
    final_no_pct: float | None
    final_abstain_pct: float | None
    quorum_met: bool | None
    closed_at: datetime | None
    created_at: datetime


class PollsResponse(BaseModel):
    """Poll list page."""

    items: list[PollResponse]
    limit: int
    offset: int


class PollStatisticsResponse(BaseModel):
    """Live statistics for a poll."""

    poll_id: str
    status: str
    total_votes: int
    total_weight: int
    unique_voters: int
    yes_count: int
    no_count: int
    abstain_count: int
    yes_pct: float
    no_pct: float
    abstain_pct: float
    weighted_yes_pct: float
    weighted_no_pct: float
    weighted_abstain_pct: float
    minimum_quorum: int
    quorum_progress_pct: float
    approval_threshold: float
    average_multiplier: float
    seconds_remaining: int


class PollResultResponse(BaseModel):
    """Outcome of closing a poll."""

    model_config = ConfigDict(from_attributes=True)

    poll_id: str
    status: str
    yes_pct: float
    no_pct: float
    abstain_pct: float
    total_votes: int
    total_unique_voters: int
    quorum_met: bool
    approval_threshold: float
    winning_option: str


class SectionItem(BaseModel):
    section: int
    multiplier: float
    votes: int
    pct: float
    weighted_votes: int


class SectionDistributionResponse(BaseModel):
    poll_id: str
    items: list[SectionItem]
