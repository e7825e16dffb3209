"""Staking API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.common import IdentityMode, VoteOption


class CreateStakeRequest(BaseModel):
    user_id: str
    poll_id: str
    identity_mode: IdentityMode
    position: VoteOption
    amount: int = Field(gt=0)
    reasoning: str | None = Field(default=None, max_length=2000)


class StakeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    poll_id: str
    identity_mode: str
    position: str
    amount: int
    confidence_level: str
    reasoning: str | None
    status: str
    reward: int | None
    created_at: datetime
    resolved_at: datetime | None


class StakesResponse(BaseModel):
    items: list[StakeResponse]


class StakePoolResponse(BaseModel):
    """Pool totals for one poll."""

    model_config = ConfigDict(from_attributes=True)

    poll_id: str
    status: str
    total_yes_stake: int
    total_no_stake: int
    total_pool: int
    yes_staker_count: int
    no_staker_count: int
    average_yes_stake: float
    average_no_stake: float
    largest_stake: int
    winning_option: str | None
    total_distributed: int
    platform_retained: int
    closed_at: datetime | None
    distributed_at: datetime | None


class PotentialRewardResponse(BaseModel):
    poll_id: str
    position: str
    amount: int
    potential_reward: int
    potential_profit: int
    reward_multiplier: float
    pool_total_after: int
    side_total_after: int


class DistributionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    poll_id: str
    pool_status: str
    winning_option: str
    total_pool: int
    total_distributed: int
    platform_retained: int
    winners: int
    losers: int
    refunded: int


class StakeSummary(BaseModel):
    total_stakes: int
    total_staked: int
    won: int
    lost: int
    refunded: int
    net_profit: int


class StakeHistoryResponse(BaseModel):
    user_id: str
    summary: StakeSummary
    items: list[StakeResponse]
