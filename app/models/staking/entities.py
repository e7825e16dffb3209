"""Staking entities."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity


@dataclass
class StakePool(BaseEntity):
    poll_id: str
    status: str
    total_yes_stake: int
    total_no_stake: int
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
    created_at: datetime

    @property
    def total_pool(self) -> int:
        return self.total_yes_stake + self.total_no_stake

    def side_total(self, position: str) -> int:
        return self.total_yes_stake if position == "yes" else self.total_no_stake


@dataclass
class Stake(BaseEntity):
    id: str
    poll_id: str
    user_id: str
    identity_mode: str
    position: str
    amount: int
    confidence_level: str
    reasoning: str | None
    reputation_at_stake: float | None
    status: str
    reward: int | None
    created_at: datetime
    resolved_at: datetime | None


@dataclass
class Distribution(BaseEntity):
    """Summary of a pool settlement."""

    poll_id: str
    pool_status: str
    winning_option: str
    total_pool: int
    total_distributed: int
    platform_retained: int
    winners: int
    losers: int
    refunded: int
