"""Poll domain entities."""

from dataclasses import dataclass, field
from datetime import datetime

from app.models.common import BaseEntity, PollStatus


@dataclass
class Poll(BaseEntity):
    """Poll row."""

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
    yes_weight: int
    no_weight: int
    abstain_weight: int
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
    updated_at: datetime

    @property
    def total_votes(self) -> int:
        return self.yes_count + self.no_count + self.abstain_count

    @property
    def total_weight(self) -> int:
        return self.yes_weight + self.no_weight + self.abstain_weight

    def accepts_votes(self, now: datetime) -> bool:
        return self.status == PollStatus.ACTIVE and self.start_at <= now <= self.end_at


@dataclass
class Vote(BaseEntity):
    """Vote row."""

    id: str
    poll_id: str
    user_id: str
    identity_mode: str
    vote_option: str
    section: int
    section_multiplier: float
    base_weight: int
    final_weight: int
    reasoning: str | None
    change_count: int
    is_delegated: bool
    delegated_by: str | None
    reputation_at_vote: float | None
    timing_jitter_seconds: int
    cast_at: datetime
    displayed_at: datetime
    updated_at: datetime


@dataclass
class Delegation(BaseEntity):
    """Delegation row."""

    id: str
    delegator_id: str
    identity_mode: str
    delegate_id: str
    delegation_type: str
    target_poll_id: str | None
    active_from: datetime
    active_until: datetime | None
    revoked_at: datetime | None
    created_at: datetime

    def is_active(self, now: datetime) -> bool:
        if self.revoked_at is not None or self.active_from > now:
            return False
        return self.active_until is None or now <= self.active_until


@dataclass
class PollResult(BaseEntity):
    """Outcome computed at close."""

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


@dataclass
class VoteBreakdown(BaseEntity):
    """Counts and weights per identity and option."""

    poll_id: str
    true_self: dict = field(default_factory=dict)
    shadow: dict = field(default_factory=dict)
