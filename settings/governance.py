"""Governance tunables - one immutable object injected into every service."""

from dataclasses import dataclass, replace
from datetime import datetime

import settings


@dataclass(frozen=True)
class GovernanceConfig:
    """Economic, voting and rollback constants."""

    # Voting
    multiplier_min: float = 0.7
    multiplier_max: float = 1.5
    section_count: int = 7
    base_vote_weight: int = 1000
    max_vote_changes: int = 5
    max_jitter_seconds: int = 7200

    # Poll creation
    min_reputation_to_create_poll: float = 25.0
    default_reputation: float = 50.0
    poll_cost_general: int = 500
    poll_cost_governance: int = 1000
    burn_percent: int = 1
    default_duration_days: int = 7
    minimum_quorum: int = 1000
    approval_percentage: float = 50.0
    supermajority_percentage: float = 66.0

    # Staking
    minimum_stake: int = 10

    # Rollback
    founder_user_id: str | None = None
    founder_tokens: int = 10
    founder_authority_years: int = 3
    platform_launch_at: datetime | None = None
    petition_min_signers: int = 100
    petition_min_score: float = 70.0
    rollback_quorum_factor: float = 0.5
    rollback_voting_hours: int = 48
    standard_window_hours: int = 72
    constitutional_window_hours: int = 168
    max_rollbacks_before_freeze: int = 3
    freeze_days: int = 90
    exodus_threshold: float = 0.2

    @classmethod
    def from_env(cls) -> "GovernanceConfig":
        """Build config from the env-backed constants in ``settings``."""
        launch = settings.PLATFORM_LAUNCH_AT
        return cls(
            multiplier_min=settings.SECTION_MULTIPLIER_MIN,
            multiplier_max=settings.SECTION_MULTIPLIER_MAX,
            max_vote_changes=settings.MAX_VOTE_CHANGES,
            max_jitter_seconds=settings.VOTE_TIMING_JITTER_MAX_SECONDS,
            min_reputation_to_create_poll=settings.MINIMUM_REPUTATION_TO_CREATE_POLL,
            poll_cost_general=settings.POLL_CREATION_COST_GENERAL,
            poll_cost_governance=settings.POLL_CREATION_COST_GOVERNANCE,
            default_duration_days=settings.POLL_DEFAULT_DURATION_DAYS,
            minimum_quorum=settings.POLL_MINIMUM_VOTE_QUORUM,
            minimum_stake=settings.MINIMUM_STAKE_AMOUNT,
            founder_user_id=settings.FOUNDER_USER_ID,
            platform_launch_at=datetime.fromisoformat(launch) if launch else None,
        )

    def with_overrides(self, **changes) -> "GovernanceConfig":
        """Copy with some fields replaced (tests, CLI flags)."""
        return replace(self, **changes)
