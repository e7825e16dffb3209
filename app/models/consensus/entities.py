"""Shadow consensus entities."""

from dataclasses import dataclass, field
from datetime import datetime

from app.models.common import BaseEntity


@dataclass
class ConsensusSnapshot(BaseEntity):
    poll_id: str
    true_self_yes_count: int
    true_self_no_count: int
    true_self_abstain_count: int
    shadow_yes_count: int
    shadow_no_count: int
    shadow_abstain_count: int
    true_self_yes_pct: float
    shadow_yes_pct: float
    gap_pct: float
    gap_interpretation: str
    confidence_interval: float
    sample_size: int
    trend_direction: str
    recorded_at: datetime


@dataclass
class DemographicGap(BaseEntity):
    reputation_range: str
    true_self_yes_pct: float
    shadow_yes_pct: float
    gap: float
    sample_size: int


@dataclass
class ConsensusReport(BaseEntity):
    poll_id: str
    poll_title: str
    snapshot: ConsensusSnapshot
    likely_cause: str
    by_reputation: list[DemographicGap] = field(default_factory=list)
