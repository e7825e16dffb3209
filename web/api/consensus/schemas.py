"""Shadow consensus API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ConsensusResponse(BaseModel):
    """Public vs private yes share for a closed poll."""

    model_config = ConfigDict(from_attributes=True)

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


class ReputationGapItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    reputation_range: str
    true_self_yes_pct: float
    shadow_yes_pct: float
    gap: float
    sample_size: int


class ConsensusReportResponse(BaseModel):
    """Snapshot with interpretation and reputation breakdown."""

    model_config = ConfigDict(from_attributes=True)

    poll_id: str
    poll_title: str
    snapshot: ConsensusResponse
    likely_cause: str
    by_reputation: list[ReputationGapItem]
