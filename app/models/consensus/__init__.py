"""Shadow consensus models."""

from app.models.consensus.entities import ConsensusReport, ConsensusSnapshot, DemographicGap
from app.models.consensus.snapshot import CONSENSUS_SNAPSHOT_DDL

__all__ = [
    "CONSENSUS_SNAPSHOT_DDL",
    "ConsensusSnapshot",
    "ConsensusReport",
    "DemographicGap",
]
