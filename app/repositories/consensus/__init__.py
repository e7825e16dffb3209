"""Consensus repositories."""

from app.repositories.consensus.snapshot import ConsensusRepository

__all__ = [
    "ConsensusRepository",
]
