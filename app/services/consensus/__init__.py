"""Shadow consensus services."""

from app.services.consensus.analyzer import ShadowConsensusAnalyzer

__all__ = [
    "ShadowConsensusAnalyzer",
]
