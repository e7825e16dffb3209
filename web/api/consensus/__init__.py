"""Shadow consensus API."""

from web.api.consensus.views import calculate_consensus, get_consensus, get_consensus_report

__all__ = [
    "calculate_consensus",
    "get_consensus",
    "get_consensus_report",
]
