"""Reputation API client."""

from platform_client.reputation.client import ReputationClient
from platform_client.reputation.schemas import ScoreSchema

__all__ = [
    "ReputationClient",
    "ScoreSchema",
]
