"""Reputation API client."""

from platform_client.base import BaseClient
from platform_client.reputation.schemas import ScoreSchema


class ReputationClient(BaseClient):
    """Client for the reputation service."""

    def score(self, user_id: str) -> ScoreSchema:
        """GET /users/{user_id}/score - trust score."""
        return ScoreSchema.model_validate(self._get(f"users/{user_id}/score"))
