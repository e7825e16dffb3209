"""Identity API client."""

from platform_client.base import BaseClient
from platform_client.identity.schemas import VerificationSchema


class IdentityClient(BaseClient):
    """Client for the identity / verification service."""

    def verification(self, user_id: str) -> VerificationSchema:
        """GET /users/{user_id}/verification - verified-human flag."""
        return VerificationSchema.model_validate(self._get(f"users/{user_id}/verification"))
