"""Identity API client."""

from platform_client.identity.client import IdentityClient
from platform_client.identity.schemas import VerificationSchema

__all__ = [
    "IdentityClient",
    "VerificationSchema",
]
