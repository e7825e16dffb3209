"""Platform API clients - reputation and identity services."""

from platform_client.base import BaseClient
from platform_client.identity import IdentityClient
from platform_client.reputation import ReputationClient

__all__ = [
    # Base
    "BaseClient",
    # Clients
    "IdentityClient",
    "ReputationClient",
]
