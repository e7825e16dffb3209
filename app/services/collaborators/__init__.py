"""External collaborator contracts and their implementations."""

from app.services.collaborators.interfaces import IdentityService, LedgerService, PlatformMetrics, ReputationService
from app.services.collaborators.ledger import REWARDS_POOL_ACCOUNT, StoreLedger
from app.services.collaborators.profiles import StoreProfiles
from app.services.collaborators.remote import RemoteIdentity, RemoteReputation

__all__ = [
    "LedgerService",
    "ReputationService",
    "IdentityService",
    "PlatformMetrics",
    "StoreLedger",
    "StoreProfiles",
    "RemoteReputation",
    "RemoteIdentity",
    "REWARDS_POOL_ACCOUNT",
]
