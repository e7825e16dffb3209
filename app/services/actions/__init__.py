"""Action execution and the emergency rollback protocol."""

from app.services.actions.executor import ActionService
from app.services.actions.initiators import AutomaticTrigger, FounderUnilateral, RollbackInitiator, VerifiedPetition
from app.services.actions.rollback import RollbackService

__all__ = [
    "ActionService",
    "RollbackService",
    # Rollback initiators
    "FounderUnilateral",
    "VerifiedPetition",
    "AutomaticTrigger",
    "RollbackInitiator",
]
