"""Action repositories."""

from app.repositories.actions.action import ActionRepository, RollbackRequestRepository

__all__ = [
    "ActionRepository",
    "RollbackRequestRepository",
]
