"""Poll repositories."""

from app.repositories.polls.delegation import DelegationRepository
from app.repositories.polls.poll import PollRepository
from app.repositories.polls.vote import VoteRepository

__all__ = [
    "PollRepository",
    "VoteRepository",
    "DelegationRepository",
]
