"""Poll lifecycle, voting and delegation services."""

from app.services.polls.delegation import DelegationService
from app.services.polls.lifecycle import PollService
from app.services.polls.votes import VoteService

__all__ = [
    "DelegationService",
    "PollService",
    "VoteService",
]
