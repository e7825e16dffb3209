"""Poll domain models - polls, votes, delegations."""

from app.models.polls.delegation import DELEGATION_DDL
from app.models.polls.entities import Delegation, Poll, PollResult, Vote, VoteBreakdown
from app.models.polls.poll import POLL_DDL
from app.models.polls.vote import VOTE_DDL

__all__ = [
    "POLL_DDL",
    "VOTE_DDL",
    "DELEGATION_DDL",
    "Poll",
    "Vote",
    "Delegation",
    "PollResult",
    "VoteBreakdown",
]
