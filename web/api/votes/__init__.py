"""Votes API."""

from web.api.votes.views import (
    cast_delegated_votes,
    cast_vote,
    change_vote,
    create_delegation,
    get_jitter_report,
    get_my_votes,
    get_vote_breakdown,
    list_delegations,
    revoke_delegation,
)

__all__ = [
    "cast_vote",
    "change_vote",
    "get_my_votes",
    "cast_delegated_votes",
    "get_vote_breakdown",
    "get_jitter_report",
    # Delegation
    "create_delegation",
    "revoke_delegation",
    "list_delegations",
]
