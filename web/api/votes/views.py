"""Vote and delegation API views - thin layer over services."""

from app.container import container
from web.api.errors import ErrorResponse, handle_errors

from .schemas import (
    CastVoteRequest,
    CreateDelegationRequest,
    DelegatedVoteRequest,
    DelegationResponse,
    DelegationsResponse,
    JitterReportResponse,
    VoteBreakdownResponse,
    VoteResponse,
    VotesResponse,
)


@handle_errors
def cast_vote(request: CastVoteRequest) -> VoteResponse | ErrorResponse:
    """Cast the first vote for an identity."""
    with container.db.transaction() as tx:
        vote = container.votes.cast_vote(
            tx,
            request.user_id,
            request.poll_id,
            request.identity_mode,
            request.option,
            request.reasoning,
        )
    return VoteResponse.model_validate(vote)


@handle_errors
def change_vote(request: CastVoteRequest) -> VoteResponse | ErrorResponse:
    """Change an existing vote; section and weight stay the same."""
    with container.db.transaction() as tx:
        vote = container.votes.change_vote(
            tx,
            request.user_id,
            request.poll_id,
            request.identity_mode,
            request.option,
            request.reasoning,
        )
    return VoteResponse.model_validate(vote)


@handle_errors
def get_my_votes(user_id: str, poll_id: str) -> VotesResponse | ErrorResponse:
    """Both identities' votes of a user on one poll."""
    with container.db.transaction() as tx:
        votes = container.votes.get_user_votes(tx, user_id, poll_id)
    return VotesResponse(poll_id=poll_id, items=[VoteResponse.model_validate(v) for v in votes])


@handle_errors
def cast_delegated_votes(request: DelegatedVoteRequest) -> VotesResponse | ErrorResponse:
    with container.db.transaction() as tx:
        votes = container.votes.cast_delegated_votes(
            tx,
            request.delegate_id,
            request.poll_id,
            request.option,
            request.reasoning,
        )
    return VotesResponse(poll_id=request.poll_id, items=[VoteResponse.model_validate(v) for v in votes])


@handle_errors
def get_vote_breakdown(poll_id: str) -> VoteBreakdownResponse | ErrorResponse:
    with container.db.transaction() as tx:
        breakdown = container.votes.get_vote_breakdown(tx, poll_id)
    return VoteBreakdownResponse.model_validate(breakdown)


@handle_errors
def get_jitter_report(poll_id: str) -> JitterReportResponse | ErrorResponse:
    with container.db.transaction() as tx:
        stats = container.votes.jitter_report(tx, poll_id)
    return JitterReportResponse(poll_id=poll_id, **stats)


# Delegation


@handle_errors
def create_delegation(request: CreateDelegationRequest) -> DelegationResponse | ErrorResponse:
    with container.db.transaction() as tx:
        delegation = container.delegations.create_delegation(
            tx,
            request.user_id,
            request.identity_mode,
            request.delegate_id,
            request.delegation_type,
            request.target_poll_id,
            request.active_until,
        )
    return DelegationResponse.model_validate(delegation)


@handle_errors
def revoke_delegation(user_id: str, delegation_id: str) -> DelegationResponse | ErrorResponse:
    with container.db.transaction() as tx:
        delegation = container.delegations.revoke_delegation(tx, user_id, delegation_id)
    return DelegationResponse.model_validate(delegation)


@handle_errors
def list_delegations(user_id: str) -> DelegationsResponse | ErrorResponse:
    with container.db.transaction() as tx:
        delegations = container.delegations.list_delegations(tx, user_id)
    return DelegationsResponse(user_id=user_id, items=[DelegationResponse.model_validate(d) for d in delegations])
