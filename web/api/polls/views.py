"""Poll API views - thin layer over services."""

from app.container import container
from web.api.errors import ErrorResponse, handle_errors, validate_page

from .schemas import (
    ClosePollRequest,
    CreatePollRequest,
    PollResponse,
    PollResultResponse,
    PollsResponse,
    PollStatisticsResponse,
    SectionDistributionResponse,
    SectionItem,
)


@handle_errors
def create_poll(request: CreatePollRequest) -> PollResponse | ErrorResponse:
    """Create a poll; charges the creator and opens its stake pool."""
    with container.db.transaction() as tx:
        poll = container.polls.create_poll(
            tx,
            user_id=request.user_id,
            title=request.title,
            description=request.description,
            poll_type=request.poll_type,
            parameter_name=request.parameter_name,
            proposed_value=request.proposed_value,
            duration_days=request.duration_days,
            start_at=request.start_at,
            proposal_url=request.proposal_url,
            identity_mode=request.identity_mode,
        )
    return PollResponse.model_validate(poll)


@handle_errors
def close_poll(request: ClosePollRequest) -> PollResultResponse | ErrorResponse:
    """Close a poll and compute its outcome."""
    with container.db.transaction() as tx:
        result = container.polls.close_poll(tx, request.poll_id, force=request.force)
    return PollResultResponse.model_validate(result)


@handle_errors
def get_poll(poll_id: str) -> PollResponse | ErrorResponse:
    with container.db.transaction() as tx:
        poll = container.polls.get_poll(tx, poll_id)
    return PollResponse.model_validate(poll)


@handle_errors
def list_polls(
    status: str | None = None,
    poll_type: str | None = None,
    created_by: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> PollsResponse | ErrorResponse:
    """List polls, newest first."""
    validate_page(limit, offset)
    with container.db.transaction() as tx:
        polls = container.polls.list_polls(tx, status, poll_type, created_by, limit, offset)
    return PollsResponse(
        items=[PollResponse.model_validate(p) for p in polls],
        limit=limit,
        offset=offset,
    )


@handle_errors
def get_statistics(poll_id: str) -> PollStatisticsResponse | ErrorResponse:
    """Live tallies and quorum progress."""
    with container.db.transaction() as tx:
        data = container.polls.get_statistics(tx, poll_id)
    return PollStatisticsResponse(**data)


@handle_errors
def get_section_distribution(poll_id: str) -> SectionDistributionResponse | ErrorResponse:
    with container.db.transaction() as tx:
        data = container.votes.section_distribution(tx, poll_id)
    return SectionDistributionResponse(poll_id=poll_id, items=[SectionItem(**s) for s in data])
