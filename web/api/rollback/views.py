"""Rollback API views - thin layer over services."""

from app.container import container
from app.models import Poll
from web.api.actions.schemas import ActionResponse
from web.api.errors import ErrorResponse, handle_errors

from .schemas import (
    AutomaticRollbackResponse,
    FounderAuthorityResponse,
    FounderRollbackRequest,
    PetitionRollbackRequest,
    RollbackPollResponse,
    RollbackStatusResponse,
)


def _poll_response(poll: Poll) -> RollbackPollResponse:
    return RollbackPollResponse(
        rollback_poll_id=poll.id,
        action_id=poll.rollback_target_action_id,
        end_at=poll.end_at,
        minimum_quorum=poll.minimum_quorum,
        approval_threshold=poll.approval_threshold,
    )


@handle_errors
def initiate_founder_rollback(request: FounderRollbackRequest) -> RollbackPollResponse | ErrorResponse:
    """Spend a founder token to open a rollback poll."""
    with container.db.transaction() as tx:
        poll = container.rollback.initiate_founder_rollback(tx, request.user_id, request.action_id, request.reason)
    return _poll_response(poll)


@handle_errors
def petition_rollback(request: PetitionRollbackRequest) -> RollbackPollResponse | ErrorResponse:
    with container.db.transaction() as tx:
        poll = container.rollback.petition_rollback(
            tx,
            request.initiator_id,
            request.action_id,
            request.signer_ids,
            request.reason,
        )
    return _poll_response(poll)


@handle_errors
def check_automatic_rollback(action_id: str) -> AutomaticRollbackResponse | ErrorResponse:
    """Evaluate triggers and open a rollback poll if any fire."""
    with container.db.transaction() as tx:
        triggers = container.rollback.check_automatic_triggers(tx, action_id)
        poll = container.rollback.initiate_automatic_rollback(tx, action_id, triggers)
    return AutomaticRollbackResponse(
        action_id=action_id,
        triggers=triggers,
        rollback_poll_id=poll.id if poll else None,
    )


@handle_errors
def get_rollback_status(action_id: str) -> RollbackStatusResponse | ErrorResponse:
    with container.db.transaction() as tx:
        status = container.rollback.rollback_status(tx, action_id)
    return RollbackStatusResponse.model_validate(status)


@handle_errors
def get_founder_authority() -> FounderAuthorityResponse | ErrorResponse:
    with container.db.transaction() as tx:
        authority = container.rollback.founder_authority(tx)
    return FounderAuthorityResponse.model_validate(authority)


@handle_errors
def execute_rollback(rollback_poll_id: str) -> ActionResponse | ErrorResponse:
    """Apply an approved rollback poll."""
    with container.db.transaction() as tx:
        action = container.rollback.execute_rollback(tx, rollback_poll_id)
    return ActionResponse.model_validate(action)
