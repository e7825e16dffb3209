"""Action API views - thin layer over services."""

from app.container import container
from web.api.errors import ErrorResponse, handle_errors

from .schemas import (
    ActionResponse,
    ActionsResponse,
    CreateActionRequest,
    ExecutionResultResponse,
    ProcessDueResponse,
)


@handle_errors
def create_action(request: CreateActionRequest) -> ActionResponse | ErrorResponse:
    """Create the action of an approved poll."""
    with container.db.transaction() as tx:
        action = container.actions.create_action(
            tx,
            request.poll_id,
            scheduled_at=request.scheduled_at,
            execute_immediately=request.execute_immediately,
        )
    return ActionResponse.model_validate(action)


@handle_errors
def execute_action(action_id: str) -> ExecutionResultResponse | ErrorResponse:
    with container.db.transaction() as tx:
        result = container.actions.execute_action(tx, action_id)
    return ExecutionResultResponse.model_validate(result)


@handle_errors
def cancel_action(action_id: str) -> ActionResponse | ErrorResponse:
    with container.db.transaction() as tx:
        action = container.actions.cancel_action(tx, action_id)
    return ActionResponse.model_validate(action)


@handle_errors
def get_action(action_id: str) -> ActionResponse | ErrorResponse:
    with container.db.transaction() as tx:
        action = container.actions.get_action(tx, action_id)
    return ActionResponse.model_validate(action)


@handle_errors
def list_pending() -> ActionsResponse | ErrorResponse:
    with container.db.transaction() as tx:
        actions = container.actions.list_pending(tx)
    return ActionsResponse(items=[ActionResponse.model_validate(a) for a in actions])


@handle_errors
def process_due() -> ProcessDueResponse | ErrorResponse:
    """Execute every scheduled action whose time has come."""
    return ProcessDueResponse(**container.actions.process_due_actions(container.db))
