"""Governance actions - turn an approved poll into an executed change."""

import uuid
from collections.abc import Callable
from datetime import datetime, timedelta

from loguru import logger

from app.errors import GovernanceError, NotFoundError, StateError, ValidationError
from app.models import Action, ExecutionResult, Poll
from app.models.common import ActionStatus, ActionType, ParameterCategory, PollStatus, PollType, ValueType
from app.repositories import ActionRepository, Database, Transaction
from app.services.parameters import ParameterRegistry
from app.services.polls import PollService
from settings.governance import GovernanceConfig

# Actions in these states can never run again
TERMINAL_ACTION_STATUSES = (
    ActionStatus.COMPLETED,
    ActionStatus.FAILED,
    ActionStatus.ROLLED_BACK,
    ActionStatus.CANCELLED,
)


class ActionService:
    """Creates, schedules and executes actions. The only writer of parameter values."""

    def __init__(
        self,
        action_repo: ActionRepository,
        polls: PollService,
        registry: ParameterRegistry,
        config: GovernanceConfig,
        clock: Callable[[], datetime],
    ):
        self._actions = action_repo
        self._polls = polls
        self._registry = registry
        self._config = config
        self._clock = clock
        self._executors = {
            ActionType.PARAMETER_UPDATE: self._update_parameter,
            ActionType.FEATURE_TOGGLE: self._update_parameter,
            ActionType.REWARD_ADJUSTMENT: self._adjust_reward,
            ActionType.CUSTOM_ACTION: self._custom_action,
        }
        logger.debug("ActionService initialized")

    def window_hours(self, is_constitutional: bool) -> int:
        if is_constitutional:
            return self._config.constitutional_window_hours
        return self._config.standard_window_hours

    def _action_type(self, tx: Transaction, poll: Poll) -> ActionType:
        if not poll.parameter_name:
            return ActionType.CUSTOM_ACTION
        param = self._registry.get_parameter(tx, poll.parameter_name)
        if param.value_type == ValueType.BOOLEAN:
            return ActionType.FEATURE_TOGGLE
        if param.category == ParameterCategory.REWARD_DISTRIBUTION:
            return ActionType.REWARD_ADJUSTMENT
        return ActionType.PARAMETER_UPDATE

    def create_action(
        self,
        tx: Transaction,
        poll_id: str,
        scheduled_at: datetime | None = None,
        execute_immediately: bool = False,
    ) -> Action:
        """Create the action for an approved poll, optionally running it right away."""
        poll = self._polls.get_poll(tx, poll_id)
        if poll.status != PollStatus.APPROVED:
            raise StateError(f"Cannot create action for poll with status: {poll.status}")
        if poll.poll_type == PollType.EMERGENCY_ROLLBACK:
            raise ValidationError("Rollback polls are executed by the rollback protocol")
        existing = self._actions.for_poll(tx, poll_id)
        if existing is not None and existing.status != ActionStatus.CANCELLED:
            raise StateError(f"Poll {poll_id} already has action {existing.id}")

        now = self._clock()
        if scheduled_at is not None and scheduled_at < now and not execute_immediately:
            raise ValidationError("Scheduled time cannot be in the past")
        is_constitutional = poll.poll_type == PollType.CONSTITUTIONAL
        action = Action(
            id=str(uuid.uuid4()),
            poll_id=poll_id,
            action_type=self._action_type(tx, poll),
            status=ActionStatus.PENDING if execute_immediately else ActionStatus.SCHEDULED,
            parameter_name=poll.parameter_name,
            old_value=poll.parameter_current_value,
            new_value=poll.parameter_proposed_value,
            is_constitutional=is_constitutional,
            scheduled_at=None if execute_immediately else (scheduled_at or now),
            executed_at=None,
            rollback_window_hours=self.window_hours(is_constitutional),
            rollback_window_expires_at=None,
            error_message=None,
            rolled_back_at=None,
            rollback_initiation_type=None,
            rollback_initiated_by=None,
            rollback_poll_id=None,
            created_at=now,
            updated_at=now,
        )
        self._actions.insert(tx, action)
        self._polls.link_action(tx, poll_id, action.id)
        logger.info("Action {} created for poll {}: {} ({})", action.id, poll_id, action.action_type, action.status)

        if execute_immediately:
            self.execute_action(tx, action.id)
            return self._actions.require(tx, action.id)
        return action

    def execute_action(self, tx: Transaction, action_id: str) -> ExecutionResult:
        """Run the action once.

        A domain error from the executor marks the action failed and is
        returned, not raised, so the failure is committed with the row.
        """
        action = self._actions.require(tx, action_id)
        if action.status in TERMINAL_ACTION_STATUSES or action.status == ActionStatus.EXECUTING:
            raise StateError(f"Action {action_id} cannot be executed (status: {action.status})")

        now = self._clock()
        self._actions.update(tx, action_id, status=ActionStatus.EXECUTING, updated_at=now)
        executor = self._executors.get(action.action_type)
        try:
            if executor is None:
                raise ValidationError(f"Unknown action type: {action.action_type}")
            old_value = executor(tx, action)
        except (ValidationError, StateError, NotFoundError) as exc:
            self._actions.update(tx, action_id, status=ActionStatus.FAILED, error_message=exc.message, updated_at=now)
            logger.error("Action {} failed: {}", action_id, exc.message)
            return ExecutionResult(action_id=action_id, status=ActionStatus.FAILED, success=False, error_message=exc.message)

        self._actions.update(
            tx,
            action_id,
            status=ActionStatus.COMPLETED,
            old_value=old_value,
            executed_at=now,
            rollback_window_expires_at=now + timedelta(hours=action.rollback_window_hours),
            updated_at=now,
        )
        self._polls.mark_executed(tx, action.poll_id, action_id)
        logger.info("Action {} executed ({})", action_id, action.action_type)
        return ExecutionResult(action_id=action_id, status=ActionStatus.COMPLETED, success=True)

    # Executors return the value in force before the change

    def _update_parameter(self, tx: Transaction, action: Action) -> str | None:
        if not action.parameter_name or action.new_value is None:
            raise ValidationError("Parameter update requires parameter name and new value")
        return self._registry.apply_value(tx, action.parameter_name, action.new_value)

    def _adjust_reward(self, tx: Transaction, action: Action) -> str | None:
        if action.parameter_name:
            return self._update_parameter(tx, action)
        logger.info("Reward adjustment {} has no parameter, nothing to apply", action.id)
        return action.old_value

    def _custom_action(self, tx: Transaction, action: Action) -> str | None:
        logger.info("Custom action {} recorded for poll {}", action.id, action.poll_id)
        return action.old_value

    def cancel_action(self, tx: Transaction, action_id: str) -> Action:
        action = self._actions.require(tx, action_id)
        if action.status not in (ActionStatus.PENDING, ActionStatus.SCHEDULED):
            raise StateError(f"Only pending or scheduled actions can be cancelled (status: {action.status})")
        self._actions.update(
            tx,
            action_id,
            status=ActionStatus.CANCELLED,
            error_message="Action cancelled by administrator",
            updated_at=self._clock(),
        )
        logger.info("Action {} cancelled", action_id)
        return self._actions.require(tx, action_id)

    # Queries

    def get_action(self, tx: Transaction, action_id: str) -> Action:
        return self._actions.require(tx, action_id)

    def action_for_poll(self, tx: Transaction, poll_id: str) -> Action | None:
        return self._actions.for_poll(tx, poll_id)

    def list_pending(self, tx: Transaction) -> list[Action]:
        return self._actions.pending(tx)

    def due_actions(self, tx: Transaction, now: datetime | None = None) -> list[Action]:
        return self._actions.due(tx, now or self._clock())

    def process_due_actions(self, db: Database) -> dict:
        """Sweep: execute every due action, one transaction each."""
        with db.transaction() as tx:
            ids = [a.id for a in self.due_actions(tx)]

        executed, failed, errors = [], [], []
        for action_id in ids:
            try:
                with db.transaction() as tx:
                    result = self.execute_action(tx, action_id)
            except GovernanceError as exc:
                failed.append(action_id)
                errors.append(f"Action {action_id}: {exc.message}")
                logger.error("Scheduled action {} aborted: {}", action_id, exc.message)
                continue
            if result.success:
                executed.append(action_id)
            else:
                failed.append(action_id)
                errors.append(f"Action {action_id}: {result.error_message}")

        logger.info("Processed {} due actions: {} executed, {} failed", len(ids), len(executed), len(failed))
        return {"executed": executed, "failed": failed, "errors": errors}
