"""Action creation, scheduling and execution."""

import uuid
from datetime import timedelta

import pytest

from app.errors import RollbackWindowExpired, StateError, ValidationError
from app.models import Action
from app.models.common import ActionStatus, ActionType, PollStatus, PollType


def pending_action(gov, clock, parameter_name, new_value, old_value=None) -> Action:
    """Action row for a parameter change, bypassing poll approval."""
    action = Action(
        id=str(uuid.uuid4()),
        poll_id=str(uuid.uuid4()),
        action_type=ActionType.PARAMETER_UPDATE,
        status=ActionStatus.PENDING,
        parameter_name=parameter_name,
        old_value=old_value,
        new_value=new_value,
        is_constitutional=False,
        scheduled_at=None,
        executed_at=None,
        rollback_window_hours=72,
        rollback_window_expires_at=None,
        error_message=None,
        rolled_back_at=None,
        rollback_initiation_type=None,
        rollback_initiated_by=None,
        rollback_poll_id=None,
        created_at=clock.now,
        updated_at=clock.now,
    )
    with gov.db.transaction() as tx:
        gov.action_repo.insert(tx, action)
    return action


class TestCreateAction:
    def test_execute_immediately(self, gov, executed_action, clock):
        action = executed_action("10")
        assert action.status == ActionStatus.COMPLETED
        assert action.action_type == ActionType.PARAMETER_UPDATE
        assert action.old_value == "7"
        assert action.executed_at == clock.now
        assert action.rollback_window_expires_at == clock.now + timedelta(hours=72)
        with gov.db.transaction() as tx:
            assert gov.registry.get_parameter(tx, "poll_default_duration_days").current_value == "10"
            assert gov.polls.get_poll(tx, action.poll_id).status == PollStatus.EXECUTED

    def test_feature_toggle_type(self, gov, make_poll, approve):
        poll = make_poll("ai_assistant_public_access", "false")
        approve(poll.id)
        with gov.db.transaction() as tx:
            action = gov.actions.create_action(tx, poll.id)
        assert action.action_type == ActionType.FEATURE_TOGGLE
        assert action.status == ActionStatus.SCHEDULED

    def test_reward_adjustment_type(self, gov, make_poll, approve):
        poll = make_poll("gratium_stake_reward_multiplier", "2.0")
        approve(poll.id)
        with gov.db.transaction() as tx:
            action = gov.actions.create_action(tx, poll.id, execute_immediately=True)
        assert action.action_type == ActionType.REWARD_ADJUSTMENT
        assert action.status == ActionStatus.COMPLETED

    def test_custom_action(self, gov, make_poll, approve):
        poll = make_poll()
        approve(poll.id)
        with gov.db.transaction() as tx:
            action = gov.actions.create_action(tx, poll.id, execute_immediately=True)
        assert action.action_type == ActionType.CUSTOM_ACTION
        assert action.status == ActionStatus.COMPLETED

    def test_requires_approved_poll(self, gov, make_poll):
        poll = make_poll()
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.actions.create_action(tx, poll.id)

    def test_one_action_per_poll(self, gov, make_poll, approve):
        poll = make_poll()
        approve(poll.id)
        with gov.db.transaction() as tx:
            gov.actions.create_action(tx, poll.id)
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.actions.create_action(tx, poll.id)

    def test_schedule_in_past(self, gov, make_poll, approve, clock):
        poll = make_poll()
        approve(poll.id)
        with pytest.raises(ValidationError):
            with gov.db.transaction() as tx:
                gov.actions.create_action(tx, poll.id, scheduled_at=clock.now - timedelta(hours=1))


class TestExecute:
    def test_invalid_value_marks_failed(self, gov, clock):
        action = pending_action(gov, clock, "poll_default_duration_days", "999")
        with gov.db.transaction() as tx:
            result = gov.actions.execute_action(tx, action.id)
            stored = gov.actions.get_action(tx, action.id)
            param = gov.registry.get_parameter(tx, "poll_default_duration_days")
        assert not result.success
        assert "above maximum" in result.error_message
        assert stored.status == ActionStatus.FAILED
        assert param.current_value == "7"

    def test_terminal_cannot_rerun(self, gov, executed_action):
        action = executed_action()
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.actions.execute_action(tx, action.id)

    def test_cancel(self, gov, make_poll, approve, clock):
        poll = make_poll()
        approve(poll.id)
        with gov.db.transaction() as tx:
            action = gov.actions.create_action(tx, poll.id, scheduled_at=clock.now + timedelta(days=1))
            cancelled = gov.actions.cancel_action(tx, action.id)
        assert cancelled.status == ActionStatus.CANCELLED
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.actions.execute_action(tx, action.id)

    def test_cancel_completed_refused(self, gov, executed_action):
        action = executed_action()
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.actions.cancel_action(tx, action.id)


class TestScheduled:
    def test_due_sweep(self, gov, make_poll, approve, clock):
        poll = make_poll("poll_default_duration_days", "12")
        approve(poll.id)
        with gov.db.transaction() as tx:
            action = gov.actions.create_action(tx, poll.id, scheduled_at=clock.now + timedelta(hours=1))
            assert gov.actions.due_actions(tx) == []
            assert [a.id for a in gov.actions.list_pending(tx)] == [action.id]

        clock.advance(hours=1)
        report = gov.actions.process_due_actions(gov.db)
        assert report == {"executed": [action.id], "failed": [], "errors": []}

        again = gov.actions.process_due_actions(gov.db)
        assert again["executed"] == []
        with gov.db.transaction() as tx:
            assert gov.registry.get_parameter(tx, "poll_default_duration_days").current_value == "12"

    def test_failure_reported(self, gov, make_poll, approve, clock):
        poll = make_poll("poll_default_duration_days", "12")
        approve(poll.id)
        with gov.db.transaction() as tx:
            action = gov.actions.create_action(tx, poll.id)
            gov.action_repo.update(tx, action.id, new_value="not-a-number")
        report = gov.actions.process_due_actions(gov.db)
        assert report["failed"] == [action.id]
        assert len(report["errors"]) == 1


class TestConstitutionalWindow:
    def constitutional_action(self, gov, make_poll, approve) -> Action:
        poll = make_poll(
            "poll_default_duration_days",
            "10",
            poll_type=PollType.CONSTITUTIONAL,
            title="Amend the default poll duration",
        )
        assert poll.approval_threshold == 66.0
        approve(poll.id)
        with gov.db.transaction() as tx:
            return gov.actions.create_action(tx, poll.id, execute_immediately=True)

    def initiate(self, gov, action_id):
        with gov.db.transaction() as tx:
            return gov.rollback.initiate_founder_rollback(tx, gov.config.founder_user_id, action_id, "Revert")

    def test_seven_day_window(self, gov, make_poll, approve, clock):
        action = self.constitutional_action(gov, make_poll, approve)
        assert action.is_constitutional
        assert action.rollback_window_hours == 168
        assert action.rollback_window_expires_at - action.executed_at == timedelta(hours=168)

    def test_rollback_on_the_last_second(self, gov, make_poll, approve, clock):
        action = self.constitutional_action(gov, make_poll, approve)
        clock.advance(hours=168)
        assert self.initiate(gov, action.id).rollback_target_action_id == action.id

    def test_rollback_after_window(self, gov, make_poll, approve, clock):
        action = self.constitutional_action(gov, make_poll, approve)
        clock.advance(hours=168, seconds=1)
        with pytest.raises(RollbackWindowExpired):
            self.initiate(gov, action.id)
