"""Emergency rollback: founder tokens, petitions, automatic triggers and execution."""

import uuid
from datetime import timedelta

import pytest

from app.errors import (
    AuthorityExhausted,
    EligibilityError,
    InvalidParameter,
    RollbackWindowExpired,
    StateError,
    ValidationError,
)
from app.models import Action
from app.models.common import (
    ActionStatus,
    ActionType,
    PollStatus,
    PollType,
    RollbackInitiationType,
)


def completed_action(gov, clock) -> Action:
    """Action row executed at the current clock time, no parameter attached."""
    now = clock.now
    action = Action(
        id=str(uuid.uuid4()),
        poll_id=str(uuid.uuid4()),
        action_type=ActionType.CUSTOM_ACTION,
        status=ActionStatus.COMPLETED,
        parameter_name=None,
        old_value=None,
        new_value=None,
        is_constitutional=False,
        scheduled_at=None,
        executed_at=now,
        rollback_window_hours=72,
        rollback_window_expires_at=now + timedelta(hours=72),
        error_message=None,
        rolled_back_at=None,
        rollback_initiation_type=None,
        rollback_initiated_by=None,
        rollback_poll_id=None,
        created_at=now,
        updated_at=now,
    )
    with gov.db.transaction() as tx:
        gov.action_repo.insert(tx, action)
    return action


def founder_rollback(gov, action_id, user_id=None, reason="Broke the economy"):
    user_id = user_id or gov.config.founder_user_id
    with gov.db.transaction() as tx:
        return gov.rollback.initiate_founder_rollback(tx, user_id, action_id, reason)


class TestFounder:
    def test_opens_emergency_poll(self, gov, executed_action, clock):
        action = executed_action()
        poll = founder_rollback(gov, action.id)
        assert poll.poll_type == PollType.EMERGENCY_ROLLBACK
        assert poll.status == PollStatus.ACTIVE
        assert poll.rollback_target_action_id == action.id
        assert poll.minimum_quorum == 1
        assert poll.approval_threshold == 66.0
        assert poll.creation_cost == 0
        assert poll.end_at == clock.now + timedelta(hours=48)
        assert poll.parameter_proposed_value == "7"
        with gov.db.transaction() as tx:
            stored = gov.actions.get_action(tx, action.id)
            requests = gov.rollback.requests_for_action(tx, action.id)
        assert stored.rollback_initiation_type == RollbackInitiationType.FOUNDER_UNILATERAL
        assert stored.rollback_poll_id == poll.id
        assert requests[0].authority_percentage == 100

    def test_only_founder(self, gov, clock):
        action = completed_action(gov, clock)
        with pytest.raises(EligibilityError):
            founder_rollback(gov, action.id, user_id="mallory")

    def test_reason_required(self, gov, clock):
        action = completed_action(gov, clock)
        with pytest.raises(ValidationError):
            founder_rollback(gov, action.id, reason="  ")

    def test_ten_tokens(self, gov, clock):
        actions = [completed_action(gov, clock) for _ in range(11)]
        for action in actions[:10]:
            founder_rollback(gov, action.id)
        with gov.db.transaction() as tx:
            authority = gov.rollback.founder_authority(tx)
        assert authority.tokens_remaining == 0
        assert not authority.can_rollback
        with pytest.raises(AuthorityExhausted):
            founder_rollback(gov, actions[10].id)

    def test_authority_decays(self, gov, clock):
        clock.now = gov.config.platform_launch_at + timedelta(days=int(365.25 * 2) + 1)
        with gov.db.transaction() as tx:
            assert gov.rollback.founder_authority(tx).authority_percentage == 33

    def test_no_authority_after_three_years(self, gov, clock):
        clock.now = gov.config.platform_launch_at + timedelta(days=int(365.25 * 3) + 2)
        action = completed_action(gov, clock)
        with pytest.raises(AuthorityExhausted):
            founder_rollback(gov, action.id)

    def test_one_open_rollback_per_action(self, gov, clock):
        action = completed_action(gov, clock)
        founder_rollback(gov, action.id)
        with pytest.raises(StateError):
            founder_rollback(gov, action.id)
        with gov.db.transaction() as tx:
            assert gov.rollback.founder_authority(tx).tokens_used == 1


class TestWindow:
    def test_last_instant_accepted(self, gov, clock):
        action = completed_action(gov, clock)
        clock.advance(hours=72)
        assert founder_rollback(gov, action.id).rollback_target_action_id == action.id

    def test_one_second_late(self, gov, clock):
        action = completed_action(gov, clock)
        clock.advance(hours=72, seconds=1)
        with pytest.raises(RollbackWindowExpired):
            founder_rollback(gov, action.id)

    def test_status(self, gov, clock):
        action = completed_action(gov, clock)
        clock.advance(hours=24)
        with gov.db.transaction() as tx:
            status = gov.rollback.rollback_status(tx, action.id)
        assert status.can_rollback
        assert status.hours_remaining == 48.0

        founder_rollback(gov, action.id)
        with gov.db.transaction() as tx:
            status = gov.rollback.rollback_status(tx, action.id)
        assert not status.can_rollback
        assert status.open_rollback_poll_id is not None


class TestPetition:
    def signers(self, gov, count, reputation=80.0, prefix="signer"):
        ids = [f"{prefix}-{i}" for i in range(count)]
        with gov.db.transaction() as tx:
            for signer in ids:
                gov.profiles.upsert(tx, signer, reputation, True)
        return ids

    def test_hundred_signers(self, gov, user, clock):
        user("initiator")
        action = completed_action(gov, clock)
        signers = self.signers(gov, 100)
        with gov.db.transaction() as tx:
            poll = gov.rollback.petition_rollback(tx, "initiator", action.id, signers, "Harmful change")
            request = gov.rollback.requests_for_action(tx, action.id)[0]
        assert poll.created_by == "initiator"
        assert request.signer_count == 100
        assert request.initiation_type == RollbackInitiationType.VERIFIED_USER_PETITION

    def test_low_reputation_signers_do_not_count(self, gov, user, clock):
        user("initiator")
        action = completed_action(gov, clock)
        signers = self.signers(gov, 99) + self.signers(gov, 5, reputation=69.9, prefix="weak")
        with pytest.raises(EligibilityError):
            with gov.db.transaction() as tx:
                gov.rollback.petition_rollback(tx, "initiator", action.id, signers, "Harmful change")

    def test_duplicate_signatures_count_once(self, gov, user, clock):
        user("initiator")
        action = completed_action(gov, clock)
        signers = self.signers(gov, 99)
        with pytest.raises(EligibilityError):
            with gov.db.transaction() as tx:
                gov.rollback.petition_rollback(tx, "initiator", action.id, signers + signers[:1], "Harmful change")

    def test_unverified_initiator(self, gov, user, clock):
        user("bot", verified=False)
        action = completed_action(gov, clock)
        signers = self.signers(gov, 100)
        with pytest.raises(EligibilityError):
            with gov.db.transaction() as tx:
                gov.rollback.petition_rollback(tx, "bot", action.id, signers, "Harmful change")


class TestAutomatic:
    def population(self, gov, count):
        with gov.db.transaction() as tx:
            for i in range(count):
                gov.profiles.upsert(tx, f"member-{i}", 60.0, True)

    def delete(self, gov, count):
        with gov.db.transaction() as tx:
            for i in range(count):
                gov.profiles.mark_deleted(tx, f"member-{i}")

    def test_exodus_triggers(self, gov, clock):
        self.population(gov, 10)
        action = completed_action(gov, clock)
        clock.advance(hours=1)
        self.delete(gov, 3)
        with gov.db.transaction() as tx:
            triggers = gov.rollback.check_automatic_triggers(tx, action.id)
            poll = gov.rollback.initiate_automatic_rollback(tx, action.id)
        assert triggers == ["User exodus detected: 30% of users deleted accounts"]
        assert poll.created_by is None
        assert poll.rollback_target_action_id == action.id

    def test_threshold_is_exclusive(self, gov, clock):
        self.population(gov, 10)
        action = completed_action(gov, clock)
        clock.advance(hours=1)
        self.delete(gov, 2)
        with gov.db.transaction() as tx:
            assert gov.rollback.initiate_automatic_rollback(tx, action.id) is None

    def test_deletions_before_execution_ignored(self, gov, clock):
        self.population(gov, 10)
        self.delete(gov, 5)
        clock.advance(hours=1)
        action = completed_action(gov, clock)
        with gov.db.transaction() as tx:
            assert gov.rollback.check_automatic_triggers(tx, action.id) == []


class TestExecuteRollback:
    def test_restores_previous_value(self, gov, executed_action, approve):
        action = executed_action("10")
        rollback_poll = founder_rollback(gov, action.id)
        assert approve(rollback_poll.id, voters=("r1", "r2")).status == PollStatus.APPROVED

        with gov.db.transaction() as tx:
            rolled = gov.rollback.execute_rollback(tx, rollback_poll.id)
            param = gov.registry.get_parameter(tx, "poll_default_duration_days")
            original = gov.polls.get_poll(tx, action.poll_id)
            emergency = gov.polls.get_poll(tx, rollback_poll.id)
        assert rolled.status == ActionStatus.ROLLED_BACK
        assert rolled.rolled_back_at is not None
        assert param.current_value == "7"
        assert param.rollback_count == 1
        assert original.status == PollStatus.ROLLED_BACK
        assert emergency.status == PollStatus.EXECUTED

    def test_rejected_rollback_poll(self, gov, executed_action):
        action = executed_action()
        rollback_poll = founder_rollback(gov, action.id)
        with gov.db.transaction() as tx:
            gov.polls.close_poll(tx, rollback_poll.id, force=True)
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.rollback.execute_rollback(tx, rollback_poll.id)

    def test_regular_poll_is_not_a_rollback(self, gov, make_poll, approve):
        poll = make_poll()
        approve(poll.id)
        with pytest.raises(ValidationError):
            with gov.db.transaction() as tx:
                gov.rollback.execute_rollback(tx, poll.id)

    def test_rollback_poll_cannot_become_action(self, gov, executed_action, approve):
        action = executed_action()
        rollback_poll = founder_rollback(gov, action.id)
        approve(rollback_poll.id, voters=("r1",))
        with pytest.raises(ValidationError):
            with gov.db.transaction() as tx:
                gov.actions.create_action(tx, rollback_poll.id)


class TestFreeze:
    def test_third_rollback_freezes(self, gov, clock, make_poll):
        with gov.db.transaction() as tx:
            for _ in range(2):
                param = gov.registry.record_rollback(tx, "max_vote_changes_per_poll", "5")
            assert param.frozen_until is None
            param = gov.registry.record_rollback(tx, "max_vote_changes_per_poll", "5")
        assert param.rollback_count == 3
        assert param.frozen_until == clock.now + timedelta(days=90)
        assert not param.is_voteable

        with pytest.raises(InvalidParameter):
            make_poll("max_vote_changes_per_poll", "6")

        clock.advance(days=91)
        with gov.db.transaction() as tx:
            assert gov.registry.unfreeze_expired(tx) == ["max_vote_changes_per_poll"]
            assert gov.registry.get_parameter(tx, "max_vote_changes_per_poll").is_voteable
