"""Poll creation, economics and closing against an in-memory store."""

from datetime import timedelta

import pytest

from app.errors import (
    ConstitutionalViolation,
    InsufficientBalance,
    InsufficientReputation,
    InvalidParameter,
    NotVerified,
    StateError,
    ValidationError,
)
from app.models.common import IdentityMode, PollStatus, PollType, PoolStatus, TokenType, VoteOption
from app.services.collaborators.ledger import REWARDS_POOL_ACCOUNT, SYSTEM_IDENTITY
from helpers import sections


class TestCreatePoll:
    def test_parameter_poll_burns_one_percent(self, gov, make_poll):
        poll = make_poll("poll_default_duration_days", "10")
        assert poll.creation_cost == 1000
        with gov.db.transaction() as tx:
            entries = {e["kind"]: e["amount"] for e in gov.ledger.journal(tx, poll.id)}
            creator_left = gov.ledger.available(tx, "creator", IdentityMode.TRUE_SELF, TokenType.POLLCOIN)
            pool_balance = gov.ledger.available(tx, REWARDS_POOL_ACCOUNT, SYSTEM_IDENTITY, TokenType.POLLCOIN)
        assert entries == {"debit": -1000, "burn": 10, "rewards_pool": 990}
        assert creator_left == 4000
        assert pool_balance == 990

    def test_general_poll_cost(self, make_poll):
        assert make_poll().creation_cost == 500

    def test_new_poll_is_active_with_open_pool(self, gov, make_poll, clock):
        poll = make_poll()
        assert poll.status == PollStatus.ACTIVE
        assert poll.end_at == clock.now + timedelta(days=7)
        assert len(poll.section_multipliers) == 7
        assert all(0.7 <= m <= 1.5 for m in poll.section_multipliers)
        with gov.db.transaction() as tx:
            assert gov.staking.get_pool(tx, poll.id).status == PoolStatus.OPEN

    def test_future_start_is_pending(self, gov, make_poll, clock):
        poll = make_poll(start_at=clock.now + timedelta(hours=1))
        assert poll.status == PollStatus.PENDING
        clock.advance(hours=1)
        with gov.db.transaction() as tx:
            assert gov.polls.activate_due_polls(tx) == [poll.id]

    def test_parameter_snapshot(self, make_poll):
        poll = make_poll("poll_default_duration_days", "10")
        assert poll.parameter_current_value == "7"
        assert poll.parameter_proposed_value == "10"
        assert poll.approval_threshold == 50.0
        assert poll.minimum_quorum == 2

    def test_supermajority_parameter(self, make_poll):
        poll = make_poll("poll_creation_cost_parameter", "1200")
        assert poll.approval_threshold == 66.0

    def test_constitution_checked_before_registry(self, make_poll):
        with pytest.raises(ConstitutionalViolation):
            make_poll("shadow_voting_enabled", "false")

    def test_out_of_bounds_value(self, make_poll):
        with pytest.raises(InvalidParameter) as exc:
            make_poll("poll_default_duration_days", "31")
        assert "above maximum" in exc.value.errors[0]

    def test_unknown_parameter(self, make_poll):
        with pytest.raises(InvalidParameter):
            make_poll("not_a_parameter", "1")

    def test_explicit_zero_duration_rejected(self, make_poll):
        with pytest.raises(ValidationError):
            make_poll(duration_days=0)

    def test_explicit_duration(self, make_poll):
        poll = make_poll(duration_days=3)
        assert poll.end_at - poll.start_at == timedelta(days=3)

    def test_parameter_vote_needs_value(self, make_poll):
        with pytest.raises(ValidationError):
            make_poll(poll_type=PollType.PARAMETER_VOTE)

    def test_rollback_polls_cannot_be_created_directly(self, make_poll):
        with pytest.raises(ValidationError):
            make_poll(poll_type=PollType.EMERGENCY_ROLLBACK)

    def test_unverified_creator(self, gov, make_poll, user):
        user("bot", verified=False)
        with pytest.raises(NotVerified):
            make_poll(creator="bot")

    def test_low_reputation_creator(self, gov, make_poll, user):
        user("newbie", reputation=10)
        with pytest.raises(InsufficientReputation):
            make_poll(creator="newbie")

    def test_insufficient_pollcoin_leaves_nothing_behind(self, gov, make_poll, user):
        user("poor", pollcoin=100)
        with pytest.raises(InsufficientBalance):
            make_poll(creator="poor")
        with gov.db.transaction() as tx:
            assert gov.polls.list_polls(tx, created_by="poor") == []


class TestClosePoll:
    def test_approved(self, gov, make_poll, approve):
        poll = make_poll()
        result = approve(poll.id)
        assert result.status == PollStatus.APPROVED
        assert result.yes_pct == 100.0
        assert result.quorum_met
        assert result.winning_option == VoteOption.YES
        assert result.total_unique_voters == 3
        with gov.db.transaction() as tx:
            assert gov.staking.get_pool(tx, poll.id).status == PoolStatus.CLOSED

    def test_rejected_without_quorum(self, gov, make_poll, vote, clock):
        poll = make_poll()
        vote(poll.id, ["lonely"])
        clock.advance(days=8)
        with gov.db.transaction() as tx:
            result = gov.polls.close_poll(tx, poll.id)
        assert result.status == PollStatus.REJECTED
        assert not result.quorum_met
        assert result.winning_option == VoteOption.ABSTAIN

    def test_rejected_with_quorum(self, gov, make_poll, vote, clock):
        poll = make_poll()
        vote(poll.id, ["a", "b"], VoteOption.NO)
        clock.advance(days=8)
        with gov.db.transaction() as tx:
            result = gov.polls.close_poll(tx, poll.id)
        assert result.status == PollStatus.REJECTED
        assert result.winning_option == VoteOption.NO

    def test_counts_decide_not_weights(self, gov, make_poll, vote, clock):
        poll = make_poll()
        heavy = sections.assign_section("heavy", poll.id, poll.start_at, IdentityMode.TRUE_SELF)
        light = [
            name
            for name in (f"light-{i}" for i in range(50))
            if sections.assign_section(name, poll.id, poll.start_at, IdentityMode.TRUE_SELF) != heavy
        ][:2]
        multipliers = [0.7] * 7
        multipliers[heavy - 1] = 1.5
        with gov.db.transaction() as tx:
            gov.poll_repo.update(tx, poll.id, section_multipliers=multipliers)

        vote(poll.id, light, VoteOption.YES)
        vote(poll.id, ["heavy"], VoteOption.NO)
        clock.advance(days=8)
        with gov.db.transaction() as tx:
            stats = gov.polls.get_statistics(tx, poll.id)
            result = gov.polls.close_poll(tx, poll.id)

        # 1400 yes weight against 1500 no weight, but 2 of 3 votes
        assert stats["weighted_yes_pct"] == 48.28
        assert result.yes_pct == 66.67
        assert result.no_pct == 33.33
        assert result.status == PollStatus.APPROVED
        assert result.winning_option == VoteOption.YES

    def test_cannot_close_early(self, gov, make_poll):
        poll = make_poll()
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.polls.close_poll(tx, poll.id)

    def test_force_close(self, gov, make_poll):
        poll = make_poll()
        with gov.db.transaction() as tx:
            assert gov.polls.close_poll(tx, poll.id, force=True).status == PollStatus.REJECTED

    def test_close_twice(self, gov, make_poll):
        poll = make_poll()
        with gov.db.transaction() as tx:
            gov.polls.close_poll(tx, poll.id, force=True)
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.polls.close_poll(tx, poll.id, force=True)

    def test_sweep_closes_expired(self, gov, make_poll, clock):
        expired = make_poll()
        clock.advance(days=7, seconds=1)
        fresh = make_poll()
        results = gov.polls.close_expired_polls(gov.db)
        assert [r.poll_id for r in results] == [expired.id]
        with gov.db.transaction() as tx:
            assert gov.polls.get_poll(tx, fresh.id).status == PollStatus.ACTIVE


class TestStatistics:
    def test_live_statistics(self, gov, make_poll, vote):
        poll = make_poll()
        vote(poll.id, ["a"], VoteOption.YES)
        vote(poll.id, ["a"], VoteOption.NO, IdentityMode.SHADOW)
        with gov.db.transaction() as tx:
            stats = gov.polls.get_statistics(tx, poll.id)
        assert stats["total_votes"] == 2
        assert stats["unique_voters"] == 1
        assert stats["yes_pct"] == 50.0
        assert stats["weighted_yes_pct"] + stats["weighted_no_pct"] == pytest.approx(100.0)
        assert stats["quorum_progress_pct"] == 100.0
        assert stats["seconds_remaining"] == 7 * 86400
