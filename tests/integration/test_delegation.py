"""Vote delegation: creation rules, delegated casting and manual override."""

from datetime import timedelta

import pytest

from app.errors import EligibilityError, NotVerified, StateError, ValidationError
from app.models.common import DelegationType, IdentityMode, VoteOption


def delegate(gov, delegator, delegate_id, identity_mode=IdentityMode.TRUE_SELF, **kwargs):
    with gov.db.transaction() as tx:
        return gov.delegations.create_delegation(tx, delegator, identity_mode, delegate_id, **kwargs)


class TestCreateDelegation:
    def test_create(self, gov, user):
        user("alice")
        user("bob")
        d = delegate(gov, "alice", "bob")
        assert d.delegation_type == DelegationType.ALL_GOVERNANCE
        assert d.revoked_at is None

    def test_self_delegation(self, gov, user):
        user("alice")
        with pytest.raises(ValidationError):
            delegate(gov, "alice", "alice")

    def test_no_chains(self, gov, user):
        for name in ("alice", "bob", "carol"):
            user(name)
        delegate(gov, "alice", "bob")
        with pytest.raises(EligibilityError):
            delegate(gov, "bob", "carol")
        with pytest.raises(EligibilityError):
            delegate(gov, "carol", "alice")

    def test_one_active_per_identity(self, gov, user):
        for name in ("alice", "bob", "carol"):
            user(name)
        delegate(gov, "alice", "bob")
        with pytest.raises(EligibilityError):
            delegate(gov, "alice", "carol")
        delegate(gov, "alice", "carol", IdentityMode.SHADOW)

    def test_unverified_delegate(self, gov, user):
        user("alice")
        user("bot", verified=False)
        with pytest.raises(NotVerified):
            delegate(gov, "alice", "bot")

    def test_specific_poll_needs_target(self, gov, user):
        user("alice")
        user("bob")
        with pytest.raises(ValidationError):
            delegate(gov, "alice", "bob", delegation_type=DelegationType.SPECIFIC_POLL)

    def test_end_in_past(self, gov, user, clock):
        user("alice")
        user("bob")
        with pytest.raises(ValidationError):
            delegate(gov, "alice", "bob", active_until=clock.now - timedelta(days=1))


class TestRevoke:
    def test_revoke(self, gov, user):
        user("alice")
        user("bob")
        d = delegate(gov, "alice", "bob")
        with gov.db.transaction() as tx:
            revoked = gov.delegations.revoke_delegation(tx, "alice", d.id)
        assert revoked.revoked_at is not None

    def test_only_delegator(self, gov, user):
        user("alice")
        user("bob")
        d = delegate(gov, "alice", "bob")
        with pytest.raises(EligibilityError):
            with gov.db.transaction() as tx:
                gov.delegations.revoke_delegation(tx, "bob", d.id)

    def test_twice(self, gov, user):
        user("alice")
        user("bob")
        d = delegate(gov, "alice", "bob")
        with gov.db.transaction() as tx:
            gov.delegations.revoke_delegation(tx, "alice", d.id)
        with pytest.raises(StateError):
            with gov.db.transaction() as tx:
                gov.delegations.revoke_delegation(tx, "alice", d.id)


class TestDelegatedVotes:
    def test_delegate_votes_for_delegator(self, gov, user, make_poll):
        user("alice")
        user("bob")
        delegate(gov, "alice", "bob")
        poll = make_poll()
        with gov.db.transaction() as tx:
            cast = gov.votes.cast_delegated_votes(tx, "bob", poll.id, VoteOption.NO)
            refreshed = gov.polls.get_poll(tx, poll.id)
        assert len(cast) == 1
        assert cast[0].user_id == "alice"
        assert cast[0].is_delegated
        assert cast[0].delegated_by == "bob"
        assert refreshed.no_count == 1

    def test_already_voted_is_skipped(self, gov, user, make_poll):
        user("alice")
        user("bob")
        delegate(gov, "alice", "bob")
        poll = make_poll()
        with gov.db.transaction() as tx:
            gov.votes.cast_vote(tx, "alice", poll.id, IdentityMode.TRUE_SELF, VoteOption.YES)
            assert gov.votes.cast_delegated_votes(tx, "bob", poll.id, VoteOption.NO) == []

    def test_manual_vote_replaces_delegated(self, gov, user, make_poll):
        user("alice")
        user("bob")
        delegate(gov, "alice", "bob")
        poll = make_poll()
        with gov.db.transaction() as tx:
            delegated = gov.votes.cast_delegated_votes(tx, "bob", poll.id, VoteOption.NO)[0]
            manual = gov.votes.cast_vote(tx, "alice", poll.id, IdentityMode.TRUE_SELF, VoteOption.YES)
            refreshed = gov.polls.get_poll(tx, poll.id)
        assert manual.id == delegated.id
        assert not manual.is_delegated
        assert manual.change_count == 0
        assert manual.final_weight == delegated.final_weight
        assert (refreshed.yes_count, refreshed.no_count) == (1, 0)

    def test_parameter_only_delegation_skips_general_polls(self, gov, user, make_poll):
        user("alice")
        user("bob")
        delegate(gov, "alice", "bob", delegation_type=DelegationType.PARAMETER_VOTES_ONLY)
        general = make_poll()
        parameter = make_poll("poll_default_duration_days", "10")
        with gov.db.transaction() as tx:
            assert gov.votes.cast_delegated_votes(tx, "bob", general.id, VoteOption.YES) == []
            assert len(gov.votes.cast_delegated_votes(tx, "bob", parameter.id, VoteOption.YES)) == 1

    def test_revoked_delegation_not_used(self, gov, user, make_poll):
        user("alice")
        user("bob")
        d = delegate(gov, "alice", "bob")
        with gov.db.transaction() as tx:
            gov.delegations.revoke_delegation(tx, "alice", d.id)
        poll = make_poll()
        with gov.db.transaction() as tx:
            assert gov.votes.cast_delegated_votes(tx, "bob", poll.id, VoteOption.YES) == []

    def test_manual_vote_with_standing_delegation(self, gov, user, make_poll):
        user("alice")
        user("bob")
        d = delegate(gov, "alice", "bob", delegation_type=DelegationType.PARAMETER_VOTES_ONLY)
        general = make_poll()
        parameter = make_poll("poll_default_duration_days", "10")
        with gov.db.transaction() as tx:
            vote = gov.votes.cast_vote(tx, "alice", parameter.id, IdentityMode.TRUE_SELF, VoteOption.YES)
            assert gov.delegations.find_active(tx, "alice", IdentityMode.TRUE_SELF, parameter).id == d.id
            assert gov.delegations.find_active(tx, "alice", IdentityMode.TRUE_SELF, general) is None
            assert gov.delegations.find_active(tx, "alice", IdentityMode.SHADOW, parameter) is None
        assert not vote.is_delegated
        assert vote.delegated_by is None
