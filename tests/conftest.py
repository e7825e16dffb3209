"""Shared fixtures: an in-memory store wired through the container with a controllable clock."""

import random
from datetime import datetime, timedelta

import pytest

from app.container import container
from app.models.common import IdentityMode, PollType, TokenType, VoteOption
from app.repositories import Database
from settings.governance import GovernanceConfig

START = datetime(2025, 3, 1, 12, 0, 0)
FOUNDER = "founder"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def known(gov, user_id: str) -> bool:
    with gov.db.transaction() as tx:
        return bool(tx.scalar("SELECT COUNT(*) FROM user_profile WHERE user_id = ?", [user_id]))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gov(clock):
    """Container on a fresh in-memory database, seeded, with a quorum of 2 votes."""
    config = GovernanceConfig(founder_user_id=FOUNDER, platform_launch_at=START)
    container.init(db=Database(":memory:"), config=config, clock=clock, rng=random.Random(42), force=True)
    with container.db.transaction() as tx:
        container.seed(tx)
        container.parameter_repo.update(tx, "poll_minimum_vote_quorum", current_value="2")
    yield container
    container.db.close()


@pytest.fixture
def user(gov):
    """Factory for a profile funded with both tokens on both identities."""

    def make(user_id: str, reputation: float = 80.0, verified: bool = True, pollcoin: int = 5000, gratium: int = 5000):
        with gov.db.transaction() as tx:
            gov.profiles.upsert(tx, user_id, reputation, verified)
            for mode in IdentityMode:
                if pollcoin:
                    gov.ledger.credit(tx, user_id, mode, TokenType.POLLCOIN, pollcoin, "Test funding")
                if gratium:
                    gov.ledger.credit(tx, user_id, mode, TokenType.GRATIUM, gratium, "Test funding")
        return user_id

    return make


@pytest.fixture
def make_poll(gov, user):
    """Factory for an active poll; a parameter name turns it into a parameter vote."""

    def make(parameter_name: str | None = None, proposed_value: str | None = None, creator: str = "creator", **kwargs):
        if not known(gov, creator):
            user(creator)
        poll_type = PollType.PARAMETER_VOTE if parameter_name else PollType.GENERAL_COMMUNITY
        with gov.db.transaction() as tx:
            return gov.polls.create_poll(
                tx,
                creator,
                title=kwargs.pop("title", f"Change {parameter_name}" if parameter_name else "Community question"),
                description=kwargs.pop("description", "Should we do it?"),
                poll_type=kwargs.pop("poll_type", poll_type),
                parameter_name=parameter_name,
                proposed_value=proposed_value,
                **kwargs,
            )

    return make


@pytest.fixture
def vote(gov, user):
    """Cast one vote per voter, creating verified voters on first use."""

    def cast(poll_id: str, voters, option: str = VoteOption.YES, identity_mode: str = IdentityMode.TRUE_SELF):
        for voter in voters:
            if not known(gov, voter):
                user(voter)
            with gov.db.transaction() as tx:
                gov.votes.cast_vote(tx, voter, poll_id, identity_mode, option)

    return cast


@pytest.fixture
def approve(gov, clock, vote):
    """Push a poll through voting to an approved close."""

    def run(poll_id: str, voters=("voter-1", "voter-2", "voter-3")):
        vote(poll_id, voters, VoteOption.YES)
        with gov.db.transaction() as tx:
            poll = gov.polls.get_poll(tx, poll_id)
        clock.now = max(clock.now, poll.end_at + timedelta(seconds=1))
        with gov.db.transaction() as tx:
            return gov.polls.close_poll(tx, poll_id)

    return run


@pytest.fixture
def executed_action(gov, make_poll, approve):
    """A completed parameter update: poll_default_duration_days 7 -> 10."""

    def run(value: str = "10"):
        poll = make_poll("poll_default_duration_days", value)
        approve(poll.id)
        with gov.db.transaction() as tx:
            return gov.actions.create_action(tx, poll.id, execute_immediately=True)

    return run
