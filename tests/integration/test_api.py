"""API views: request/response models and error mapping over the wired container."""

from web.api import actions, consensus, parameters, polls, rollback, staking, votes
from web.api.errors import ErrorResponse
from web.api.parameters.schemas import ConstitutionCheckRequest, ValidateParameterRequest
from web.api.polls.schemas import ClosePollRequest, CreatePollRequest
from web.api.rollback.schemas import FounderRollbackRequest
from web.api.staking.schemas import CreateStakeRequest
from web.api.votes.schemas import CastVoteRequest


class TestPollViews:
    def test_create_and_fetch(self, gov, user):
        user("alice")
        created = polls.create_poll(CreatePollRequest(user_id="alice", title="Night mode", description="Add it?"))
        assert created.creation_cost == 500
        fetched = polls.get_poll(created.id)
        assert fetched.title == "Night mode"
        assert [p.id for p in polls.list_polls(created_by="alice").items] == [created.id]

    def test_not_found(self, gov):
        response = polls.get_poll("missing")
        assert isinstance(response, ErrorResponse)
        assert response.status == 404
        assert response.details == {"entity": "Poll", "key": "missing"}

    def test_constitutional_violation(self, gov, user):
        user("alice")
        response = polls.create_poll(
            CreatePollRequest(
                user_id="alice",
                title="Disable shadows",
                description="Turn them off",
                poll_type="parameter_vote",
                parameter_name="shadow_voting_enabled",
                proposed_value="false",
            )
        )
        assert response.status == 403
        assert response.error == "ConstitutionalViolation"
        assert response.details["violations"][0]["article_number"] == 1

    def test_bad_pagination(self, gov):
        response = polls.list_polls(limit=500)
        assert response.status == 400

    def test_close_early_is_conflict(self, gov, make_poll):
        poll = make_poll()
        response = polls.close_poll(ClosePollRequest(poll_id=poll.id))
        assert response.status == 409


class TestVoteViews:
    def test_cast_hides_actual_time(self, gov, make_poll, user):
        poll = make_poll()
        user("alice")
        response = votes.cast_vote(
            CastVoteRequest(user_id="alice", poll_id=poll.id, identity_mode="shadow", option="yes")
        )
        assert response.vote_option == "yes"
        assert "cast_at" not in response.model_dump()

    def test_duplicate_is_forbidden(self, gov, make_poll, user):
        poll = make_poll()
        user("alice")
        request = CastVoteRequest(user_id="alice", poll_id=poll.id, identity_mode="true_self", option="yes")
        votes.cast_vote(request)
        response = votes.cast_vote(request)
        assert response.status == 403
        assert response.error == "DuplicateVote"

    def test_jitter_report(self, gov, make_poll, vote):
        poll = make_poll()
        vote(poll.id, ["a"])
        report = votes.get_jitter_report(poll.id)
        assert report.count == 1


class TestStakingViews:
    def test_insufficient_balance_details(self, gov, make_poll, user):
        poll = make_poll()
        user("alice", gratium=20)
        response = staking.create_stake(
            CreateStakeRequest(user_id="alice", poll_id=poll.id, identity_mode="true_self", position="yes", amount=50)
        )
        assert response.status == 403
        assert response.details == {"token": "Gratium", "required": 50, "available": 20}

    def test_pool(self, gov, make_poll):
        poll = make_poll()
        assert staking.get_pool(poll.id).status == "open"


class TestParameterViews:
    def test_validate(self, gov):
        result = parameters.validate_parameter(ValidateParameterRequest(name="poll_default_duration_days", value="2"))
        assert not result.is_valid

    def test_articles(self, gov):
        assert len(parameters.get_articles().items) == 6

    def test_check_constitution(self, gov):
        result = parameters.check_constitution(ConstitutionCheckRequest(description="Allow short selling of Gratium"))
        assert result.is_violation


class TestActionAndRollbackViews:
    def test_rollback_flow(self, gov, executed_action):
        action = executed_action()
        status = rollback.get_rollback_status(action.id)
        assert status.can_rollback

        opened = rollback.initiate_founder_rollback(
            FounderRollbackRequest(user_id=gov.config.founder_user_id, action_id=action.id, reason="Too long")
        )
        assert opened.action_id == action.id
        assert rollback.get_founder_authority().tokens_remaining == 9

        response = rollback.execute_rollback(opened.rollback_poll_id)
        assert response.status == 409

    def test_expired_window_details(self, gov, executed_action, clock):
        action = executed_action()
        clock.advance(hours=73)
        response = rollback.initiate_founder_rollback(
            FounderRollbackRequest(user_id=gov.config.founder_user_id, action_id=action.id, reason="Too late")
        )
        assert response.error == "RollbackWindowExpired"
        assert response.details["action_id"] == action.id

    def test_process_due(self, gov):
        assert actions.process_due().executed == []

    def test_consensus_missing(self, gov, make_poll):
        poll = make_poll()
        assert consensus.get_consensus(poll.id).status == 404

    def test_automatic_rollback_on_exodus(self, gov, executed_action, clock):
        with gov.db.transaction() as tx:
            for i in range(10):
                gov.profiles.upsert(tx, f"member-{i}", 60.0, True)
        action = executed_action()
        quiet = rollback.check_automatic_rollback(action.id)
        assert quiet.triggers == []
        assert quiet.rollback_poll_id is None

        clock.advance(hours=1)
        with gov.db.transaction() as tx:
            for i in range(8):
                gov.profiles.mark_deleted(tx, f"member-{i}")
        response = rollback.check_automatic_rollback(action.id)
        assert len(response.triggers) == 1
        assert response.triggers[0].startswith("User exodus detected")
        with gov.db.transaction() as tx:
            requests = gov.rollback.requests_for_action(tx, action.id)
        assert [r.rollback_poll_id for r in requests] == [response.rollback_poll_id]
