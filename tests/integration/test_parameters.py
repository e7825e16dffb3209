"""Parameter whitelist: seeding, validation and voting history."""

from app.models.common import ParameterCategory


class TestSeed:
    def test_seed_is_idempotent(self, gov):
        with gov.db.transaction() as tx:
            assert gov.seed(tx) == {"parameters": 0, "articles": 0}
            assert len(gov.article_repo.all(tx)) == 6

    def test_filter_by_category(self, gov):
        with gov.db.transaction() as tx:
            params = gov.registry.list_parameters(tx, category=ParameterCategory.REWARD_DISTRIBUTION)
        assert "gratium_stake_reward_multiplier" in [p.name for p in params]
        assert all(p.category == ParameterCategory.REWARD_DISTRIBUTION for p in params)


class TestValidate:
    def test_valid_with_warnings(self, gov):
        with gov.db.transaction() as tx:
            result = gov.registry.validate_parameter_value(tx, "poll_creation_cost_parameter", "1000")
        assert result.is_valid
        assert any("identical" in w for w in result.warnings)
        assert any("super-majority" in w for w in result.warnings)

    def test_wrong_type(self, gov):
        with gov.db.transaction() as tx:
            result = gov.registry.validate_parameter_value(tx, "poll_default_duration_days", "7.5")
        assert not result.is_valid
        assert result.errors == ["Invalid value type. Expected integer."]

    def test_below_minimum(self, gov):
        with gov.db.transaction() as tx:
            result = gov.registry.validate_parameter_value(tx, "minimum_gratium_stake", "0")
        assert result.errors == ["Value 0 is below minimum allowed value: 1"]

    def test_boolean(self, gov):
        with gov.db.transaction() as tx:
            assert gov.registry.validate_parameter_value(tx, "ai_assistant_public_access", "true").is_valid
            assert not gov.registry.validate_parameter_value(tx, "ai_assistant_public_access", "yes").is_valid

    def test_emergency_warning(self, gov):
        with gov.db.transaction() as tx:
            result = gov.registry.validate_parameter_value(tx, "ai_assistant_public_access", "false")
        assert any("emergency" in w for w in result.warnings)

    def test_unknown(self, gov):
        with gov.db.transaction() as tx:
            result = gov.registry.validate_parameter_value(tx, "nope", "1")
        assert result.errors == ["Parameter 'nope' is not in the whitelist"]


class TestHistory:
    def test_voting_history(self, gov, make_poll, approve):
        poll = make_poll("poll_default_duration_days", "10")
        approve(poll.id)
        with gov.db.transaction() as tx:
            history = gov.registry.voting_history(tx, "poll_default_duration_days")
        assert [h["poll_id"] for h in history] == [poll.id]
        assert history[0]["previous_value"] == "7"
        assert history[0]["quorum_met"]
