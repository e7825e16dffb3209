"""Tests for the constitutional guard."""

import pytest

from app.errors import ConstitutionalViolation
from app.services.parameters.constitution import ConstitutionalGuard

guard = ConstitutionalGuard()


class TestArticles:
    def test_six_articles(self):
        assert [a.number for a in guard.articles] == [1, 2, 3, 4, 5, 6]

    def test_disabling_shadow_voting(self):
        result = guard.check("shadow_voting_enabled", "false")
        assert result.is_violation
        assert result.violations[0]["article_number"] == 1

    def test_enabling_shadow_voting_is_fine(self):
        assert not guard.check("shadow_voting_enabled", "true").is_violation

    def test_value_compared_case_insensitively(self):
        assert guard.check("shadow_voting_enabled", " FALSE ").is_violation

    def test_any_value_of_forced_reveal_violates(self):
        assert guard.check("force_reveal_identity", "whatever").is_violation

    def test_exact_rule_ignores_longer_names(self):
        assert guard.check("requires_verification_to_vote", "false").is_violation
        assert not guard.check("requires_verification_to_vote_later", "false").is_violation

    def test_derivatives(self):
        result = guard.check("allow_margin_trading", "true")
        assert [v["article_number"] for v in result.violations] == [5]

    def test_description_phrases(self):
        result = guard.check(description="Proposal to UNMASK USERS who vote in shadow")
        assert result.violations[0]["article_number"] == 2

    def test_reason_names_article(self):
        reason = guard.check("emergency_protocol_active", "false").violations[0]["reason"]
        assert reason.endswith("(protected by Constitution Article 6)")

    def test_enforce_raises(self):
        with pytest.raises(ConstitutionalViolation) as exc:
            guard.enforce("arweave_archiving", "false", "Stop archiving")
        assert exc.value.violations[0]["article_number"] == 4

    def test_seed_frame(self):
        from datetime import datetime

        df = guard.seed_frame(datetime(2025, 1, 1))
        assert df.height == 6
        assert "principle" in df.columns
