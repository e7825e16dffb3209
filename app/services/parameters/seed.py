"""Initial parameter whitelist."""

from datetime import datetime

import polars as pl

from app.models.common import ParameterCategory, ValueType

# name, category, type, min, max, default, super-majority, emergency, description
PARAMETER_SEED = [
    ("poll_creation_cost_general", ParameterCategory.ECONOMIC_ACCESSIBILITY, ValueType.INTEGER, 100, 5000, "500", False, False,
     "PollCoin cost to create a general community poll"),
    ("poll_creation_cost_parameter", ParameterCategory.ECONOMIC_ACCESSIBILITY, ValueType.INTEGER, 500, 10000, "1000", True, False,
     "PollCoin cost to create a parameter or constitutional poll"),
    ("minimum_gratium_stake", ParameterCategory.ECONOMIC_ACCESSIBILITY, ValueType.INTEGER, 1, 100, "10", False, False,
     "Minimum Gratium amount for a prediction stake"),
    ("gratium_stake_reward_multiplier", ParameterCategory.REWARD_DISTRIBUTION, ValueType.DECIMAL, 1.0, 3.0, "1.5", False, False,
     "Reward multiplier applied to winning Gratium stakes"),
    ("minimum_light_score_to_vote", ParameterCategory.FEATURE_ACCESS, ValueType.DECIMAL, 0, 50, "10", True, False,
     "Minimum reputation score required to vote"),
    ("minimum_poh_score_for_delegation", ParameterCategory.FEATURE_ACCESS, ValueType.INTEGER, 50, 90, "70", True, False,
     "Minimum Proof of Humanity score to receive delegated votes"),
    ("poll_minimum_vote_quorum", ParameterCategory.GOVERNANCE_RULES, ValueType.INTEGER, 100, 10000, "1000", True, False,
     "Default absolute minimum votes required for a binding poll"),
    ("poll_approval_percentage", ParameterCategory.GOVERNANCE_RULES, ValueType.INTEGER, 50, 75, "50", True, False,
     "Yes percentage a general poll must exceed to pass"),
    ("poll_default_duration_days", ParameterCategory.SYSTEM_PARAMETERS, ValueType.INTEGER, 3, 30, "7", False, False,
     "Default poll voting window in days"),
    ("max_vote_changes_per_poll", ParameterCategory.GOVERNANCE_RULES, ValueType.INTEGER, 1, 10, "5", False, False,
     "Maximum times a vote may be changed on a single poll"),
    ("vote_timing_jitter_max_seconds", ParameterCategory.GOVERNANCE_RULES, ValueType.INTEGER, 3600, 14400, "7200", True, False,
     "Maximum random delay applied to displayed vote times"),
    ("section_multiplier_min", ParameterCategory.GOVERNANCE_RULES, ValueType.DECIMAL, 0.5, 0.9, "0.7", True, False,
     "Lower bound for section multipliers"),
    ("section_multiplier_max", ParameterCategory.GOVERNANCE_RULES, ValueType.DECIMAL, 1.1, 2.0, "1.5", True, False,
     "Upper bound for section multipliers"),
    ("shadow_voting_enabled", ParameterCategory.FEATURE_ACCESS, ValueType.BOOLEAN, None, None, "true", True, False,
     "Whether Shadow identities may vote"),
    ("ai_assistant_public_access", ParameterCategory.FEATURE_ACCESS, ValueType.BOOLEAN, None, None, "true", False, True,
     "Whether the AI assistant is accessible to all users"),
]


def parameter_frame(now: datetime) -> pl.DataFrame:
    """Seed rows shaped like the parameter table."""
    rows = [
        {
            "name": name,
            "category": str(category),
            "description": description,
            "value_type": str(value_type),
            "current_value": default,
            "default_value": default,
            "min_value": None if low is None else float(low),
            "max_value": None if high is None else float(high),
            "is_voteable": True,
            "requires_supermajority": supermajority,
            "is_emergency": emergency,
            "frozen_until": None,
            "rollback_count": 0,
            "times_changed": 0,
            "last_changed_at": None,
            "created_at": now,
            "updated_at": now,
        }
        for name, category, value_type, low, high, default, supermajority, emergency, description in PARAMETER_SEED
    ]
    return pl.DataFrame(
        rows,
        schema={
            "name": pl.Utf8,
            "category": pl.Utf8,
            "description": pl.Utf8,
            "value_type": pl.Utf8,
            "current_value": pl.Utf8,
            "default_value": pl.Utf8,
            "min_value": pl.Float64,
            "max_value": pl.Float64,
            "is_voteable": pl.Boolean,
            "requires_supermajority": pl.Boolean,
            "is_emergency": pl.Boolean,
            "frozen_until": pl.Datetime("us"),
            "rollback_count": pl.Int32,
            "times_changed": pl.Int32,
            "last_changed_at": pl.Datetime("us"),
            "created_at": pl.Datetime("us"),
            "updated_at": pl.Datetime("us"),
        },
    )
