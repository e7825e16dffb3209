"""Domain enums shared across governance models."""

from enum import StrEnum


class IdentityMode(StrEnum):
    TRUE_SELF = "true_self"
    SHADOW = "shadow"


class PollType(StrEnum):
    PARAMETER_VOTE = "parameter_vote"
    CONSTITUTIONAL = "constitutional"
    EMERGENCY_ROLLBACK = "emergency_rollback"
    GOVERNANCE_FEATURE = "governance_feature"
    GENERAL_COMMUNITY = "general_community"


class PollStatus(StrEnum):
    PENDING = "pending"
    ACTIVE = "active"
    CLOSED = "closed"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXECUTED = "executed"
    ROLLED_BACK = "rolled_back"
    DISPUTED = "disputed"


# Statuses a poll can be in once voting is over
FINISHED_POLL_STATUSES = (
    PollStatus.CLOSED,
    PollStatus.APPROVED,
    PollStatus.REJECTED,
    PollStatus.EXECUTED,
    PollStatus.ROLLED_BACK,
)


class VoteOption(StrEnum):
    YES = "yes"
    NO = "no"
    ABSTAIN = "abstain"


class StakeStatus(StrEnum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"
    REFUNDED = "refunded"
    SLASHED = "slashed"


class PoolStatus(StrEnum):
    OPEN = "open"
    CLOSED = "closed"
    DISTRIBUTED = "distributed"
    REFUNDED = "refunded"


class ValueType(StrEnum):
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    TEXT = "text"


class ParameterCategory(StrEnum):
    ECONOMIC_ACCESSIBILITY = "economic_accessibility"
    FEATURE_ACCESS = "feature_access"
    SYSTEM_PARAMETERS = "system_parameters"
    REWARD_DISTRIBUTION = "reward_distribution"
    GOVERNANCE_RULES = "governance_rules"


class ActionType(StrEnum):
    PARAMETER_UPDATE = "parameter_update"
    FEATURE_TOGGLE = "feature_toggle"
    REWARD_ADJUSTMENT = "reward_adjustment"
    CUSTOM_ACTION = "custom_action"
    EMERGENCY_ROLLBACK = "emergency_rollback"


class ActionStatus(StrEnum):
    PENDING = "pending"
    SCHEDULED = "scheduled"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"
    CANCELLED = "cancelled"


class RollbackInitiationType(StrEnum):
    FOUNDER_UNILATERAL = "founder_unilateral"
    VERIFIED_USER_PETITION = "verified_user_petition"
    AUTOMATIC_TRIGGER = "automatic_trigger"


class DelegationType(StrEnum):
    ALL_GOVERNANCE = "all_governance"
    PARAMETER_VOTES_ONLY = "parameter_votes_only"
    SPECIFIC_POLL = "specific_poll"


class TokenType(StrEnum):
    POLLCOIN = "PollCoin"
    GRATIUM = "Gratium"
