"""Models package - DDL and entities for all governance domains."""

from app.models.actions import (
    ACTION_DDL,
    ROLLBACK_REQUEST_DDL,
    Action,
    ExecutionResult,
    FounderAuthority,
    RollbackRequest,
    RollbackStatus,
)
from app.models.common import BaseEntity
from app.models.consensus import CONSENSUS_SNAPSHOT_DDL, ConsensusReport, ConsensusSnapshot, DemographicGap
from app.models.ledger import TOKEN_ACCOUNT_DDL, TOKEN_LOCK_DDL, TOKEN_TRANSACTION_DDL, USER_PROFILE_DDL
from app.models.parameters import (
    ARTICLE_DDL,
    PARAMETER_DDL,
    ConstitutionalArticle,
    Parameter,
    ValidationResult,
    ViolationCheck,
)
from app.models.polls import DELEGATION_DDL, POLL_DDL, VOTE_DDL, Delegation, Poll, PollResult, Vote, VoteBreakdown
from app.models.staking import STAKE_DDL, STAKE_POOL_DDL, Distribution, Stake, StakePool

ALL_DDL = [
    # Polls
    POLL_DDL,
    VOTE_DDL,
    DELEGATION_DDL,
    # Staking
    STAKE_POOL_DDL,
    STAKE_DDL,
    # Parameters
    PARAMETER_DDL,
    ARTICLE_DDL,
    # Actions
    ACTION_DDL,
    ROLLBACK_REQUEST_DDL,
    # Consensus
    CONSENSUS_SNAPSHOT_DDL,
    # Collaborators
    TOKEN_ACCOUNT_DDL,
    TOKEN_LOCK_DDL,
    TOKEN_TRANSACTION_DDL,
    USER_PROFILE_DDL,
]

__all__ = [
    "BaseEntity",
    # Polls
    "POLL_DDL",
    "VOTE_DDL",
    "DELEGATION_DDL",
    "Poll",
    "Vote",
    "Delegation",
    "PollResult",
    "VoteBreakdown",
    # Staking
    "STAKE_POOL_DDL",
    "STAKE_DDL",
    "StakePool",
    "Stake",
    "Distribution",
    # Parameters
    "PARAMETER_DDL",
    "ARTICLE_DDL",
    "Parameter",
    "ConstitutionalArticle",
    "ValidationResult",
    "ViolationCheck",
    # Actions
    "ACTION_DDL",
    "ROLLBACK_REQUEST_DDL",
    "Action",
    "RollbackRequest",
    "ExecutionResult",
    "RollbackStatus",
    "FounderAuthority",
    # Consensus
    "CONSENSUS_SNAPSHOT_DDL",
    "ConsensusSnapshot",
    "ConsensusReport",
    "DemographicGap",
    # Collaborators
    "TOKEN_ACCOUNT_DDL",
    "TOKEN_LOCK_DDL",
    "TOKEN_TRANSACTION_DDL",
    "USER_PROFILE_DDL",
    # All DDL
    "ALL_DDL",
]
