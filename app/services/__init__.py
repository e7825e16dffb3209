"""Services package - service class exports."""

from app.services.actions import ActionService, RollbackService
from app.services.consensus import ShadowConsensusAnalyzer
from app.services.parameters import ConstitutionalGuard, ParameterRegistry
from app.services.polls import DelegationService, PollService, VoteService
from app.services.staking import StakePoolEngine

__all__ = [
    "ActionService",
    "ConstitutionalGuard",
    "DelegationService",
    "ParameterRegistry",
    "PollService",
    "RollbackService",
    "ShadowConsensusAnalyzer",
    "StakePoolEngine",
    "VoteService",
]
