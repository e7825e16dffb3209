"""Repositories package - data access layer for the governance store."""

from app.repositories.actions import ActionRepository, RollbackRequestRepository
from app.repositories.base import BaseRepository
from app.repositories.consensus import ConsensusRepository
from app.repositories.db import Database, Transaction, init_tables
from app.repositories.parameters import ArticleRepository, ParameterRepository
from app.repositories.polls import DelegationRepository, PollRepository, VoteRepository
from app.repositories.staking import StakePoolRepository, StakeRepository

__all__ = [
    # DB
    "Database",
    "Transaction",
    "init_tables",
    # Base
    "BaseRepository",
    # Polls
    "PollRepository",
    "VoteRepository",
    "DelegationRepository",
    # Staking
    "StakePoolRepository",
    "StakeRepository",
    # Parameters
    "ParameterRepository",
    "ArticleRepository",
    # Actions
    "ActionRepository",
    "RollbackRequestRepository",
    # Consensus
    "ConsensusRepository",
]
