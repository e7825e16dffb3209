"""Staking domain models - pools and stakes."""

from app.models.staking.entities import Distribution, Stake, StakePool
from app.models.staking.stake import STAKE_DDL, STAKE_POOL_DDL

__all__ = [
    "STAKE_POOL_DDL",
    "STAKE_DDL",
    "StakePool",
    "Stake",
    "Distribution",
]
