"""Stake pool services."""

from app.services.staking.engine import StakePoolEngine

__all__ = [
    "StakePoolEngine",
]
