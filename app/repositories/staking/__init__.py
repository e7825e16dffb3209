"""Staking repositories."""

from app.repositories.staking.stake import StakePoolRepository, StakeRepository

__all__ = [
    "StakePoolRepository",
    "StakeRepository",
]
