"""Staking API."""

from web.api.staking.views import (
    create_stake,
    get_my_stakes,
    get_poll_stakes,
    get_pool,
    get_potential_reward,
    get_stake_history,
    resolve_pool,
)

__all__ = [
    "create_stake",
    "get_pool",
    "get_potential_reward",
    "get_my_stakes",
    "get_poll_stakes",
    "get_stake_history",
    "resolve_pool",
]
