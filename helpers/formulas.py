"""Pure math formulas - no dependencies on storage, easily testable."""

import math
from datetime import datetime

Z_95 = 1.96
DAYS_PER_YEAR = 365.25


# Poll economics


def split_poll_cost(cost: int, burn_percent: int = 1) -> tuple[int, int]:
    """Return ``(burn, rewards_pool)``; integer floor on the burn share."""
    burn = cost * burn_percent // 100
    return burn, cost - burn


def outcome_percentages(yes: int, no: int, abstain: int) -> tuple[float, float, float]:
    """Yes/no/abstain shares of the total, 2 decimals. Works on counts or weights."""
    total = yes + no + abstain
    if total == 0:
        return 0.0, 0.0, 0.0
    return (
        round(yes / total * 100, 2),
        round(no / total * 100, 2),
        round(abstain / total * 100, 2),
    )


def is_approved(quorum_met: bool, yes_pct: float, threshold: float) -> bool:
    return quorum_met and yes_pct > threshold


# Shadow consensus


def wald_interval(yes: int, total: int) -> float:
    """95% Wald half-width in percentage points, 2 decimals."""
    if total == 0:
        return 0.0
    p = yes / total
    return round(Z_95 * math.sqrt(p * (1 - p) / total) * 100, 2)


def yes_percentage(yes: int, total: int) -> float:
    return yes / total * 100 if total else 0.0


def classify_gap(gap: float, confidence_interval: float) -> str:
    if gap < confidence_interval:
        return "aligned"
    if gap < 10:
        return "slight_divergence"
    if gap < 20:
        return "moderate_divergence"
    return "significant_divergence"


def trend_direction(true_self_pct: float, shadow_pct: float) -> str:
    diff = shadow_pct - true_self_pct
    if abs(diff) < 3:
        return "stable"
    return "shadow_more_confident" if diff > 0 else "public_more_confident"


def likely_cause(gap: float, true_self_pct: float, shadow_pct: float) -> str:
    if gap < 5:
        return "Public and private beliefs are well-aligned"
    if shadow_pct > true_self_pct:
        return (
            "Authentic selves are more supportive than public personas"
            " - possible social pressure or self-censorship"
        )
    return (
        "Public personas are more supportive than authentic selves"
        " - possible virtue signaling or conformity"
    )


def reputation_bucket(score: float | None) -> str:
    if score is None or score < 40:
        return "0-40"
    if score < 70:
        return "40-70"
    return "70-100"


# Stake pools


def proportional_reward(amount: int, total_pool: int, total_winning: int) -> int:
    """``floor(amount * pool / winning)`` in exact integer arithmetic."""
    if total_winning <= 0:
        return 0
    return amount * total_pool // total_winning


def distribute(winning_amounts: list[int], total_pool: int) -> tuple[list[int], int]:
    """Rewards per winning stake plus the floor-rounding remainder kept by the platform.

    The remainder is always below ``len(winning_amounts)``.
    """
    total_winning = sum(winning_amounts)
    rewards = [proportional_reward(a, total_pool, total_winning) for a in winning_amounts]
    return rewards, total_pool - sum(rewards)


def potential_reward(amount: int, side_total: int, pool_total: int) -> dict:
    """Payout preview as if ``amount`` had already joined ``side_total``."""
    new_side = side_total + amount
    new_pool = pool_total + amount
    reward = proportional_reward(amount, new_pool, new_side)
    return {
        "potential_reward": reward,
        "potential_profit": reward - amount,
        "reward_multiplier": round(reward / amount, 2) if amount else 0.0,
        "pool_total_after": new_pool,
        "side_total_after": new_side,
    }


def confidence_level(amount: int) -> str:
    if amount < 100:
        return "low"
    if amount < 1000:
        return "medium"
    if amount < 10000:
        return "high"
    return "extreme"


# Rollback


def years_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 86400 / DAYS_PER_YEAR


def founder_authority_percentage(years_since_launch: float, authority_years: int = 3) -> int:
    """Yearly step decay to 0 after ``authority_years`` years (3 years: 100 / 66 / 33 / 0)."""
    if authority_years <= 0 or years_since_launch > authority_years:
        return 0
    step = max(math.ceil(years_since_launch) - 1, 0)
    return 100 * (authority_years - step) // authority_years


def rollback_quorum(normal_quorum: int, factor: float = 0.5) -> int:
    return math.floor(normal_quorum * factor)


def exodus_rate(deleted_since: int, total_users: int) -> float:
    return deleted_since / total_users if total_users else 0.0
