"""Section assignment and vote weighting.

Every (voter, poll, identity) triple lands in one of seven sections. Each poll
draws its own random multiplier per section at creation, so the weight a vote
carries cannot be predicted before the poll exists.
"""

import hashlib
import random
from datetime import datetime, timezone
from decimal import ROUND_FLOOR, Decimal

import numpy as np

SECTION_COUNT = 7
BASE_WEIGHT = 1000


def iso_timestamp(ts: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def assign_section(
    user_id: str,
    poll_id: str,
    poll_start: datetime,
    identity_mode: str,
    section_count: int = SECTION_COUNT,
) -> int:
    """Deterministic section in ``[1, section_count]``."""
    seed = f"{user_id}{poll_id}{iso_timestamp(poll_start)}{identity_mode}"
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") % section_count + 1


def generate_multipliers(
    rng: random.Random,
    low: float = 0.7,
    high: float = 1.5,
    section_count: int = SECTION_COUNT,
) -> list[float]:
    """Uniform multipliers rounded to 2 decimals, one per section."""
    if low > high:
        raise ValueError(f"Multiplier range is empty: [{low}, {high}]")
    return [round(rng.uniform(low, high), 2) for _ in range(section_count)]


def multiplier_for(multipliers: list[float], section: int) -> float:
    """Multiplier of a 1-based section."""
    if not 1 <= section <= len(multipliers):
        raise ValueError(f"Section {section} out of range 1..{len(multipliers)}")
    return multipliers[section - 1]


def final_weight(multiplier: float, base_weight: int = BASE_WEIGHT) -> int:
    """``floor(base_weight * multiplier)`` without binary float drift (1.15 -> 1150)."""
    exact = Decimal(base_weight) * Decimal(str(multiplier))
    return int(exact.to_integral_value(rounding=ROUND_FLOOR))


def average_multiplier(multipliers: list[float]) -> float:
    return round(float(np.mean(multipliers)), 4) if multipliers else 0.0
