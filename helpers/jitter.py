"""Timing obfuscation for displayed vote timestamps."""

import random
from datetime import datetime, timedelta

import numpy as np

MAX_JITTER_SECONDS = 7200


def generate_jitter(rng: random.Random, max_seconds: int = MAX_JITTER_SECONDS) -> int:
    """Uniform integer delay in ``[0, max_seconds]``."""
    return rng.randint(0, max_seconds) if max_seconds > 0 else 0


def apply_jitter(actual: datetime, jitter_seconds: int, poll_end: datetime | None = None) -> datetime:
    """Displayed time, capped at the poll end."""
    displayed = actual + timedelta(seconds=jitter_seconds)
    if poll_end is not None and displayed > poll_end:
        return poll_end
    return displayed


def obfuscate(
    actual: datetime,
    poll_end: datetime | None,
    rng: random.Random,
    max_seconds: int = MAX_JITTER_SECONDS,
) -> tuple[datetime, int]:
    """Return ``(displayed_time, jitter_seconds)``."""
    jitter = generate_jitter(rng, max_seconds)
    return apply_jitter(actual, jitter, poll_end), jitter


def jitter_stats(jitters: list[int]) -> dict:
    """Min/max/mean/median of applied jitters."""
    if not jitters:
        return {"count": 0, "min": 0, "max": 0, "mean": 0.0, "median": 0.0}
    arr = np.asarray(jitters, dtype=np.float64)
    return {
        "count": len(jitters),
        "min": int(arr.min()),
        "max": int(arr.max()),
        "mean": round(float(arr.mean()), 1),
        "median": float(np.median(arr)),
    }


def format_jitter_duration(seconds: int) -> str:
    """Human form, e.g. ``1h 4m 7s``."""
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)
