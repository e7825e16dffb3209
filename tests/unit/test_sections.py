"""Tests for section assignment and vote weighting."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from helpers import sections

START = datetime(2025, 1, 2, 3, 4, 5, 678900)


class TestTimestamp:
    def test_millisecond_precision(self):
        assert sections.iso_timestamp(START) == "2025-01-02T03:04:05.678Z"

    def test_aware_converted_to_utc(self):
        aware = datetime(2025, 1, 2, 5, 4, 5, 678900, tzinfo=timezone(timedelta(hours=2)))
        assert sections.iso_timestamp(aware) == "2025-01-02T03:04:05.678Z"


class TestAssignSection:
    def test_deterministic(self):
        first = sections.assign_section("u1", "p1", START, "true_self")
        assert sections.assign_section("u1", "p1", START, "true_self") == first

    def test_in_range(self):
        for i in range(200):
            assert 1 <= sections.assign_section(f"user-{i}", "p1", START, "shadow") <= 7

    def test_uses_every_section(self):
        seen = {sections.assign_section(f"user-{i}", "p1", START, "true_self") for i in range(300)}
        assert seen == set(range(1, 8))


class TestMultipliers:
    def test_range_and_precision(self):
        multipliers = sections.generate_multipliers(random.Random(1))
        assert len(multipliers) == 7
        assert all(0.7 <= m <= 1.5 for m in multipliers)
        assert all(round(m, 2) == m for m in multipliers)

    def test_empty_range_rejected(self):
        with pytest.raises(ValueError):
            sections.generate_multipliers(random.Random(1), 1.5, 0.7)

    def test_average_converges_to_range_midpoint(self):
        # Uniform over [0.7, 1.5]: the long-run mean is 1.1, not 1.0
        rng = random.Random(7)
        tables = [sections.generate_multipliers(rng) for _ in range(2000)]
        mean = sum(sections.average_multiplier(t) for t in tables) / len(tables)
        assert mean == pytest.approx(1.1, abs=0.02)

    def test_symmetric_range_converges_to_one(self):
        rng = random.Random(7)
        tables = [sections.generate_multipliers(rng, 0.5, 1.5) for _ in range(2000)]
        mean = sum(sections.average_multiplier(t) for t in tables) / len(tables)
        assert mean == pytest.approx(1.0, abs=0.02)

    def test_multiplier_for_is_one_based(self):
        assert sections.multiplier_for([0.7, 0.8, 0.9], 1) == 0.7
        with pytest.raises(ValueError):
            sections.multiplier_for([0.7, 0.8, 0.9], 4)


class TestWeight:
    def test_no_float_drift(self):
        assert sections.final_weight(1.15) == 1150

    def test_floor(self):
        assert sections.final_weight(0.7) == 700
        assert sections.final_weight(1.499) == 1499

    def test_average(self):
        assert sections.average_multiplier([1.0, 1.5]) == 1.25
        assert sections.average_multiplier([]) == 0.0
