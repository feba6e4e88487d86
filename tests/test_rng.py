"""
Tests for the injected random source.
"""

import pytest
from collections import Counter

from termplay.core.rng import RandomSource


class TestRandomSource:
    """Test seeded draws."""

    def test_deterministic_with_seed(self):
        """Same seed should produce same sequence."""
        r1 = RandomSource(seed=42)
        r2 = RandomSource(seed=42)

        seq1 = [r1.below(100) for _ in range(50)]
        seq2 = [r2.below(100) for _ in range(50)]

        assert seq1 == seq2

    def test_different_seeds_differ(self):
        """Different seeds should produce different sequences."""
        r1 = RandomSource(seed=42)
        r2 = RandomSource(seed=123)

        assert [r1.below(100) for _ in range(50)] != [r2.below(100) for _ in range(50)]

    def test_below_in_range(self):
        """Draws stay in [0, bound) and cover it."""
        rng = RandomSource(seed=1)
        counts = Counter(rng.below(6) for _ in range(600))

        assert set(counts) == set(range(6))

    def test_below_rejects_empty_range(self):
        """A non-positive bound is an error."""
        with pytest.raises(ValueError):
            RandomSource(seed=1).below(0)

    def test_one_in_frequency(self):
        """one_in(10) fires about a tenth of the time."""
        rng = RandomSource(seed=5)
        hits = sum(rng.one_in(10) for _ in range(5000))

        assert 350 < hits < 650

    def test_one_in_one_always_fires(self):
        """Odds of one are a certainty."""
        rng = RandomSource(seed=5)
        assert all(rng.one_in(1) for _ in range(20))

    def test_choice(self):
        """choice picks an element and rejects empty input."""
        rng = RandomSource(seed=9)

        assert rng.choice(["a", "b", "c"]) in {"a", "b", "c"}
        with pytest.raises(ValueError):
            rng.choice([])

    def test_reset_restarts_sequence(self):
        """Reset replays from the seed, or switches to a new one."""
        rng = RandomSource(seed=42)
        first = [rng.below(1000) for _ in range(10)]

        rng.reset()
        assert [rng.below(1000) for _ in range(10)] == first

        rng.reset(seed=7)
        fresh = RandomSource(seed=7)
        assert rng.seed == 7
        assert [rng.below(1000) for _ in range(10)] == [fresh.below(1000) for _ in range(10)]
