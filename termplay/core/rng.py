"""
RNG - Injected Random Source
============================

Provides the randomness used for tile spawning and food placement.

Engines never touch the ``random`` module directly; they receive a
RandomSource so games can be replayed from a seed and tests can pin
every draw.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """
    Seedable source of uniform draws.

    All engine randomness reduces to two primitives: an integer below a
    bound, and a "one in N" event.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random source.

        Args:
            seed: Random seed for reproducibility. Random if None.
        """
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        """Seed the source was created or last reset with."""
        return self._seed

    def below(self, bound: int) -> int:
        """
        Uniform integer in [0, bound).

        Args:
            bound: Exclusive upper bound, must be positive.

        Returns:
            The drawn integer.
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)

    def one_in(self, odds: int) -> bool:
        """True with probability 1/odds."""
        return self.below(odds) == 0

    def choice(self, items: Sequence[T]) -> T:
        """Uniformly pick one element of a non-empty sequence."""
        if len(items) == 0:
            raise ValueError("cannot choose from an empty sequence")
        return items[self.below(len(items))]

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the sequence.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
