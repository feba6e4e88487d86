"""
State Snapshot
==============

Immutable view-state values handed to the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from termplay.core.rules import Direction, Freshness


@dataclass(frozen=True)
class GridSnapshot:
    """2048 board state."""
    ranks: np.ndarray                 # (size, size) uint8, read-only copy
    score: int
    moves: int
    terminated: bool
    termination_reason: str

    @property
    def size(self) -> int:
        return int(self.ranks.shape[0])

    def tile_value(self, y: int, x: int) -> int:
        """Displayed value of a cell, 0 for empty."""
        rank = int(self.ranks[y, x])
        return 1 << rank if rank else 0


@dataclass(frozen=True)
class FoodView:
    """A food item as drawn."""
    position: Tuple[int, int]
    age: int
    freshness: Freshness


@dataclass(frozen=True)
class SnakeSnapshot:
    """Snake arena state."""
    rows: int
    cols: int
    head: Tuple[int, int]
    direction: Direction
    body: Tuple[Tuple[int, int], ...]     # head-to-tail, excluding the head
    food: Tuple[FoodView, ...]
    score: int
    ticks: int
    terminated: bool
    termination_reason: str

    @property
    def length(self) -> int:
        """Body length, which grows by one per meal."""
        return len(self.body)


def freeze_ranks(ranks: np.ndarray) -> np.ndarray:
    """Copy a rank matrix and mark it read-only."""
    frozen = ranks.copy()
    frozen.setflags(write=False)
    return frozen
