"""
Game Rules
==========

Directions, termination results and food freshness thresholds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from termplay.core.config_loader import GameConfig, get_config


class Direction(Enum):
    """Move direction as a (dy, dx) vector; y grows downwards."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def dy(self) -> int:
        return self.value[0]

    @property
    def dx(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dy, -self.dx))

    def is_reverse_of(self, other: "Direction") -> bool:
        """True if the two directions cancel out."""
        return self.dy == -other.dy and self.dx == -other.dx


# Termination reasons
REASON_SPOILED = "ate spoiled food"
REASON_WALL = "hit the wall"
REASON_SELF = "ate itself"
REASON_QUIT = "quit"


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class Freshness(Enum):
    """Food age tier."""
    FRESH = "fresh"
    RIPE = "ripe"
    SPOILED = "spoiled"


class FoodRules:
    """
    Age thresholds for food items.

    - fresh: age <= ripe, a meal scores body length
    - ripe: ripe < age <= spoil, a meal scores double
    - spoiled: age > spoil, eating it ends the game
    - mulched: age > mulch, the item disappears
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize food rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        food = config.food
        self._ripe = food.ripe
        self._spoil = food.spoil
        self._mulch = food.mulch
        self._capacity = food.capacity
        self._chance = food.chance

    @property
    def ripe(self) -> int:
        return self._ripe

    @property
    def spoil(self) -> int:
        return self._spoil

    @property
    def mulch(self) -> int:
        return self._mulch

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def chance(self) -> int:
        return self._chance

    def freshness(self, age: int) -> Freshness:
        if age > self._spoil:
            return Freshness.SPOILED
        if age > self._ripe:
            return Freshness.RIPE
        return Freshness.FRESH

    def is_spoiled(self, age: int) -> bool:
        return age > self._spoil

    def is_ripe(self, age: int) -> bool:
        return age > self._ripe

    def is_mulched(self, age: int) -> bool:
        return age > self._mulch


def step(position: Tuple[int, int], direction: Direction) -> Tuple[int, int]:
    """Position one cell further along ``direction``."""
    return (position[0] + direction.dy, position[1] + direction.dx)
