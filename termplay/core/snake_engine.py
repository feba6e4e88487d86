"""
Snake Engine
============

Tick-driven snake movement and food lifecycle.

Each tick: eat what lies ahead, age the food, maybe spawn food, shift the
body, advance the head, then check the walls and the body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from termplay.core.bounded import BoundedSequence
from termplay.core.config_loader import GameConfig, get_config
from termplay.core.rng import RandomSource
from termplay.core.rules import (
    Direction,
    FoodRules,
    REASON_QUIT,
    REASON_SELF,
    REASON_SPOILED,
    REASON_WALL,
    TerminationResult,
    step,
)
from termplay.core.scoring import ScoreEvent, ScoreTracker
from termplay.core.state_snapshot import FoodView, SnakeSnapshot

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass
class FoodItem:
    """A food item and the number of ticks since it appeared."""
    position: Position
    age: int = 0


class SnakeEngine:
    """
    Main snake simulation class.

    The body holds previously occupied head positions, head-to-tail. Its
    length starts at one and grows by one per meal.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Initialize engine with the snake centred and heading right.

        Args:
            config: Game configuration. Uses default if None.
            rng: Random source for food placement. Unseeded if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rows = config.snake.rows
        self._cols = config.snake.cols
        self._rules = FoodRules(config)
        self._rng = rng if rng is not None else RandomSource()
        self._scorer = ScoreTracker()
        self._reset_state()

    def _reset_state(self) -> None:
        self._head: Position = (self._rows // 2, self._cols // 2)
        self._direction = Direction.RIGHT
        # A single segment trailing the head; it may sit outside a 1-column arena
        tail = step(self._head, self._direction.opposite)
        self._body: BoundedSequence[Position] = BoundedSequence(
            self._rows * self._cols, [tail]
        )
        self._food: BoundedSequence[FoodItem] = BoundedSequence(self._rules.capacity)
        self._grow = False
        self._ticks = 0
        self._termination = TerminationResult.none()

    def reset(self) -> SnakeSnapshot:
        """Start a new game with the same random source."""
        self._scorer.reset()
        self._reset_state()
        return self.snapshot()

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def rules(self) -> FoodRules:
        return self._rules

    @property
    def head(self) -> Position:
        return self._head

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def body(self) -> Tuple[Position, ...]:
        return tuple(self._body)

    @property
    def food(self) -> Tuple[FoodItem, ...]:
        return tuple(self._food)

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def last_meal(self) -> Optional[ScoreEvent]:
        return self._scorer.last_event

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._termination.terminated

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination.reason

    def steer(self, direction: Direction) -> bool:
        """
        Request a new heading for the next tick.

        Args:
            direction: Requested direction.

        Returns:
            False if the request reversed the current heading and was ignored.
        """
        if self.is_over or direction.is_reverse_of(self._direction):
            return False
        self._direction = direction
        return True

    def quit(self) -> None:
        """End the game at the player's request."""
        self._end(REASON_QUIT)

    def place_food(self, position: Position, age: int = 0) -> FoodItem:
        """
        Put a food item on a specific cell.

        Args:
            position: (y, x) inside the arena, not occupied.
            age: Initial age in ticks.

        Returns:
            The new item.
        """
        if not self._in_bounds(position):
            raise ValueError(f"food position {position} is outside the arena")
        if self._is_occupied(position):
            raise ValueError(f"food position {position} is occupied")
        item = FoodItem(position=position, age=age)
        self._food.append(item)
        return item

    def tick(self) -> TerminationResult:
        """
        Advance the simulation by one step.

        Returns:
            Termination state after the tick.
        """
        if self.is_over:
            return self._termination

        self._ticks += 1

        self._eat()
        if self.is_over:
            return self._termination

        self._age_food()
        self._maybe_spawn_food()
        self._advance()
        self._check_collisions()
        return self._termination

    def _eat(self) -> None:
        target = step(self._head, self._direction)
        for i, item in enumerate(self._food):
            if item.position != target:
                continue
            if self._rules.is_spoiled(item.age):
                self._end(REASON_SPOILED)
                return
            self._scorer.apply_meal(len(self._body), self._rules.is_ripe(item.age))
            self._food.remove_at(i)
            self._grow = True
            break

    def _age_food(self) -> None:
        for i in reversed(range(len(self._food))):
            item = self._food[i]
            item.age += 1
            if self._rules.is_mulched(item.age):
                self._food.remove_at(i)

    def _maybe_spawn_food(self) -> None:
        if len(self._food) == 0:
            self._spawn_food()
        elif not self._food.is_full and self._rng.one_in(self._rules.chance):
            self._spawn_food()

    def _occupancy(self) -> np.ndarray:
        occupied = np.zeros((self._rows, self._cols), dtype=bool)
        if self._in_bounds(self._head):
            occupied[self._head] = True
        for position in self._body:
            if self._in_bounds(position):
                occupied[position] = True
        for item in self._food:
            occupied[item.position] = True
        return occupied

    def _spawn_food(self) -> Optional[FoodItem]:
        occupied = self._occupancy()
        # The head moves after spawning; food must not land under it
        ahead = step(self._head, self._direction)
        if self._in_bounds(ahead):
            occupied[ahead] = True
        free = np.flatnonzero(~occupied)
        if free.size == 0:
            return None
        y, x = divmod(int(self._rng.choice(free)), self._cols)
        item = FoodItem(position=(y, x))
        self._food.append(item)
        return item

    def _advance(self) -> None:
        self._body.insert(0, self._head)
        if self._grow:
            self._grow = False
        else:
            self._body.remove_at(len(self._body) - 1)
        self._head = step(self._head, self._direction)

    def _check_collisions(self) -> None:
        if not self._in_bounds(self._head):
            self._end(REASON_WALL)
        elif self._head in self._body:
            self._end(REASON_SELF)

    def _in_bounds(self, position: Position) -> bool:
        y, x = position
        return 0 <= y < self._rows and 0 <= x < self._cols

    def _is_occupied(self, position: Position) -> bool:
        return bool(self._occupancy()[position])

    def _end(self, reason: str) -> None:
        if self.is_over:
            return
        self._termination = TerminationResult.game_over(reason)
        logger.info(
            "snake ended (%s) with score %d, length %d after %d ticks",
            reason, self.score, len(self._body), self._ticks,
        )

    def snapshot(self) -> SnakeSnapshot:
        food = tuple(
            FoodView(
                position=item.position,
                age=item.age,
                freshness=self._rules.freshness(item.age),
            )
            for item in self._food
        )
        return SnakeSnapshot(
            rows=self._rows,
            cols=self._cols,
            head=self._head,
            direction=self._direction,
            body=tuple(self._body),
            food=food,
            score=self.score,
            ticks=self._ticks,
            terminated=self.is_over,
            termination_reason=self.termination_reason,
        )
