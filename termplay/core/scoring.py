"""
Scoring System
==============

Tracks the running score of a session and records how it was earned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    source: str              # "merge" or "meal"
    rank: int = 0            # Merged tile rank (2048)
    multiplier: int = 1      # Ripe food bonus (snake)

    def __repr__(self) -> str:
        if self.source == "merge":
            return f"ScoreEvent(merge_to_{self.rank}={self.points})"
        return f"ScoreEvent(meal={self.points}, multiplier={self.multiplier}x)"


class ScoreTracker:
    """
    Tracks game score and provides the scoring formulas of both games.

    - 2048: merging two rank-r tiles into rank r+1 awards 2^(r+1).
    - Snake: a meal awards the body length, doubled for ripe food.
    """

    RIPE_MULTIPLIER = 2

    def __init__(self):
        self._score: int = 0
        self._last_event: Optional[ScoreEvent] = None

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def last_event(self) -> Optional[ScoreEvent]:
        """Most recent scoring event, if any."""
        return self._last_event

    @staticmethod
    def merge_points(new_rank: int) -> int:
        """Points for producing a tile of ``new_rank``."""
        return 1 << new_rank

    def apply_merge(self, new_rank: int) -> ScoreEvent:
        """
        Apply score for a tile merge.

        Args:
            new_rank: Rank of the tile produced by the merge.

        Returns:
            ScoreEvent describing the points awarded.
        """
        event = ScoreEvent(
            points=self.merge_points(new_rank),
            source="merge",
            rank=new_rank,
        )
        return self._record(event)

    def apply_meal(self, body_length: int, ripe: bool) -> ScoreEvent:
        """
        Apply score for eating a food item.

        Args:
            body_length: Snake body length before growing.
            ripe: True if the food was past its ripe threshold.

        Returns:
            ScoreEvent describing the points awarded.
        """
        multiplier = self.RIPE_MULTIPLIER if ripe else 1
        event = ScoreEvent(
            points=body_length * multiplier,
            source="meal",
            multiplier=multiplier,
        )
        return self._record(event)

    def _record(self, event: ScoreEvent) -> ScoreEvent:
        self._score += event.points
        self._last_event = event
        return event

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._last_event = None
