"""
Score Board
===========

Fixed-capacity list of score records, sorted by descending score.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from termplay.core.bounded import BoundedSequence
from termplay.scoreboard.record import Score, decode_records, encode_records


class ScoreBoard:
    """
    In-memory board for one game and period.

    A new record lands before existing records with the same score. When the
    board is full the lowest entry falls off.
    """

    def __init__(self, capacity: int = 1000, records: Optional[List[Score]] = None):
        self._entries: BoundedSequence[Score] = BoundedSequence(capacity)
        for record in records or []:
            self._entries.append(record)

    @classmethod
    def from_bytes(cls, data: bytes, capacity: int = 1000, name_length: int = 32) -> "ScoreBoard":
        return cls(capacity, decode_records(data, capacity, name_length))

    def to_bytes(self, name_length: int = 32) -> bytes:
        return encode_records(self._entries, self.capacity, name_length)

    @property
    def capacity(self) -> int:
        return self._entries.capacity

    @property
    def records(self) -> Tuple[Score, ...]:
        return tuple(self._entries)

    @property
    def scores(self) -> List[int]:
        return [record.score for record in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Score]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Score:
        return self._entries[index]

    def rank_for(self, score: int) -> Optional[int]:
        """
        Index a record with ``score`` would take.

        Returns:
            The index, or None if the score is zero or too low for a full board.
        """
        if score == 0:
            return None
        for i, record in enumerate(self._entries):
            if record.score <= score:
                return i
        if self._entries.is_full:
            return None
        return len(self._entries)

    def insert(self, record: Score) -> Optional[int]:
        """
        Rank a record into the board.

        Args:
            record: Record to insert.

        Returns:
            Zero-based index of the new record, or None if it is not ranked
            (the board is then unchanged).
        """
        index = self.rank_for(record.score)
        if index is None:
            return None
        self._entries.insert(index, record)
        return index
