"""
Bounded Sequence
================

Fixed-capacity ordered container shared by the snake body, the food set
and the score board.
"""

from __future__ import annotations

from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class BoundedSequence(Generic[T]):
    """
    Ordered sequence that never grows past its capacity.

    Inserting into a full sequence evicts the last element, which is how
    both a ranked board and a growing snake behave at their limit.
    """

    def __init__(self, capacity: int, items: Optional[List[T]] = None):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._items: List[T] = []
        for item in items or []:
            self.append(item)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return f"BoundedSequence({len(self)}/{self._capacity}, {self._items!r})"

    def insert(self, index: int, item: T) -> Optional[T]:
        """
        Insert before ``index``, shifting the tail back by one.

        Args:
            index: Position in [0, len]; must also be below capacity.
            item: Element to insert.

        Returns:
            The element evicted from the end when the sequence was full,
            otherwise None.
        """
        if not 0 <= index <= len(self._items) or index >= self._capacity:
            raise IndexError(f"insert index {index} out of range")
        self._items.insert(index, item)
        if len(self._items) > self._capacity:
            return self._items.pop()
        return None

    def append(self, item: T) -> None:
        """Add at the end; the sequence must not be full."""
        if self.is_full:
            raise OverflowError(f"sequence is at capacity ({self._capacity})")
        self._items.append(item)

    def remove_at(self, index: int) -> T:
        """Remove and return the element at ``index``, closing the gap."""
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def to_list(self) -> List[T]:
        return list(self._items)
