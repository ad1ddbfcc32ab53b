"""Array-backed binary min-heap with FIFO ordering among equal keys."""

from __future__ import annotations

import heapq
import itertools
from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")


class MinHeap(Generic[T]):
    """Min-heap of ``(key, item)`` pairs.

    Entries with equal keys pop in insertion order: a monotonically increasing
    sequence number breaks ties so items themselves are never compared.
    """

    __slots__ = ("_entries", "_counter")

    def __init__(self) -> None:
        self._entries: List[Tuple[int, int, T]] = []
        self._counter = itertools.count()

    def push(self, key: int, item: T) -> None:
        heapq.heappush(self._entries, (key, next(self._counter), item))

    def pop(self) -> Tuple[int, T]:
        key, _, item = heapq.heappop(self._entries)
        return key, item

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


__all__ = ["MinHeap"]
