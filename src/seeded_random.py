"""Deterministic linear-congruential random source shared by the puzzle engines.

The recurrence ``seed' = (seed * 9301 + 49297) mod 233280`` is kept exactly so
that a given seed produces the same sequence in every implementation of the
engines.  One difference from a JavaScript rendition: Python's ``%`` never
returns a negative value, so negative integer seeds are folded into the
modulus range on the first draw instead of producing negative values.
"""

from __future__ import annotations

from typing import List, MutableSequence, Sequence, TypeVar, Union

__all__ = ["MODULUS", "SeededRandom", "derive_seed"]

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280

T = TypeVar("T")


def derive_seed(seed: Union[int, str]) -> int:
    """Return the numeric seed for ``seed``.

    Strings map to the sum of their character codes; integers are used as-is.
    """

    if isinstance(seed, bool):
        raise TypeError("seed must be an int or str, not bool")
    if isinstance(seed, int):
        return seed
    if isinstance(seed, str):
        return sum(ord(ch) for ch in seed)
    raise TypeError(f"seed must be an int or str, got {type(seed).__name__}")


class SeededRandom:
    """Reproducible pseudo-random source with explicit, per-call state."""

    __slots__ = ("seed",)

    def __init__(self, seed: Union[int, str] = 0) -> None:
        self.seed = derive_seed(seed)

    def next(self) -> float:
        self.seed = (self.seed * MULTIPLIER + INCREMENT) % MODULUS
        return self.seed / MODULUS

    def next_int(self, upper: int) -> int:
        """Return an integer in ``[0, upper)``."""

        return int(self.next() * upper)

    def randint(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]`` (both inclusive)."""

        return low + self.next_int(high - low + 1)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.next_int(len(items))]

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``items``."""

        out = list(items)
        self.shuffle(out)
        return out

    def shuffle(self, items: MutableSequence[T]) -> None:
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(i + 1)
            items[i], items[j] = items[j], items[i]

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"
