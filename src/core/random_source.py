# src/core/random_source.py - v1
"""Deterministic random source: seeded linear-congruential generator.

Every randomized step in the engines (visitation shuffles, tie-breaks)
draws from an explicit DeterministicRandomSource instance. Identical seed
gives an identical call sequence and therefore identical results.
No global random state is read or written.
"""

from __future__ import annotations

from typing import MutableSequence, TypeVar

T = TypeVar("T")

MODULUS = 2**31
MULTIPLIER = 1664525
INCREMENT = 1013904223


class DeterministicRandomSource:
    """Local seeded LCG producing floats in [0, 1)."""

    def __init__(self, seed: int = 42) -> None:
        self._state = ((seed % MODULUS) + MODULUS) % MODULUS

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        """Advance the recurrence and return a value in [0, 1)."""
        self._state = (MULTIPLIER * self._state + INCREMENT) % MODULUS
        return self._state / MODULUS

    def next_index(self, size: int) -> int:
        """Return an index in [0, size). ``size`` must be positive."""
        return int(self.next() * size)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """In-place Fisher-Yates shuffle, walking from the tail."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            items[i], items[j] = items[j], items[i]
