"""Deterministic linear-congruential generator.

Used for every piece of synthetic start-of-session data. The sequence for
a given seed must never change: histories, quotes and the tests built on
them depend on the exact values.
"""

from __future__ import annotations

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


class LcgRandom:
    """Reproducible stream of floats in [0, 1).

    Each draw advances ``state = (state * 1664525 + 1013904223) mod 2**32``
    and returns ``state / 2**32``. Instances are cheap and single-owner;
    there is no locking.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int):
        self._state = seed % LCG_MODULUS

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def __call__(self) -> float:
        return self.next()

    def take(self, n: int) -> list[float]:
        """Draw the next ``n`` values."""
        return [self.next() for _ in range(n)]
