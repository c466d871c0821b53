# app/generator/seeded_random.py
"""
Deterministic pseudo-random source keyed by a string.

A low-quality linear congruential generator kept only for reproducibility:
the same seed string always yields the same sequence of draws, in any process.
The constants below must not change or every generated profile changes too.
"""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


class EmptyChoicePoolError(ValueError):
    """Raised when choice() is asked to pick from an empty sequence."""

    pass


def hash_seed(value: str) -> int:
    """
    Hash a string into a non-negative integer seed.

    Uses ``hash = hash * 31 + code`` over UTF-16 code units, wrapped to a
    signed 32-bit integer after every step, then takes the absolute value.

    Examples:
        >>> hash_seed("")
        0
        >>> hash_seed("a")
        97
    """
    units = value.encode("utf-16-le", errors="surrogatepass")
    result = 0
    for i in range(0, len(units), 2):
        code = int.from_bytes(units[i : i + 2], "little")
        result = (result * 31 + code) & _INT32_MASK

    if result & _INT32_SIGN:
        result -= 1 << 32
    return abs(result)


class SeededRandom:
    """
    Reproducible random stream for one synthesis call.

    Never share an instance between calls: every draw mutates the state, so
    the order of draws determines every downstream value.
    """

    def __init__(self, seed: str):
        self._state = hash_seed(seed)

    @property
    def state(self) -> int:
        return self._state

    def random(self) -> float:
        """Advance the generator and return a float in [0, 1)."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def choice(self, pool: Sequence[T]) -> T:
        """
        Pick one element of ``pool``.

        Raises:
            EmptyChoicePoolError: If ``pool`` is empty (no draw is consumed)
        """
        if not pool:
            raise EmptyChoicePoolError("Cannot choose from an empty pool")
        return pool[math.floor(self.random() * len(pool))]

    def randint(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value], both ends inclusive."""
        return min_value + math.floor(self.random() * (max_value - min_value + 1))


__all__ = [
    "SeededRandom",
    "EmptyChoicePoolError",
    "hash_seed",
    "LCG_MULTIPLIER",
    "LCG_INCREMENT",
    "LCG_MODULUS",
]
