"""Deterministic shuffling of round words"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

# Linear congruential generator constants. Orderings must match other
# implementations of the same recurrence exactly, so do not swap in `random`.
MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_seed(seed) -> int:
    """Lenient integer parse of a seed; zero, negative or non-numeric seeds become 1."""
    if isinstance(seed, bool):
        value = int(seed)
    elif isinstance(seed, int):
        value = seed
    elif isinstance(seed, float):
        value = int(seed) if seed == seed and abs(seed) != float("inf") else 0
    elif isinstance(seed, str):
        match = _LEADING_INT.match(seed)
        value = int(match.group(1)) if match else 0
    else:
        value = 0
    return max(1, value)


class SeededRandom:
    """Stream of floats in [0, 1) from the LCG s' = (s * 9301 + 49297) mod 233280."""

    def __init__(self, seed):
        self.state = coerce_seed(seed)
        self.draws = 0

    def next(self) -> float:
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        self.draws += 1
        return self.state / MODULUS


def shuffle(records: Sequence[T], seed) -> list[T]:
    """
    Return a shuffled copy of records using Fisher-Yates with a seeded LCG.

    The input is left untouched. Sequences of length 0 or 1 consume no draws.

    Args:
        records: Items to permute
        seed: Round identifier or any int-like value

    Returns:
        New list holding the same items in shuffled order
    """
    shuffled = list(records)
    rng = SeededRandom(seed)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.next() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
