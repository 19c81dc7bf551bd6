"""
GRAPHGEN.FORGE.RNG - Seeded Randomness for Reproducible Graphs

Every random draw made while generating one graph goes through a single
SeededRandom instance. Same seed + same call sequence = same graph.

Contract:
- next()              float in [0, 1)
- integer(lo, hi)     int in [lo, hi], derived from next()
- choice(seq)         uniform element; ValueError on empty input
- shuffle(seq)        in-place Fisher-Yates using integer(0, i)

Derived draws are built on next() rather than on random.Random's own helpers
so the sequence of outputs depends only on the sequence of calls.
"""
import logging
import math
import random
import time
from typing import List, MutableSequence, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SeededRandom:
    """
    Deterministic pseudo-random source wrapping random.Random.

    Args:
        seed: Integer seed. When None, one is drawn from the clock and logged
              so the run can be replayed.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = int(time.time() * 1000) % (2 ** 31)
            logger.info("No seed supplied, using seed=%d", seed)
        self.seed = seed
        self._random = random.Random(seed)

    def next(self) -> float:
        return self._random.random()

    def integer(self, min_value: int, max_value: int) -> int:
        """Uniform integer in the inclusive range [min_value, max_value]."""
        return min_value + math.floor(self.next() * (max_value - min_value + 1))

    def chance(self, probability: float) -> bool:
        return self.next() < probability

    def uniform(self, low: float, high: float) -> float:
        return low + self.next() * (high - low)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.integer(0, len(items) - 1)]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Shuffle in place (Fisher-Yates) and return the same sequence."""
        for i in range(len(items) - 1, 0, -1):
            j = self.integer(0, i)
            items[i], items[j] = items[j], items[i]
        return items

    def sample(self, items: Sequence[T], k: int) -> List[T]:
        """k distinct elements, in draw order."""
        pool = list(items)
        self.shuffle(pool)
        return pool[:k]
