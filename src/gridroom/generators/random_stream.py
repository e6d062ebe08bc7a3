"""
Seeded random source and weighted selection.

Every generation phase builds its own RandomStream from the run seed so that
phases stay independent of one another: re-ordering or disabling one phase
never shifts the numbers another phase sees.
"""

import random
from typing import Callable, List, Sequence, TypeVar

T = TypeVar('T')


class NoCandidatesError(LookupError):
    """Raised when a weighted selection is asked to pick from an empty pool."""
    pass


class RandomStream:
    """Reproducible stream of uniform floats and integer ranges."""

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._rng = random.Random(self.seed)

    def uniform_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def uniform_int(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi]; returns lo when the range is empty."""
        if hi <= lo:
            return lo
        return self._rng.randint(lo, hi)

    def shuffle(self, items: List[T]) -> List[T]:
        """Fisher-Yates shuffle in place (also returns the list)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.uniform_int(0, i)
            items[i], items[j] = items[j], items[i]
        return items

    def derive(self, offset: int) -> 'RandomStream':
        """Fresh stream seeded with seed + offset."""
        return RandomStream(self.seed + offset)


def _weight_attr(candidate) -> float:
    return float(getattr(candidate, 'weight', 0.0))


def weighted_choice(pool: Sequence[T], stream: RandomStream,
                    weight_of: Callable[[T], float] = _weight_attr) -> T:
    """
    Pick one candidate with probability proportional to its weight.

    Falls back to a uniform pick when the total weight is not positive.
    Negative weights count as zero.

    Raises:
        NoCandidatesError: if the pool is empty
    """
    if not pool:
        raise NoCandidatesError("weighted selection from an empty pool")

    weights = [max(0.0, weight_of(c)) for c in pool]
    total = sum(weights)
    if total <= 0.0:
        return pool[stream.uniform_int(0, len(pool) - 1)]

    target = stream.uniform_float() * total
    cumulative = 0.0
    for candidate, weight in zip(pool, weights):
        cumulative += weight
        if target <= cumulative:
            return candidate

    return pool[-1]
