"""Injectable random number sources.

Every sampling function in the engine draws from an ``Rng`` passed in by
the caller. A seeded ``RandomSource`` makes a play reproducible; two
sources spawned from the same seed and substream id produce the same
sequence.
"""

from __future__ import annotations

import hashlib
import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class Rng(ABC):
    """Uniform random source returning floats in [0, 1)."""

    @abstractmethod
    def next(self) -> float:
        """Return the next uniform draw in [0, 1)."""
        ...

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self.next() < probability

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], inclusive on both ends."""
        return low + int(self.next() * (high - low + 1))

    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return low + self.next() * (high - low)

    def pick(self, items: Sequence[T]) -> T:
        """Uniformly pick one item from a non-empty sequence."""
        if not items:
            raise ValueError("pick() needs at least one item")
        return items[int(self.next() * len(items))]


class RandomSource(Rng):
    """``Rng`` backed by a private ``random.Random`` instance."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def next(self) -> float:
        return self._rng.random()

    def spawn(self, substream_id: str) -> "RandomSource":
        """Derive an independent child source for a named substream.

        Child seeds are a hash of the parent seed and the substream id, so
        parallel games seeded from one season seed stay reproducible.
        """
        if self._seed is None:
            return RandomSource(seed=None)
        digest = hashlib.sha256(f"{self._seed}:{substream_id}".encode("ascii", "ignore")).hexdigest()
        return RandomSource(seed=int(digest[:16], 16))


class SequenceRng(Rng):
    """Replays a fixed list of draws, cycling when exhausted.

    Used in tests to force specific branches.
    """

    def __init__(self, values: Sequence[float]) -> None:
        if not values:
            raise ValueError("SequenceRng needs at least one value")
        self._values = list(values)
        self._index = 0

    def next(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


def seeded(seed: int) -> RandomSource:
    """Create a deterministic source."""
    return RandomSource(seed=seed)


def unseeded() -> RandomSource:
    """Create a source seeded from system entropy."""
    return RandomSource(seed=None)
