"""Injectable source of randomness.

Every stochastic step in infrawatch draws from an object satisfying
``RandomSource``. ``random.Random`` satisfies it, so callers pass a seeded
``random.Random(seed)`` for reproducible runs. Coin flips always go through
``random()`` and continuous draws through ``uniform()``, which lets tests
force a branch by scripting ``random()`` alone.
"""

from __future__ import annotations

import random
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for the two draws the generators need."""

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        ...

    def uniform(self, a: float, b: float) -> float:
        """Return a float between a and b."""
        ...


def resolve_rng(rng: RandomSource | None, seed: int | None = None) -> RandomSource:
    """Return ``rng`` if given, else a fresh ``random.Random(seed)``."""
    return rng if rng is not None else random.Random(seed)


def symmetric(rng: RandomSource, half_width: float) -> float:
    """Draw uniformly from [-half_width, half_width]."""
    return rng.uniform(-half_width, half_width)


def chance(rng: RandomSource, probability: float) -> bool:
    """Return True with the given probability."""
    return rng.random() < probability
