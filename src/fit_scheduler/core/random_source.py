"""
Injectable randomness for exercise variety.

The split planner never touches the global random module; it receives a
RandomSource so tests can pin a seed and assert exact selections.
"""

import random
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Minimal interface the planner needs from a random generator."""

    def shuffled(self, items: Sequence[T]) -> list[T]:
        """Return a new list with the items in random order."""
        ...

    def pick(self, n: int, items: Sequence[T]) -> list[T]:
        """Return n distinct items in random order (fewer if items is short)."""
        ...


class SeededRandomSource:
    """
    RandomSource backed by a private random.Random instance.

    Args:
        seed: Seed for reproducible output; None seeds from system entropy.
    """

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def shuffled(self, items: Sequence[T]) -> list[T]:
        result = list(items)
        self._rng.shuffle(result)
        return result

    def pick(self, n: int, items: Sequence[T]) -> list[T]:
        if n <= 0 or not items:
            return []
        return self._rng.sample(list(items), min(n, len(items)))


class IdentityRandomSource:
    """RandomSource that never reorders: catalog order in, catalog order out."""

    def shuffled(self, items: Sequence[T]) -> list[T]:
        return list(items)

    def pick(self, n: int, items: Sequence[T]) -> list[T]:
        if n <= 0:
            return []
        return list(items)[:n]
