"""Randomized top-N selection over a ranked candidate pool.

Only a head window of ``limit * factor`` candidates is eligible, so every
pick stays inside a high-relevance band while refreshes still vary.
"""

import random
from typing import Sequence, TypeVar

T = TypeVar('T')

CATEGORY_WINDOW_FACTOR = 3
BREAKING_WINDOW_FACTOR = 2


def shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """Fisher-Yates shuffle into a new list; ``items`` is left untouched."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class RandomizedSelector:
    """Shuffle-limited selection from a list ranked best-first."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def select(
        self,
        ranked: Sequence[T],
        limit: int,
        factor: int = CATEGORY_WINDOW_FACTOR,
    ) -> list[T]:
        """Pick up to ``limit`` items from the head of ``ranked``.

        Args:
            ranked: Candidates ordered best-first
            limit: Maximum number of items returned
            factor: Window size multiplier applied to ``limit``

        Returns:
            At most ``limit`` items drawn from the first ``limit * factor``
        """
        if limit < 1:
            return []
        window = ranked[:min(len(ranked), limit * factor)]
        return shuffle(window, self.rng)[:limit]
