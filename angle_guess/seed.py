from __future__ import annotations

import datetime as dt
import random

ROUND_COUNT = 3


def seed_for(date: dt.date, round_index: int) -> int:
    """Daily seed for one round: ``year * month * day + round_index``.

    Same date and round index always give the same round content.
    """

    return date.year * date.month * date.day + int(round_index)


def seeds_for(date: dt.date) -> tuple[int, ...]:
    return tuple(seed_for(date, i) for i in range(ROUND_COUNT))


class SeededRng:
    """Simple seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(int(seed))

    def randrange(self, start: int, stop: int) -> int:
        return self._rng.randrange(start, stop)
