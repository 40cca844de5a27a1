from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class Category(StrEnum):
    PERFECT = "perfect"
    GOOD = "good"
    ALMOST = "almost"
    ERROR = "error"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class ScoreEntry:
    round_index: int
    guess: int
    true_angle: int
    error_percentage: float
    category: Category
    points: float


# Evaluated top to bottom, first match wins. Bands overlap at their edges and
# leave a 90-95 gap on purpose; keep the order.
_CATEGORY_RULES: tuple[tuple[Callable[[float], bool], Category], ...] = (
    (lambda p: p == 100.0, Category.PERFECT),
    (lambda p: p <= 33.33, Category.FAILURE),
    (lambda p: 33.33 < p <= 66.66, Category.ERROR),
    (lambda p: 66.66 < p <= 90.00, Category.ALMOST),
    (lambda p: p >= 95.00, Category.GOOD),
)


def categorize(error_percentage: float) -> Category:
    for matches, category in _CATEGORY_RULES:
        if matches(error_percentage):
            return category
    return Category.FAILURE


def error_percentage(guess: int, truth: int) -> float:
    """Linear similarity in [0, 100]; 100 is an exact match.

    The distance is ``|guess - truth|``, not the circular one: 359 against 1
    is a 358 degree miss.
    """

    error = abs(int(guess) - int(truth))
    return (360.0 - error) / 360.0 * 100.0


class AngleScorer:
    """Scores one guess against the true angle of a round."""

    def score(self, *, guess: int, truth: int, round_index: int = 0) -> ScoreEntry:
        pct = error_percentage(guess, truth)
        return ScoreEntry(
            round_index=int(round_index),
            guess=int(guess),
            true_angle=int(truth),
            error_percentage=pct,
            category=categorize(pct),
            points=pct / 3.0,
        )
