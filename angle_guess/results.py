from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .scoring import ScoreEntry
from .seed import ROUND_COUNT

CHEATING_VERDICT = "Wow, cheating in a game like that? Really?"
FALLBACK_VERDICT = "I lost your score but it was probably bad anyway"


def _between(lo: float, hi: float) -> Callable[[float], bool]:
    return lambda total: lo <= total <= hi


# Ordered, first match wins. The exact-100 case must stay ahead of [90, 100],
# and shared edges (10.0, 20.0, ...) belong to the lower band.
_VERDICT_RULES: tuple[tuple[Callable[[float], bool], str], ...] = (
    (lambda total: total == 100.0, CHEATING_VERDICT),
    (_between(0.0, 10.0), "Do you have a humiliation kink?"),
    (_between(10.0, 20.0), "You don't have anything better to do?"),
    (_between(20.0, 30.0), "Nice, your score matches your IQ"),
    (
        _between(30.0, 40.0),
        "If you are looking for information on the Germanic invaders, you're not on the right website",
    ),
    (_between(40.0, 50.0), "Just forget this website I don't want to see your face tomorrow"),
    (_between(50.0, 60.0), "My dog plays better than you"),
    (_between(60.0, 70.0), "Did you understand the purpose of this game?"),
    (_between(70.0, 80.0), "At this point, picking random numbers may yield better results"),
    (_between(80.0, 90.0), "You're supposed to think before typing"),
    (_between(90.0, 100.0), "Not bad for a blind person"),
)


@dataclass(frozen=True, slots=True)
class GameResult:
    """Final summary of a finished session."""

    total: float
    verdict: str
    score_text: str
    breakdown: str
    entries: tuple[ScoreEntry, ...]


def verdict_for(total: float) -> str:
    for matches, verdict in _VERDICT_RULES:
        if matches(total):
            return verdict
    return FALLBACK_VERDICT


def compose_result(entries: Sequence[ScoreEntry]) -> GameResult:
    """Build the GameResult from the three scored rounds, in round order."""

    if len(entries) != ROUND_COUNT:
        raise ValueError(f"expected {ROUND_COUNT} score entries, got {len(entries)}")

    ordered = tuple(sorted(entries, key=lambda e: e.round_index))
    total = sum(e.points for e in ordered)

    return GameResult(
        total=total,
        verdict=verdict_for(total),
        score_text=f"Score: {total:.2f}",
        breakdown=" + ".join(f"{e.points:.2f}" for e in ordered),
        entries=ordered,
    )
