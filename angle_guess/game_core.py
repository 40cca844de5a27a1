from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, StrEnum
from functools import partial

from .clock import DateSource
from .config import GameConfig
from .drawing import build_drawing
from .errors import InvalidGuessFormat, OutOfSequenceCommit
from .host import ANSWER_FIELDS, BREAKDOWN_FIELD, GUESS_FIELDS, SCORE_FIELD, TITLE_FIELD, RenderSurface, UiHost
from .results import GameResult, compose_result
from .rounds import Round, RoundGenerator
from .scoring import AngleScorer, ScoreEntry
from .seed import ROUND_COUNT, seeds_for

logger = logging.getLogger(__name__)

MAX_GUESS = 360


class GameState(str, Enum):
    AWAITING_ROUND_0 = "awaiting_round_0"
    AWAITING_ROUND_1 = "awaiting_round_1"
    AWAITING_ROUND_2 = "awaiting_round_2"
    FINISHED = "finished"


_AWAITING = (GameState.AWAITING_ROUND_0, GameState.AWAITING_ROUND_1, GameState.AWAITING_ROUND_2)


@dataclass(frozen=True, slots=True)
class Guess:
    round_index: int
    value: int  # whole degrees in [0, 360]


class CommitOutcome(StrEnum):
    ACCEPTED = "accepted"
    INVALID = "invalid"  # round stays open
    IGNORED = "ignored"  # locked or future round


def parse_guess(raw: str) -> int:
    """Parse a typed guess as whole degrees in [0, 360]."""

    text = raw.strip()
    try:
        value = int(text)
    except ValueError as exc:
        raise InvalidGuessFormat(raw) from exc
    if not 0 <= value <= MAX_GUESS:
        raise InvalidGuessFormat(raw)
    return value


class RoundController:
    """Three-round state machine: round 0 -> round 1 -> round 2 -> finished.

    - All rounds are generated up front; per-round state lives in indexed slots.
    - Only the active round accepts a commit. Anything else is a no-op.
    - A malformed guess leaves the active round open; scored rounds never change.
    """

    def __init__(
        self,
        *,
        rounds: Sequence[Round],
        host: UiHost,
        surface: RenderSurface,
        scorer: AngleScorer | None = None,
    ) -> None:
        if len(rounds) != ROUND_COUNT:
            raise ValueError(f"expected {ROUND_COUNT} rounds, got {len(rounds)}")

        self._rounds = tuple(rounds)
        self._host = host
        self._surface = surface
        self._scorer = scorer or AngleScorer()

        self._state = GameState.AWAITING_ROUND_0
        self._scores: list[ScoreEntry | None] = [None] * ROUND_COUNT
        self._result: GameResult | None = None
        self._started = False

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def rounds(self) -> tuple[Round, ...]:
        return self._rounds

    @property
    def scores(self) -> tuple[ScoreEntry | None, ...]:
        return tuple(self._scores)

    @property
    def result(self) -> GameResult | None:
        return self._result

    @property
    def active_index(self) -> int | None:
        if self._state is GameState.FINISHED:
            return None
        return _AWAITING.index(self._state)

    def start(self) -> None:
        """Hand the drawings to the surface and open the first input."""

        if self._started:
            return
        self._started = True

        for rnd in self._rounds:
            self._surface.render_round(rnd.index, build_drawing(rnd))

        for idx, field_id in enumerate(GUESS_FIELDS):
            self._host.on_commit(field_id, partial(self.commit, idx))
            self._host.set_field_enabled(field_id, idx == 0)
        self._host.focus(GUESS_FIELDS[0])

    def commit(self, round_index: int) -> CommitOutcome:
        """Confirm the guess typed into ``round_index``'s input field."""

        try:
            self._require_active(round_index)
        except OutOfSequenceCommit as exc:
            logger.debug("commit ignored: %s", exc)
            return CommitOutcome.IGNORED

        raw = self._host.field_value(GUESS_FIELDS[round_index])
        try:
            value = parse_guess(raw)
        except InvalidGuessFormat as exc:
            logger.info("round %d rejected: %s", round_index, exc)
            return CommitOutcome.INVALID

        self._accept(Guess(round_index=round_index, value=value))
        return CommitOutcome.ACCEPTED

    def _require_active(self, round_index: int) -> None:
        active = self.active_index
        if not self._started or active is None or round_index != active:
            raise OutOfSequenceCommit(round_index, active)

    def _accept(self, guess: Guess) -> None:
        round_index = guess.round_index
        rnd = self._rounds[round_index]
        self._host.set_field_enabled(GUESS_FIELDS[round_index], False)

        entry = self._scorer.score(guess=guess.value, truth=rnd.true_angle, round_index=round_index)
        self._scores[round_index] = entry
        logger.debug(
            "round %d scored: guess=%d truth=%d pct=%.2f category=%s",
            round_index,
            guess.value,
            rnd.true_angle,
            entry.error_percentage,
            entry.category.value,
        )

        self._host.set_field_content(
            ANSWER_FIELDS[round_index],
            f"{rnd.true_angle}\n+{entry.points:.2f}",
            tag=entry.category.value,
        )

        next_index = round_index + 1
        if next_index < ROUND_COUNT:
            self._state = _AWAITING[next_index]
            self._host.set_field_enabled(GUESS_FIELDS[next_index], True)
            self._host.focus(GUESS_FIELDS[next_index])
            return

        self._finish()

    def _finish(self) -> None:
        entries = [e for e in self._scores if e is not None]
        result = compose_result(entries)
        self._result = result
        self._state = GameState.FINISHED
        logger.info("game finished: total=%.2f", result.total)

        self._host.set_field_content(TITLE_FIELD, result.verdict)
        self._host.set_field_content(SCORE_FIELD, result.score_text)
        self._host.set_field_content(BREAKDOWN_FIELD, result.breakdown)
        self._host.show_overlay()


def generate_rounds(*, dates: DateSource, config: GameConfig | None = None) -> tuple[Round, ...]:
    cfg = config or GameConfig()
    today = dates.today()
    generator = RoundGenerator(radius=cfg.radius)
    rounds = tuple(generator.generate(seed, round_index=i) for i, seed in enumerate(seeds_for(today)))
    logger.debug("generated %d rounds for %s", len(rounds), today.isoformat())
    return rounds


def build_game(
    *,
    host: UiHost,
    surface: RenderSurface,
    dates: DateSource,
    config: GameConfig | None = None,
) -> RoundController:
    """Generate today's rounds and wire a controller to ``host``; call ``start()`` next."""

    return RoundController(rounds=generate_rounds(dates=dates, config=config), host=host, surface=surface)
