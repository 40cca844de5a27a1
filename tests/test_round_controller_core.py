from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from angle_guess.drawing import Drawing
from angle_guess.errors import InvalidGuessFormat, MissingHostElement
from angle_guess.game_core import CommitOutcome, GameState, RoundController, parse_guess
from angle_guess.host import ALL_FIELDS
from angle_guess.results import verdict_for
from angle_guess.rounds import Round
from angle_guess.scoring import Category


class FakeHost:
    def __init__(self, fields: Iterable[str] = ALL_FIELDS) -> None:
        self.values: dict[str, str] = {f: "" for f in fields}
        self.content: dict[str, tuple[str, str | None]] = {}
        self.enabled: dict[str, bool] = {f: False for f in self.values}
        self.handlers: dict[str, Callable[[], object]] = {}
        self.focused: str | None = None
        self.overlay_shown = False

    def _check(self, field_id: str) -> None:
        if field_id not in self.values:
            raise MissingHostElement(field_id)

    def field_value(self, field_id: str) -> str:
        self._check(field_id)
        return self.values[field_id]

    def set_field_content(self, field_id: str, text: str, *, tag: str | None = None) -> None:
        self._check(field_id)
        self.content[field_id] = (text, tag)

    def set_field_enabled(self, field_id: str, enabled: bool) -> None:
        self._check(field_id)
        self.enabled[field_id] = enabled

    def focus(self, field_id: str) -> None:
        self._check(field_id)
        self.focused = field_id

    def on_commit(self, field_id: str, handler: Callable[[], object]) -> None:
        self._check(field_id)
        self.handlers[field_id] = handler

    def show_overlay(self) -> None:
        self.overlay_shown = True

    def type_and_confirm(self, field_id: str, text: str) -> object:
        self.values[field_id] = text
        return self.handlers[field_id]()


class FakeSurface:
    def __init__(self) -> None:
        self.drawings: dict[int, Drawing] = {}

    def render_round(self, round_index: int, drawing: Drawing) -> None:
        self.drawings[round_index] = drawing


def _rounds(*angles: int) -> tuple[Round, ...]:
    return tuple(
        Round(index=i, seed=i, true_angle=a, offset_rad=0.0, ray_a=(100.0, 50.0), ray_b=(50.0, 100.0))
        for i, a in enumerate(angles)
    )


def _started(host: FakeHost | None = None) -> tuple[RoundController, FakeHost, FakeSurface]:
    host = host or FakeHost()
    surface = FakeSurface()
    controller = RoundController(rounds=_rounds(90, 200, 30), host=host, surface=surface)
    controller.start()
    return controller, host, surface


def test_start_renders_all_rounds_and_opens_only_first_input() -> None:
    controller, host, surface = _started()

    assert controller.state is GameState.AWAITING_ROUND_0
    assert controller.active_index == 0
    assert sorted(surface.drawings) == [0, 1, 2]
    assert set(host.handlers) == {"guess1", "guess2", "guess3"}
    assert host.enabled["guess1"] is True
    assert host.enabled["guess2"] is False
    assert host.enabled["guess3"] is False
    assert host.focused == "guess1"


def test_commit_on_future_round_is_ignored() -> None:
    controller, host, _ = _started()

    assert host.type_and_confirm("guess2", "45") is CommitOutcome.IGNORED
    assert controller.commit(2) is CommitOutcome.IGNORED

    assert controller.state is GameState.AWAITING_ROUND_0
    assert controller.scores == (None, None, None)
    assert "answer2" not in host.content
    assert host.enabled["guess2"] is False


def test_commit_before_start_is_ignored() -> None:
    host = FakeHost()
    controller = RoundController(rounds=_rounds(1, 2, 3), host=host, surface=FakeSurface())
    assert controller.commit(0) is CommitOutcome.IGNORED
    assert controller.state is GameState.AWAITING_ROUND_0


@pytest.mark.parametrize("raw", ["", "   ", "abc", "12.5", "361", "-5", "9O"])
def test_malformed_guess_keeps_round_open(raw: str) -> None:
    controller, host, _ = _started()

    assert host.type_and_confirm("guess1", raw) is CommitOutcome.INVALID
    assert controller.state is GameState.AWAITING_ROUND_0
    assert controller.scores == (None, None, None)
    assert host.enabled["guess1"] is True

    assert host.type_and_confirm("guess1", "90") is CommitOutcome.ACCEPTED
    assert controller.state is GameState.AWAITING_ROUND_1


def test_accepted_guess_locks_input_reveals_answer_and_opens_next() -> None:
    controller, host, _ = _started()

    assert host.type_and_confirm("guess1", " 80 ") is CommitOutcome.ACCEPTED

    entry = controller.scores[0]
    assert entry is not None
    assert entry.guess == 80
    assert entry.true_angle == 90
    assert host.enabled["guess1"] is False
    assert host.enabled["guess2"] is True
    assert host.focused == "guess2"
    assert host.content["answer1"] == (f"90\n+{entry.points:.2f}", entry.category.value)


def test_resubmitting_completed_round_changes_nothing() -> None:
    controller, host, _ = _started()
    host.type_and_confirm("guess1", "90")
    first = controller.scores[0]

    assert host.type_and_confirm("guess1", "0") is CommitOutcome.IGNORED
    assert controller.scores[0] is first
    assert controller.state is GameState.AWAITING_ROUND_1


def test_third_commit_finishes_once_and_shows_overlay() -> None:
    controller, host, _ = _started()
    host.type_and_confirm("guess1", "90")
    host.type_and_confirm("guess2", "200")
    assert controller.result is None
    assert host.type_and_confirm("guess3", "30") is CommitOutcome.ACCEPTED

    result = controller.result
    assert result is not None
    assert controller.state is GameState.FINISHED
    assert controller.active_index is None
    assert [e.category for e in result.entries] == [Category.PERFECT] * 3
    assert result.total == sum(e.points for e in result.entries)
    assert result.verdict == verdict_for(result.total)
    assert host.overlay_shown is True
    assert host.content["the_end"] == (result.verdict, None)
    assert host.content["final_score"] == (result.score_text, None)
    assert host.content["final_score_composition"] == (result.breakdown, None)

    assert controller.commit(2) is CommitOutcome.IGNORED
    assert controller.result is result


def test_missing_guess_field_is_fatal_at_start() -> None:
    host = FakeHost(fields=[f for f in ALL_FIELDS if f != "guess3"])
    controller = RoundController(rounds=_rounds(1, 2, 3), host=host, surface=FakeSurface())
    with pytest.raises(MissingHostElement):
        controller.start()


def test_missing_answer_field_propagates_from_commit() -> None:
    host = FakeHost(fields=[f for f in ALL_FIELDS if f != "answer1"])
    controller, host, _ = _started(host)
    host.values["guess1"] = "90"
    with pytest.raises(MissingHostElement):
        controller.commit(0)


def test_controller_requires_three_rounds() -> None:
    with pytest.raises(ValueError):
        RoundController(rounds=_rounds(1, 2), host=FakeHost(), surface=FakeSurface())


def test_parse_guess_accepts_full_range() -> None:
    assert parse_guess("0") == 0
    assert parse_guess("360") == 360
    with pytest.raises(InvalidGuessFormat) as info:
        parse_guess("x")
    assert info.value.raw == "x"
