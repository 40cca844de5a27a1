"""Collaborator interfaces the game core talks to.

The core never touches a window toolkit directly: it reads and writes named
fields on a :class:`UiHost` and hands drawings to a :class:`RenderSurface`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from .drawing import Drawing

GUESS_FIELDS = ("guess1", "guess2", "guess3")
ANSWER_FIELDS = ("answer1", "answer2", "answer3")
TITLE_FIELD = "the_end"
SCORE_FIELD = "final_score"
BREAKDOWN_FIELD = "final_score_composition"

ALL_FIELDS = (*GUESS_FIELDS, *ANSWER_FIELDS, TITLE_FIELD, SCORE_FIELD, BREAKDOWN_FIELD)


class UiHost(Protocol):
    """Named-field access. Unknown ids raise ``MissingHostElement``."""

    def field_value(self, field_id: str) -> str:
        ...

    def set_field_content(self, field_id: str, text: str, *, tag: str | None = None) -> None:
        """Replace a field's displayed content; ``tag`` is a styling hint."""
        ...

    def set_field_enabled(self, field_id: str, enabled: bool) -> None:
        ...

    def focus(self, field_id: str) -> None:
        ...

    def on_commit(self, field_id: str, handler: Callable[[], object]) -> None:
        """Register the handler fired when the player confirms ``field_id``."""
        ...

    def show_overlay(self) -> None:
        ...


class RenderSurface(Protocol):
    def render_round(self, round_index: int, drawing: Drawing) -> None:
        ...
