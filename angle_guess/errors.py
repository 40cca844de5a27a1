from __future__ import annotations


class AngleGuessError(Exception):
    """Base class for game errors."""


class InvalidGuessFormat(AngleGuessError, ValueError):
    """Typed guess is not a whole number of degrees in [0, 360].

    Recoverable: the round stays open for another attempt.
    """

    def __init__(self, raw: str) -> None:
        super().__init__(f"guess must be a whole number between 0 and 360, got {raw!r}")
        self.raw = raw


class OutOfSequenceCommit(AngleGuessError):
    """Commit arrived for a round that is locked or not yet active."""

    def __init__(self, round_index: int, active_index: int | None) -> None:
        super().__init__(f"round {round_index} is not active (active: {active_index})")
        self.round_index = round_index
        self.active_index = active_index


class MissingHostElement(AngleGuessError, LookupError):
    """The UI host has no field with the requested id.

    This is an integration fault between host and core, never a user error.
    """

    def __init__(self, field_id: str) -> None:
        super().__init__(f"UI host has no field {field_id!r}")
        self.field_id = field_id
