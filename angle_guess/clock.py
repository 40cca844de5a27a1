from __future__ import annotations

import datetime as dt
from typing import Protocol


class DateSource(Protocol):
    """Calendar date abstraction.

    Core logic depends on this interface rather than reading the wall clock directly.
    """

    def today(self) -> dt.date:
        """Return the local calendar date."""


class SystemDateSource:
    """Production date source backed by the local wall clock."""

    def today(self) -> dt.date:
        return dt.date.today()


class FixedDateSource:
    """Pinned date, for daily-challenge replays and tests."""

    def __init__(self, date: dt.date) -> None:
        self._date = date

    def today(self) -> dt.date:
        return self._date
