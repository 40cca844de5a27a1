from __future__ import annotations

import datetime as dt
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .clock import DateSource, FixedDateSource, SystemDateSource
from .rounds import DEFAULT_RADIUS

DATE_ENV = "ANGLE_GUESS_DATE"
LOG_LEVEL_ENV = "ANGLE_GUESS_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"
_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True, slots=True)
class GameConfig:
    radius: float = DEFAULT_RADIUS
    # Pin the daily seed to this date instead of today.
    fixed_date: dt.date | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GameConfig":
        env = os.environ if environ is None else environ

        fixed_date: dt.date | None = None
        raw_date = env.get(DATE_ENV, "").strip()
        if raw_date:
            try:
                fixed_date = dt.date.fromisoformat(raw_date)
            except ValueError as exc:
                raise ValueError(f"{DATE_ENV} must be YYYY-MM-DD, got {raw_date!r}") from exc

        log_level = env.get(LOG_LEVEL_ENV, "").strip().upper() or DEFAULT_LOG_LEVEL
        return cls(fixed_date=fixed_date, log_level=log_level)

    def date_source(self) -> DateSource:
        if self.fixed_date is not None:
            return FixedDateSource(self.fixed_date)
        return SystemDateSource()


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Install a stream handler on the root logger (no-op if one exists)."""

    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), format=_LOG_FORMAT)
