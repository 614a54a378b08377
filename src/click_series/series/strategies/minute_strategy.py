"""Minute-of-day bucketing."""

from __future__ import annotations

from datetime import datetime

from click_series.domain.models import TimeKey

from .base import IKeyStrategy


class MinuteKeyStrategy(IKeyStrategy):
    """Buckets by local ``H:MM``.

    The date is not part of the key, so clicks from different days that share
    an hour and minute land in the same bucket. The ordinal is the minute of
    the day, which keeps ``9:05`` ahead of ``10:02``.
    """

    def name(self) -> str:
        return "minute"

    def derive(self, moment: datetime) -> TimeKey:
        label = f"{moment.hour}:{moment.minute:02d}"
        return TimeKey(
            key=label,
            label=label,
            sort_ordinal=moment.hour * 60 + moment.minute,
        )
