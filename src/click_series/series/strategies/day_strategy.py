"""Calendar day bucketing."""

from __future__ import annotations

from datetime import datetime

from click_series.domain.models import TimeKey

from .base import IKeyStrategy


class DayKeyStrategy(IKeyStrategy):
    """Buckets by local calendar date, ordered by the epoch of local midnight.

    Midnight is always resolved with ``fold=0`` so every instant of a date
    shares one ordinal, even when midnight repeats or is skipped.
    """

    def name(self) -> str:
        return "day"

    def derive(self, moment: datetime) -> TimeKey:
        start = moment.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)
        label = start.date().isoformat()
        return TimeKey(key=label, label=label, sort_ordinal=int(start.timestamp()))
