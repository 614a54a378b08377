"""Calendar hour bucketing."""

from __future__ import annotations

from datetime import datetime, timedelta

from click_series.domain.models import TimeKey

from .base import IKeyStrategy


class HourKeyStrategy(IKeyStrategy):
    """Buckets by local date and hour, ordered by the epoch of the hour start.

    A wall-clock hour that occurs twice (DST fall-back) gets its UTC offset
    appended, so each real hour keeps its own key.
    """

    def name(self) -> str:
        return "hour"

    def derive(self, moment: datetime) -> TimeKey:
        start = moment.replace(minute=0, second=0, microsecond=0)
        label = f"{start.date().isoformat()}, {start.hour}:00"
        if _is_ambiguous(start):
            label = f"{label} ({_offset_label(start)})"
        return TimeKey(key=label, label=label, sort_ordinal=int(start.timestamp()))


def _is_ambiguous(moment: datetime) -> bool:
    return moment.replace(fold=0).utcoffset() != moment.replace(fold=1).utcoffset()


def _offset_label(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, remainder = divmod(abs(minutes), 60)
    return f"UTC{sign}{hours:02d}:{remainder:02d}"
