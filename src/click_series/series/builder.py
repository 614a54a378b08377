"""Ordering of bucket counts into chartable series."""

from __future__ import annotations

from typing import Mapping, Optional, Tuple

from click_series.domain.interfaces import ISeriesBuilder
from click_series.domain.models import BucketRecord, Granularity, Series, TimeKey


class SeriesBuilder(ISeriesBuilder):
    """Turns an aggregation mapping into an ascending series."""

    def build(self, counts: Mapping[TimeKey, int], granularity: Granularity) -> Series:
        """Sort buckets by their ordinal, never by label.

        Labels do not sort as text (``"10:02" < "9:05"``). Two keys sharing an
        ordinal fall back to key string order so the result stays deterministic.
        ``granularity`` is only validated here; each key's ordinal already
        encodes its resolution.
        """

        Granularity.parse(granularity)
        ordered = sorted(counts.items(), key=self._sort_key)
        return tuple(
            BucketRecord(key=time_key.key, label=time_key.label, count=count)
            for time_key, count in ordered
        )

    @staticmethod
    def peak(series: Series) -> Optional[BucketRecord]:
        """Busiest bucket; the earliest one wins a tie."""

        best: Optional[BucketRecord] = None
        for record in series:
            if best is None or record.count > best.count:
                best = record
        return best

    @staticmethod
    def _sort_key(item: Tuple[TimeKey, int]) -> Tuple[int, str]:
        time_key, _ = item
        return time_key.sort_ordinal, time_key.key
