"""Pure business-logic helpers for click aggregation."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from click_series.domain.exceptions import MalformedTimestampError
from click_series.domain.interfaces import IClickAggregator, ITimeKeyDeriver
from click_series.domain.models import Aggregation, Granularity, TimeKey

from .timestamps import parse_timestamps

__all__ = ["Aggregation", "ClickAggregator"]


class ClickAggregator(IClickAggregator):
    """Counts clicks per bucket; output order carries no meaning."""

    def __init__(
        self,
        deriver: ITimeKeyDeriver,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._deriver = deriver
        self._logger = logger or logging.getLogger(__name__)

    def aggregate(
        self, timestamps: Iterable[datetime], granularity: Granularity
    ) -> Dict[TimeKey, int]:
        counts: Dict[TimeKey, int] = {}
        for timestamp in timestamps:
            key = self._deriver.derive_key(timestamp, granularity)
            counts[key] = counts.get(key, 0) + 1
        return counts

    def aggregate_raw(
        self, values: Iterable[Any], granularity: Granularity
    ) -> Aggregation:
        """Parse raw click values, skipping malformed ones, then aggregate.

        Values that parse but cannot be placed in the display zone are
        skipped as well.
        """

        granularity = Granularity.parse(granularity)
        timestamps, unparsed = parse_timestamps(values, self._deriver.timezone)
        counts, unplaced = self._count_placeable(timestamps, granularity)
        skipped = unparsed + unplaced
        if skipped:
            self._logger.warning(
                "malformed_timestamps_skipped",
                extra={"skipped": skipped, "parsed": len(timestamps) - unplaced},
            )
        return Aggregation(counts=counts, skipped=skipped)

    @staticmethod
    def total_clicks(counts: Mapping[TimeKey, int]) -> int:
        return sum(counts.values())

    def _count_placeable(
        self, timestamps: Iterable[datetime], granularity: Granularity
    ) -> Tuple[Dict[TimeKey, int], int]:
        counts: Dict[TimeKey, int] = {}
        skipped = 0
        for timestamp in timestamps:
            try:
                key = self._deriver.derive_key(timestamp, granularity)
            except MalformedTimestampError:
                skipped += 1
                continue
            counts[key] = counts.get(key, 0) + 1
        return counts, skipped
