"""Domain-level interfaces defining contracts for click series collaborators."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Callable, Dict, Iterable, Protocol, Sequence

from .models import Aggregation, Granularity, Series, SeriesState, TimeKey

SeriesListener = Callable[[SeriesState], None]


class IClickSource(Protocol):
    """Contract every click source adapter must satisfy."""

    async def fetch_timestamps(self, subject: str, token: str) -> Sequence[Any]:
        """Return the raw, unordered click instants recorded for ``subject``."""


class ITimeKeyDeriver(Protocol):
    """Maps instants onto bucket keys for a granularity."""

    @property
    def timezone(self) -> tzinfo:
        """Zone used for labels and for reading naive instants."""

    def derive_key(self, timestamp: datetime, granularity: Granularity) -> TimeKey:
        """Return the bucket the instant falls into."""


class IClickAggregator(Protocol):
    """Folds instants into per-bucket counts."""

    def aggregate(
        self, timestamps: Iterable[datetime], granularity: Granularity
    ) -> Dict[TimeKey, int]:
        """Return an unordered mapping of bucket to click count."""

    def aggregate_raw(
        self, values: Iterable[Any], granularity: Granularity
    ) -> Aggregation:
        """Aggregate raw click values, counting the ones that were skipped."""


class ISeriesBuilder(Protocol):
    """Orders bucket counts into a chartable series."""

    def build(self, counts: Dict[TimeKey, int], granularity: Granularity) -> Series:
        """Return bucket records ascending by sort ordinal."""
