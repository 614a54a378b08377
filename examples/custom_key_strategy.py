"""Demonstrates registering a custom key strategy for the minute view."""

import asyncio
from datetime import datetime, timezone

from click_series.core.orchestrator import FetchOrchestrator
from click_series.domain.models import Granularity, TimeKey
from click_series.series.aggregator import ClickAggregator
from click_series.series.builder import SeriesBuilder
from click_series.series.deriver import TimeKeyDeriver, default_key_strategies
from click_series.series.strategies.base import IKeyStrategy
from click_series.sources.memory_source import InMemoryClickSource


class DatedMinuteKeyStrategy(IKeyStrategy):
    """Minute buckets that keep the date, so different days never collide."""

    def name(self) -> str:
        return "dated_minute"

    def derive(self, moment: datetime) -> TimeKey:
        start = moment.replace(second=0, microsecond=0)
        label = f"{start.date().isoformat()} {start.hour}:{start.minute:02d}"
        return TimeKey(key=label, label=label, sort_ordinal=int(start.timestamp()))


async def main() -> None:
    strategies = default_key_strategies()
    strategies[Granularity.MINUTE] = DatedMinuteKeyStrategy()
    deriver = TimeKeyDeriver(timezone.utc, strategies=strategies)
    source = InMemoryClickSource(
        {"abc123": ["2024-01-01T09:05:00Z", "2024-01-02T09:05:00Z"]}
    )
    orchestrator = FetchOrchestrator(source, ClickAggregator(deriver), SeriesBuilder())

    state = await orchestrator.request("abc123", granularity=Granularity.MINUTE)
    for record in state.series:
        print(f"{record.label}: {record.count}")


if __name__ == "__main__":
    asyncio.run(main())
