"""Basic click series example using an in-memory click source."""

import asyncio

from click_series.core.container import DIContainer
from click_series.core.config import SeriesConfig
from click_series.sources.memory_source import InMemoryClickSource


async def main() -> None:
    source = InMemoryClickSource(
        {
            "abc123": [
                "2024-01-01T09:05:00Z",
                "2024-01-01T09:05:30Z",
                "2024-01-01T10:02:00Z",
            ]
        }
    )
    orchestrator = DIContainer.create_orchestrator(
        config=SeriesConfig(timezone="UTC"), source=source
    )

    for granularity in ("minute", "hour", "day"):
        state = await orchestrator.request("abc123", granularity=granularity)
        print(granularity)
        for record in state.series:
            print(f"  {record.label}: {record.count}")


if __name__ == "__main__":
    asyncio.run(main())
