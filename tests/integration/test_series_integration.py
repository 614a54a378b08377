import asyncio
import logging
from datetime import timezone

import httpx
import pytest

from click_series.core.config import SeriesConfig
from click_series.core.container import DIContainer
from click_series.core.orchestrator import FetchOrchestrator
from click_series.domain.models import ErrorKind, FetchStatus, Granularity
from click_series.sources.http_source import HttpClickSource
from click_series.sources.memory_source import InMemoryClickSource

REDIRECTS = {
    "abc123": [
        "2024-01-01T09:05:00Z",
        "2024-01-01T09:05:30Z",
        "2024-01-01T10:02:00Z",
    ]
}


def _handler(request: httpx.Request) -> httpx.Response:
    if request.headers.get("authorization") != "Bearer good-token":
        return httpx.Response(401, json={"detail": "Could not validate credentials"})
    subject = request.url.path.split("/")[-2]
    return httpx.Response(200, json=REDIRECTS.get(subject, []))


@pytest.fixture(autouse=True)
def quiet_logs():
    logging.getLogger("click_series.core.orchestrator").setLevel(logging.CRITICAL)


def _run_with_client(scenario):
    async def run():
        transport = httpx.MockTransport(_handler)
        async with httpx.AsyncClient(transport=transport) as client:
            orchestrator = DIContainer.create_orchestrator(
                config=SeriesConfig(api_base_url="https://sho.rt/api", timezone="UTC"),
                http_client=client,
            )
            return await scenario(orchestrator)

    return asyncio.run(run())


def test_end_to_end_granularity_switching():
    async def scenario(orchestrator: FetchOrchestrator):
        results = {}
        for granularity in Granularity:
            state = await orchestrator.request("abc123", "good-token", granularity)
            results[granularity] = [(r.label, r.count) for r in state.series]
        return results

    results = _run_with_client(scenario)

    assert results[Granularity.MINUTE] == [("9:05", 2), ("10:02", 1)]
    assert results[Granularity.HOUR] == [("2024-01-01, 9:00", 2), ("2024-01-01, 10:00", 1)]
    assert results[Granularity.DAY] == [("2024-01-01", 3)]


def test_end_to_end_rejected_token_fails_softly():
    async def scenario(orchestrator: FetchOrchestrator):
        return await orchestrator.request("abc123", "expired", Granularity.DAY)

    state = _run_with_client(scenario)

    assert state.status is FetchStatus.FAILED
    assert state.series == ()
    assert state.is_loading is False
    assert state.error is ErrorKind.SOURCE_UNAVAILABLE


def test_end_to_end_token_change_refetches():
    async def scenario(orchestrator: FetchOrchestrator):
        await orchestrator.request("abc123", "expired", "day")
        task = orchestrator.set_token("good-token")
        return await task

    state = _run_with_client(scenario)

    assert state.status is FetchStatus.READY
    assert [(r.label, r.count) for r in state.series] == [("2024-01-01", 3)]


def test_container_builds_http_source_from_config():
    orchestrator = DIContainer.create_orchestrator(
        config=SeriesConfig(default_granularity="hour", timezone="UTC")
    )

    assert isinstance(orchestrator, FetchOrchestrator)
    assert isinstance(orchestrator._source, HttpClickSource)  # type: ignore[attr-defined]
    assert orchestrator.current_request is None


def test_container_reads_env_when_config_missing(monkeypatch):
    monkeypatch.setenv("CLICK_SERIES_DEFAULT_GRANULARITY", "day")
    monkeypatch.setenv("CLICK_SERIES_TIMEZONE", "UTC")
    source = InMemoryClickSource(REDIRECTS)

    orchestrator = DIContainer.create_orchestrator(source=source)
    state = asyncio.run(orchestrator.request("abc123"))

    assert state.request.granularity is Granularity.DAY
    assert [(r.label, r.count) for r in state.series] == [("2024-01-01", 3)]


def test_container_rejects_client_and_source_together():
    with pytest.raises(ValueError):
        DIContainer.create_orchestrator(
            config=SeriesConfig(),
            http_client=httpx.AsyncClient(),
            source=InMemoryClickSource(),
        )


def test_container_accepts_explicit_zone():
    source = InMemoryClickSource({"abc123": ["2024-01-02T03:30:00Z"]})
    orchestrator = DIContainer.create_orchestrator(
        config=SeriesConfig(), source=source, zone=timezone.utc
    )

    state = asyncio.run(orchestrator.request("abc123", granularity="day"))

    assert [r.label for r in state.series] == ["2024-01-02"]
