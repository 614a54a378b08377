"""Dependency injection container for building fully-wired orchestrators."""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Optional

import httpx

from click_series.core.config import SeriesConfig
from click_series.core.orchestrator import FetchOrchestrator
from click_series.core.timezone import resolve_timezone
from click_series.domain.interfaces import IClickSource
from click_series.series.aggregator import ClickAggregator
from click_series.series.builder import SeriesBuilder
from click_series.series.deriver import TimeKeyDeriver
from click_series.sources.base import ClickSourceConfig
from click_series.sources.http_source import HttpClickSource


class DIContainer:
    """Factory helpers that assemble a FetchOrchestrator with default wiring."""

    @staticmethod
    def create_orchestrator(
        *,
        config: Optional[SeriesConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        source: Optional[IClickSource] = None,
        zone: Optional[tzinfo] = None,
        logger: Optional[logging.Logger] = None,
    ) -> FetchOrchestrator:
        if http_client is not None and source is not None:
            raise ValueError("Provide either 'http_client' or 'source', not both")

        cfg = config or SeriesConfig.from_env()
        resolved_source = source or DIContainer._build_http_source(cfg, http_client)
        deriver = TimeKeyDeriver(zone or resolve_timezone(cfg.timezone))

        return FetchOrchestrator(
            resolved_source,
            ClickAggregator(deriver),
            SeriesBuilder(),
            default_granularity=cfg.granularity,
            logger=logger,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _build_http_source(
        config: SeriesConfig, http_client: Optional[httpx.AsyncClient]
    ) -> HttpClickSource:
        source_config = ClickSourceConfig(
            base_url=config.api_base_url,
            timeout=config.timeout_seconds,
        )
        client = http_client or httpx.AsyncClient(timeout=source_config.timeout)
        return HttpClickSource(client, source_config)
