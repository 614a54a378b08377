"""Click time-series aggregation for a URL shortener client."""

from .core.container import DIContainer
from .core.orchestrator import FetchOrchestrator
from .domain.models import BucketRecord, Granularity, SeriesState

__all__ = [
    "DIContainer",
    "FetchOrchestrator",
    "BucketRecord",
    "Granularity",
    "SeriesState",
    "domain",
    "series",
    "sources",
    "core",
]
