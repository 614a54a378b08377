"""Key strategy protocol used by the time key deriver."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from click_series.domain.models import TimeKey


class IKeyStrategy(Protocol):
    """Derives bucket identity for one granularity."""

    def derive(self, moment: datetime) -> TimeKey:
        """Return the bucket key for an instant already in the display zone."""

    def name(self) -> str:
        """Stable identifier used for observability tagging."""
