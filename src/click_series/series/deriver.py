"""Time key derivation for every supported granularity."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Dict, Mapping, Optional

from click_series.core.timezone import local_timezone
from click_series.domain.exceptions import MalformedTimestampError
from click_series.domain.interfaces import ITimeKeyDeriver
from click_series.domain.models import Granularity, TimeKey

from .strategies.base import IKeyStrategy
from .strategies.day_strategy import DayKeyStrategy
from .strategies.hour_strategy import HourKeyStrategy
from .strategies.minute_strategy import MinuteKeyStrategy
from .timestamps import parse_timestamp


def default_key_strategies() -> Dict[Granularity, IKeyStrategy]:
    return {
        Granularity.MINUTE: MinuteKeyStrategy(),
        Granularity.HOUR: HourKeyStrategy(),
        Granularity.DAY: DayKeyStrategy(),
    }


class TimeKeyDeriver(ITimeKeyDeriver):
    """Renders instants in a pinned zone and delegates keying per granularity."""

    def __init__(
        self,
        zone: Optional[tzinfo] = None,
        *,
        strategies: Optional[Mapping[Granularity, IKeyStrategy]] = None,
    ) -> None:
        self._zone = zone or local_timezone()
        self._strategies = dict(strategies or default_key_strategies())
        missing = [g.value for g in Granularity if g not in self._strategies]
        if missing:
            raise ValueError(f"No key strategy registered for {missing}")

    @property
    def timezone(self) -> tzinfo:
        return self._zone

    def derive_key(self, timestamp: datetime, granularity: Granularity) -> TimeKey:
        """Return the bucket ``timestamp`` falls into in the display zone.

        Raises ``MalformedTimestampError`` when the instant cannot be
        represented in that zone.
        """

        strategy = self._strategies[Granularity.parse(granularity)]
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=self._zone)
        try:
            return strategy.derive(timestamp.astimezone(self._zone))
        except (OverflowError, ValueError) as exc:
            raise MalformedTimestampError(
                "Timestamp out of range for display zone",
                context={"timestamp": timestamp.isoformat()},
            ) from exc

    def derive_raw(self, value: Any, granularity: Granularity) -> TimeKey:
        """Parse a raw click value and derive its key in one step."""

        return self.derive_key(parse_timestamp(value, self._zone), granularity)
