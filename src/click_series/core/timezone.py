"""Display timezone resolution."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from click_series.domain.exceptions import ConfigurationError

_UTC_NAMES = {"utc", "z", "gmt"}


def local_timezone() -> tzinfo:
    """Return the host's current local zone."""

    zone = datetime.now().astimezone().tzinfo
    return zone if zone is not None else timezone.utc


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Map a configured zone name onto a ``tzinfo``; ``None`` means host local."""

    if name is None or not name.strip():
        return local_timezone()
    if name.strip().lower() in _UTC_NAMES:
        return timezone.utc
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(
            "Unknown timezone", context={"timezone": name}
        ) from exc
