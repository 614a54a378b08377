"""Parsing of raw click instants at ingestion."""

from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo
from typing import Any, Iterable, List, Tuple

from click_series.domain.exceptions import MalformedTimestampError

# Epoch numbers larger than this are read as milliseconds (year ~5138 in seconds).
MILLISECONDS_THRESHOLD = 1e11


def parse_timestamp(value: Any, zone: tzinfo) -> datetime:
    """Read one raw click value as an aware ``datetime``.

    Accepts ISO-8601 strings, epoch numbers and ``datetime`` objects. Naive
    values are taken to be in ``zone``.
    """

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, bool):
        raise MalformedTimestampError(context={"value": value})
    elif isinstance(value, (int, float)):
        moment = _from_epoch(value)
    elif isinstance(value, str):
        moment = _from_iso(value)
    else:
        raise MalformedTimestampError(
            "Unsupported timestamp type", context={"type": type(value).__name__}
        )

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=zone)
    return moment


def parse_timestamps(values: Iterable[Any], zone: tzinfo) -> Tuple[List[datetime], int]:
    """Parse every value, returning the well-formed instants and the skip count."""

    parsed: List[datetime] = []
    skipped = 0
    for value in values:
        try:
            parsed.append(parse_timestamp(value, zone))
        except MalformedTimestampError:
            skipped += 1
    return parsed, skipped


def _from_epoch(value: float) -> datetime:
    if not math.isfinite(value):
        raise MalformedTimestampError(context={"value": value})
    seconds = value / 1000 if abs(value) > MILLISECONDS_THRESHOLD else value
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedTimestampError(context={"value": value}) from exc


def _from_iso(value: str) -> datetime:
    text = value.strip()
    if not text:
        raise MalformedTimestampError("Empty timestamp")
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedTimestampError(context={"value": value}) from exc
