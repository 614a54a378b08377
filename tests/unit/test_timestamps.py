from datetime import datetime, timedelta, timezone

import pytest

from click_series.domain.exceptions import MalformedTimestampError
from click_series.series.timestamps import parse_timestamp, parse_timestamps

EST = timezone(timedelta(hours=-5))


def test_parse_iso_with_zulu_suffix():
    moment = parse_timestamp("2024-01-01T09:05:00Z", EST)
    assert moment == datetime(2024, 1, 1, 9, 5, tzinfo=timezone.utc)


def test_parse_iso_with_offset():
    moment = parse_timestamp("2024-01-01T09:05:00+02:00", timezone.utc)
    assert moment.utcoffset() == timedelta(hours=2)


def test_naive_values_are_read_in_zone():
    moment = parse_timestamp("2024-01-01T09:05:00", EST)
    assert moment.tzinfo is EST
    assert parse_timestamp(datetime(2024, 1, 1), EST).tzinfo is EST


def test_epoch_seconds_and_milliseconds():
    seconds = parse_timestamp(1704099900, EST)
    millis = parse_timestamp(1704099900000, EST)
    assert seconds == millis == datetime(2024, 1, 1, 9, 5, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "raw", ["", "yesterday", "2024-13-01T00:00:00Z", None, True, float("nan"), {}]
)
def test_malformed_values_raise(raw):
    with pytest.raises(MalformedTimestampError):
        parse_timestamp(raw, timezone.utc)


def test_parse_timestamps_skips_malformed_entries():
    parsed, skipped = parse_timestamps(
        ["2024-01-01T09:05:00Z", "garbage", None, 1704099900], timezone.utc
    )
    assert len(parsed) == 2
    assert skipped == 2
