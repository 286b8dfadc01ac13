"""Time helper tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from greencredits.utils.time import humanize_relative_time, now_utc, parse_timestamp


def test_parse_timestamp_handles_zulu_suffix() -> None:
    """ISO strings with a Z suffix should parse as UTC."""
    result = parse_timestamp("2026-02-07T10:30:00Z")
    assert result == datetime(2026, 2, 7, 10, 30, tzinfo=UTC)


def test_parse_timestamp_assumes_utc_for_naive_values() -> None:
    """Naive datetimes are treated as UTC."""
    result = parse_timestamp(datetime(2026, 2, 7, 10, 30))
    assert result is not None
    assert result.tzinfo is not None
    assert result.hour == 10


def test_parse_timestamp_empty_input() -> None:
    """Missing values should stay missing."""
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


def test_humanize_relative_time() -> None:
    """Relative labels should use the compact frontend format."""
    assert humanize_relative_time(None) == "new"
    assert humanize_relative_time(now_utc()) == "now"
    assert humanize_relative_time(now_utc() - timedelta(hours=3, minutes=1)) == "3h"
    assert humanize_relative_time(now_utc() - timedelta(days=2, hours=1)) == "2d"
