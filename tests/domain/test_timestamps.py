"""Tests for ISO-8601 timestamp parsing and formatting."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from chatwire.domain.timestamps import format_timestamp, parse_timestamp


class TestParseTimestamp:
    def test_with_offset(self) -> None:
        ts = parse_timestamp("2017-07-11T17:27:07.299000+00:00")
        assert ts == datetime(2017, 7, 11, 17, 27, 7, 299000, tzinfo=UTC)

    def test_zulu(self) -> None:
        ts = parse_timestamp("2021-01-01T00:00:00Z")
        assert ts.utcoffset() == timedelta(0)

    def test_non_utc_offset(self) -> None:
        ts = parse_timestamp("2021-01-01T10:00:00.5+02:00")
        assert ts.utcoffset() == timedelta(hours=2)
        assert ts.microsecond == 500000

    @pytest.mark.parametrize(
        "text",
        [
            "2021-01-01",
            "2021-01-01T00:00:00",
            "2021-01-01 00:00:00+00:00",
            "yesterday",
            "2021-13-01T00:00:00+00:00",
            "2021-01-01T00:00:00+00:00\n",
        ],
    )
    def test_rejects(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_timestamp(text)


class TestFormatTimestamp:
    def test_microsecond_precision(self) -> None:
        ts = datetime(2022, 3, 1, 18, 4, 5, tzinfo=UTC)
        assert format_timestamp(ts) == "2022-03-01T18:04:05.000000+00:00"

    def test_keeps_offset(self) -> None:
        ts = datetime(2022, 3, 1, 18, 4, 5, 123, tzinfo=timezone(timedelta(hours=-5)))
        assert format_timestamp(ts) == "2022-03-01T18:04:05.000123-05:00"

    def test_naive_rejected(self) -> None:
        with pytest.raises(ValueError, match="timezone-aware"):
            format_timestamp(datetime(2022, 3, 1))
