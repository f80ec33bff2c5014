"""
Tests for feed date normalization

Tests cover:
- Falsy values
- Unix seconds vs milliseconds
- ISO and RFC 2822 strings
- Malformed input never raising
"""

import math
from datetime import datetime, timezone

import pytest

from jobtracker.services.dates import parse_date


class TestFalsyValues:
    """Values that carry no date."""

    @pytest.mark.parametrize("value", [None, 0, 0.0, "", False, [], {}])
    def test_falsy_returns_none(self, value):
        assert parse_date(value) is None

    def test_true_is_not_a_timestamp(self):
        """Booleans are not treated as numbers."""
        assert parse_date(True) is None


class TestNumericValues:
    """Unix timestamps in seconds or milliseconds."""

    def test_seconds(self):
        assert parse_date(1_700_000_000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_milliseconds(self):
        assert parse_date(1_700_000_000_000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_seconds_and_milliseconds_agree(self):
        """The same instant in either unit normalizes identically."""
        assert parse_date(1_756_816_496) == parse_date(1_756_816_496_000)

    def test_threshold_is_treated_as_seconds(self):
        """Exactly 10^12 is not above the threshold, so it is seconds."""
        # 10^12 seconds is far beyond datetime's range
        assert parse_date(10**12) is None

    def test_float_seconds(self):
        result = parse_date(1_700_000_000.5)
        assert result == datetime(2023, 11, 14, 22, 13, 20, 500000, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_returns_none(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", [10**400, -(10**400)])
    def test_integer_beyond_float_range_returns_none(self, value):
        assert parse_date(value) is None


class TestStringValues:
    """Calendar strings."""

    def test_iso_with_z_suffix(self):
        assert parse_date("2025-09-02T12:34:56Z") == datetime(2025, 9, 2, 12, 34, 56, tzinfo=timezone.utc)

    def test_iso_with_offset_is_converted_to_utc(self):
        assert parse_date("2025-09-02T14:34:56+02:00") == datetime(2025, 9, 2, 12, 34, 56, tzinfo=timezone.utc)

    def test_naive_iso_is_taken_as_utc(self):
        result = parse_date("2025-09-02T12:34:56")
        assert result == datetime(2025, 9, 2, 12, 34, 56, tzinfo=timezone.utc)
        assert result.tzinfo is not None

    def test_date_only(self):
        assert parse_date("2025-09-02") == datetime(2025, 9, 2, tzinfo=timezone.utc)

    def test_rfc_2822(self):
        result = parse_date("Tue, 02 Sep 2025 12:00:00 GMT")
        assert result == datetime(2025, 9, 2, 12, 0, 0, tzinfo=timezone.utc)

    def test_surrounding_whitespace(self):
        assert parse_date("  2025-09-02T12:00:00Z  ") == datetime(2025, 9, 2, 12, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "value",
        ["not a date", "2025-13-45", "   ", "yesterday", "2025-09-02T25:00:00", "Z"],
    )
    def test_malformed_returns_none(self, value):
        """Malformed strings yield None instead of raising."""
        assert parse_date(value) is None


class TestOtherTypes:
    @pytest.mark.parametrize("value", [["2025-09-02"], {"date": "2025-09-02"}, object()])
    def test_unsupported_types_return_none(self, value):
        assert parse_date(value) is None
