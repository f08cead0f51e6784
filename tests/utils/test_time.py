"""Tests for timestamp utilities."""

import pytest
from datetime import datetime, timedelta, timezone

from plan_tracker.utils.time import (
    MAX_TIMESTAMP_MS,
    create_future_timestamp,
    datetime_local_to_timestamp,
    datetime_to_timestamp_ms,
    format_timestamp_for_display,
    is_future_timestamp,
    is_valid_timestamp_ms,
    now_ms,
    timestamp_ms_to_datetime,
    timestamp_to_datetime_local,
    to_timestamp_ms,
)

JAN_1_2023_MS = 1672574400000  # 2023-01-01T12:00:00Z


class TestConversions:
    """Test datetime and millisecond conversions."""

    def test_aware_datetime_to_ms(self):
        """Test an aware datetime converts exactly."""
        value = datetime(2023, 1, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)
        assert datetime_to_timestamp_ms(value) == JAN_1_2023_MS + 123

    def test_offset_datetime_to_ms(self):
        """Test offsets are honoured."""
        value = datetime(2023, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert datetime_to_timestamp_ms(value) == JAN_1_2023_MS

    def test_ms_to_datetime_utc(self):
        """Test milliseconds convert back to an aware UTC datetime."""
        result = timestamp_ms_to_datetime(JAN_1_2023_MS + 5)
        assert result == datetime(2023, 1, 1, 12, 0, 0, 5000, tzinfo=timezone.utc)

    def test_naive_round_trip_is_local(self):
        """Test naive local datetimes survive a round trip through milliseconds."""
        local = datetime(2023, 6, 15, 8, 30)
        ms = datetime_to_timestamp_ms(local)
        assert timestamp_ms_to_datetime(ms, tz=None) == local

    def test_now_ms_is_current(self):
        """Test now_ms tracks wall-clock time."""
        before = int(datetime.now(timezone.utc).timestamp() * 1000)
        assert abs(now_ms() - before) < 5000


class TestToTimestampMs:
    """Test deadline normalization."""

    def test_int_passthrough(self):
        """Test integers are returned unchanged."""
        assert to_timestamp_ms(JAN_1_2023_MS) == JAN_1_2023_MS

    def test_digit_string(self):
        """Test strings of digits are read as milliseconds."""
        assert to_timestamp_ms(str(JAN_1_2023_MS)) == JAN_1_2023_MS

    def test_iso_string_with_zulu(self):
        """Test ISO-8601 strings with a Z suffix."""
        assert to_timestamp_ms("2023-01-01T12:00:00Z") == JAN_1_2023_MS

    def test_datetime_local_string(self):
        """Test datetime-local strings are read in local time."""
        expected = datetime_to_timestamp_ms(datetime(2023, 1, 1, 12, 0))
        assert to_timestamp_ms("2023-01-01T12:00") == expected
        assert datetime_local_to_timestamp("2023-01-01T12:00") == expected

    @pytest.mark.parametrize("value", [
        None, True, 1.0, "", "   ", "not a date", [], MAX_TIMESTAMP_MS + 1,
    ])
    def test_rejects_invalid(self, value):
        """Test values that cannot be timestamps raise ValueError."""
        with pytest.raises(ValueError):
            to_timestamp_ms(value)

    def test_is_valid_timestamp_ms(self):
        """Test integer range and type checks."""
        assert is_valid_timestamp_ms(0)
        assert is_valid_timestamp_ms(MAX_TIMESTAMP_MS)
        assert not is_valid_timestamp_ms(MAX_TIMESTAMP_MS + 1)
        assert not is_valid_timestamp_ms(False)
        assert not is_valid_timestamp_ms("1")


class TestFormattingHelpers:
    """Test display and form helpers."""

    def test_datetime_local_round_trip(self):
        """Test datetime-local formatting matches the local wall time."""
        ms = datetime_to_timestamp_ms(datetime(2023, 3, 4, 5, 6))
        assert timestamp_to_datetime_local(ms) == "2023-03-04T05:06"

    def test_format_for_display(self):
        """Test display format is day/month/year hour:minute."""
        ms = datetime_to_timestamp_ms(datetime(2023, 3, 4, 5, 6))
        assert format_timestamp_for_display(ms) == "04/03/2023 05:06"

    def test_is_future_timestamp(self):
        """Test strict future comparison against a given now."""
        assert is_future_timestamp(JAN_1_2023_MS + 1, now=JAN_1_2023_MS)
        assert not is_future_timestamp(JAN_1_2023_MS, now=JAN_1_2023_MS)

    def test_create_future_timestamp(self):
        """Test default future deadline is one week out."""
        assert create_future_timestamp(now=JAN_1_2023_MS) == JAN_1_2023_MS + 7 * 86_400_000
        assert create_future_timestamp(1, now=JAN_1_2023_MS) == JAN_1_2023_MS + 86_400_000
