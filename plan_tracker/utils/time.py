"""
Timestamp utilities for deadlines and creation times.

All stored times are integer milliseconds since the epoch. Helpers here
convert between that form, datetimes and the datetime-local strings
produced by form inputs.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

# datetime.max expressed in epoch milliseconds (9999-12-31T23:59:59.999Z)
MAX_TIMESTAMP_MS = 253402300799999
MIN_TIMESTAMP_MS = -62135596800000

DATETIME_LOCAL_FORMAT = "%Y-%m-%dT%H:%M"
DISPLAY_FORMAT = "%d/%m/%Y %H:%M"


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MS = timedelta(milliseconds=1)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return datetime_to_timestamp_ms(datetime.now(timezone.utc))


def datetime_to_timestamp_ms(value: datetime) -> int:
    """
    Convert a datetime to epoch milliseconds.

    Naive datetimes are interpreted as local time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return (value - EPOCH) // ONE_MS


def timestamp_ms_to_datetime(timestamp_ms: int, tz: Optional[timezone] = timezone.utc) -> datetime:
    """
    Convert epoch milliseconds to a datetime.

    Args:
        timestamp_ms: Milliseconds since the epoch
        tz: Target timezone; None returns naive local time

    Returns:
        Datetime in the requested timezone
    """
    moment = EPOCH + timestamp_ms * ONE_MS
    if tz is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(tz)


def is_valid_timestamp_ms(value: Any) -> bool:
    """True if value is an integer timestamp a datetime can represent."""
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return MIN_TIMESTAMP_MS <= value <= MAX_TIMESTAMP_MS


def to_timestamp_ms(value: Any) -> int:
    """
    Normalize a deadline value to epoch milliseconds.

    Accepts integer timestamps, datetimes, strings of digits and
    ISO-8601 / datetime-local strings.

    Raises:
        ValueError: If the value cannot be read as a timestamp
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")

    try:
        if isinstance(value, int):
            result = value
        elif isinstance(value, datetime):
            result = datetime_to_timestamp_ms(value)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                raise ValueError("Empty timestamp string")
            if text.lstrip("-").isdigit():
                result = int(text)
            else:
                result = datetime_local_to_timestamp(text)
        else:
            raise ValueError(f"Not a timestamp: {value!r}")
    except (OverflowError, OSError) as e:
        raise ValueError(f"Not a timestamp: {value!r}") from e

    if not is_valid_timestamp_ms(result):
        raise ValueError(f"Timestamp out of range: {result}")
    return result


def datetime_local_to_timestamp(datetime_string: str) -> int:
    """
    Convert a datetime-local / ISO-8601 string to epoch milliseconds.

    Strings without an offset are read in local time.

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = datetime_string.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime_to_timestamp_ms(datetime.fromisoformat(text))


def timestamp_to_datetime_local(timestamp_ms: int) -> str:
    """Format epoch milliseconds as a local ``YYYY-MM-DDTHH:MM`` string."""
    return timestamp_ms_to_datetime(timestamp_ms, tz=None).strftime(DATETIME_LOCAL_FORMAT)


def format_timestamp_for_display(timestamp_ms: int) -> str:
    """Format epoch milliseconds for display as ``DD/MM/YYYY HH:MM`` local time."""
    return timestamp_ms_to_datetime(timestamp_ms, tz=None).strftime(DISPLAY_FORMAT)


def is_future_timestamp(timestamp_ms: int, now: Optional[int] = None) -> bool:
    """True if the timestamp is strictly after now."""
    if now is None:
        now = now_ms()
    return timestamp_ms > now


def create_future_timestamp(days_from_now: int = 7, now: Optional[int] = None) -> int:
    """Timestamp a number of days after now, the default deadline for new actions."""
    if now is None:
        now = now_ms()
    return now + days_from_now * 24 * 60 * 60 * 1000
