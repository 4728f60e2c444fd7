"""Time utilities pinned to the fixed civil timezone (UTC+7).

All "today" and cutoff computations go through this module so that the
result never depends on the host's local timezone.
"""
import time
from datetime import datetime, timedelta, timezone

from .errors import ValidationError

LOCAL_TZ = timezone(timedelta(hours=7), "UTC+7")
DAY_MS = 24 * 60 * 60 * 1000


def now_ms() -> int:
    """Get current timestamp in milliseconds."""
    return int(time.time() * 1000)


def to_local(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware datetime in UTC+7."""
    return datetime.fromtimestamp(ms / 1000, tz=LOCAL_TZ)


def to_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are UTC+7)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=LOCAL_TZ)
    return int(dt.timestamp() * 1000)


def day_bounds_ms(current_ms: int | None = None) -> tuple[int, int]:
    """Compute the inclusive start and end of the civil day containing current_ms.

    Args:
        current_ms: Reference timestamp in ms (defaults to now)

    Returns:
        (start_ms, end_ms) where end_ms is 23:59:59.999 of the same day
    """
    if current_ms is None:
        current_ms = now_ms()

    local = to_local(current_ms)
    start = local.replace(hour=0, minute=0, second=0, microsecond=0)
    start_ms = to_ms(start)
    return start_ms, start_ms + DAY_MS - 1


def same_local_day(a_ms: int, b_ms: int) -> bool:
    """Check whether two instants fall on the same UTC+7 calendar day."""
    return to_local(a_ms).date() == to_local(b_ms).date()


def is_past_cutoff(current_ms: int, hour: int, minute: int = 0) -> bool:
    """Check whether the UTC+7 wall-clock time is at or after hour:minute."""
    local = to_local(current_ms)
    return (local.hour, local.minute) >= (hour, minute)


def format_display_time(ms: int) -> str:
    """Format a timestamp as a 12-hour clock time, e.g. '08:30 PM'."""
    return to_local(ms).strftime("%I:%M %p")


def format_full_date(ms: int) -> str:
    """Format a timestamp as a long date, e.g. 'Monday, October 19, 2026'."""
    local = to_local(ms)
    return f"{local:%A, %B} {local.day}, {local.year}"


def format_iso(ms: int) -> str:
    """Format a timestamp as ISO-8601 with the +07:00 offset."""
    return to_local(ms).isoformat(timespec="milliseconds")


def parse_timestamp(value: str) -> int:
    """Parse an ISO-8601 timestamp into epoch milliseconds.

    A value without an offset is taken as UTC+7 wall-clock time. A trailing
    'Z' is accepted as UTC.

    Raises:
        ValidationError: If the value is not a valid timestamp
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(text)
        ms = to_ms(dt)
        # must stay representable once shifted to UTC+7
        to_local(ms)
    except (ValueError, OverflowError, OSError):
        raise ValidationError(f"Invalid time value: {value!r}")

    return ms
