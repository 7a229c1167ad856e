"""
Session Clock.

Trading sessions begin at a configured local hour (17:00 for the CME
Globex session in Central time). The session start is derived from the
wall clock on every call so a long-running process rolls into the next
session without a restart.
"""

from collections.abc import Callable
from datetime import datetime, timedelta

from .models import DayKey

# Returns the current local wall-clock time
Clock = Callable[[], datetime]


def validate_open_hour(open_hour: int) -> int:
    """Check that open_hour is an hour of the day."""
    if not 0 <= open_hour <= 23:
        raise ValueError(f"open_hour must be between 0 and 23, got {open_hour}")
    return int(open_hour)


def current_session_start(open_hour: int, now: datetime | None = None) -> datetime:
    """
    Start of the currently active trading session.

    Truncates now to the top of the hour. If the current hour is before
    open_hour the session started on the previous calendar day. When the
    current hour equals open_hour the session has already started.

    Args:
        open_hour: Local hour of the session open (0-23)
        now: Wall-clock time to evaluate (defaults to datetime.now())

    Returns:
        Datetime of the most recent session open
    """
    open_hour = validate_open_hour(open_hour)
    if now is None:
        now = datetime.now()

    start = now.replace(minute=0, second=0, microsecond=0)
    if now.hour < open_hour:
        start -= timedelta(days=1)

    return start.replace(hour=open_hour)


def day_key(timestamp: datetime) -> DayKey:
    """Calendar-day identity of a timestamp, in its own clock."""
    return DayKey(timestamp.year, timestamp.month, timestamp.day)


def is_in_current_session(
    timestamp: datetime,
    open_hour: int,
    now: datetime | None = None,
) -> bool:
    """
    Check whether a bar timestamp falls at or after the current session start.

    Aware timestamps are compared against the session start interpreted
    in the machine's local zone.
    """
    start = current_session_start(open_hour, now)
    if timestamp.tzinfo is not None and start.tzinfo is None:
        start = start.astimezone()
    elif timestamp.tzinfo is None and start.tzinfo is not None:
        timestamp = timestamp.replace(tzinfo=start.tzinfo)
    return timestamp >= start
