"""
Wall-clock timestamp codec.

Entries store times as 12-hour strings such as "9:05:03 AM", the same
convention as the segment's h:mm:ss AM/PM number format, so values read
back from the store parse with the same rules that wrote them.
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 3600

_WALL_CLOCK_PATTERN = re.compile(
    r'^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])\s*$'
)


class TimestampFormatError(ValueError):
    """Raised when a wall-clock string does not follow the h:mm:ss AM/PM convention."""
    pass


@dataclass(frozen=True)
class Duration:
    """Non-negative elapsed time split into components."""

    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_seconds(cls, total_seconds: int) -> 'Duration':
        hours, remainder = divmod(int(total_seconds), 3600)
        minutes, seconds = divmod(remainder, 60)
        return cls(hours, minutes, seconds)

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def __str__(self) -> str:
        return f'{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}'


def apply_timezone(instant: datetime, timezone_name: Optional[str]) -> datetime:
    """
    Convert an instant to civil time in the named timezone.

    Naive instants are taken to be UTC. An empty name or 'UTC' returns the
    instant unchanged, and so does an unknown name (with a warning) so that
    a bad Timezone setting never fails a start or stop.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    if not timezone_name or timezone_name == 'UTC':
        return instant

    try:
        return instant.astimezone(ZoneInfo(timezone_name))
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.warning(f"Unsupported timezone {timezone_name!r}, keeping UTC: {e}")
        return instant


def calendar_date(instant: datetime) -> str:
    return instant.date().isoformat()


def format_instant(instant: datetime, timezone_name: Optional[str] = None) -> str:
    """
    Render the wall-clock part of an instant as h:mm:ss AM/PM.

    Examples:
        >>> format_instant(datetime(2024, 1, 15, 0, 5, 9))
        '12:05:09 AM'
        >>> format_instant(datetime(2024, 1, 15, 13, 30, 0))
        '1:30:00 PM'
    """
    if timezone_name:
        instant = apply_timezone(instant, timezone_name)

    hour = instant.hour % 12 or 12
    marker = 'AM' if instant.hour < 12 else 'PM'
    return f'{hour}:{instant.minute:02d}:{instant.second:02d} {marker}'


def parse_wall_clock(text: str) -> int:
    """
    Parse an h:mm:ss AM/PM string into seconds since midnight.

    Seconds may be omitted and the hour may carry a leading zero.

    Raises:
        TimestampFormatError: If the text is not a valid 12-hour time
    """
    match = _WALL_CLOCK_PATTERN.match(text or '')
    if not match:
        raise TimestampFormatError(f"Invalid wall-clock time: {text!r}")

    hours, minutes, seconds, marker = match.groups()
    hour = int(hours)
    minute = int(minutes)
    second = int(seconds or 0)
    if not 1 <= hour <= 12 or minute > 59 or second > 59:
        raise TimestampFormatError(f"Invalid wall-clock time: {text!r}")

    hour %= 12
    if marker.upper() == 'PM':
        hour += 12
    return hour * 3600 + minute * 60 + second


def duration_between(start: str, end: str) -> Duration:
    """
    Elapsed time from start to end, both wall-clock strings of the same entry.

    An end earlier than start is taken to be on the following day, so a
    session crossing midnight yields its real length instead of a negative
    value. Sessions longer than 24 hours cannot be represented.

    Examples:
        >>> str(duration_between('9:00:00 AM', '10:15:30 AM'))
        '01:15:30'
        >>> str(duration_between('11:00:00 PM', '1:30:00 AM'))
        '02:30:00'
    """
    elapsed = parse_wall_clock(end) - parse_wall_clock(start)
    if elapsed < 0:
        elapsed += SECONDS_PER_DAY
    return Duration.from_seconds(elapsed)
