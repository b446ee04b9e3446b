"""Conversions between the timetable provider's civil time and absolute instants.

The DB Timetables API speaks Europe/Berlin wall-clock time without any offset
indicator: timestamps look like ``2506071430`` (YYMMDDHHMM) and timetable
slots are addressed by a ``YYMMDD`` date plus an ``HH`` hour. Everything else
in the code base works with timezone-aware UTC instants, so all civil-time
arithmetic lives in this module.
"""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

PROVIDER_TIMEZONE = ZoneInfo("Europe/Berlin")

PROVIDER_TIMESTAMP_LENGTH = 10


def parse_provider_timestamp(
    value: str | None, timezone: ZoneInfo = PROVIDER_TIMEZONE
) -> datetime | None:
    """Parse a provider timestamp (``YYMMDDHHMM``) into a UTC instant.

    The UTC offset is taken for the moment the timestamp describes, so a
    summer timestamp parsed in winter still gets the summer offset.

    Args:
        value: Ten-digit local timestamp, e.g. ``"2506071430"``.
        timezone: Civil timezone the timestamp is expressed in.

    Returns:
        Aware UTC datetime, or None if the value is malformed.
    """
    if not value or len(value) != PROVIDER_TIMESTAMP_LENGTH or not value.isdigit():
        return None

    try:
        local = datetime(
            2000 + int(value[0:2]),
            int(value[2:4]),
            int(value[4:6]),
            int(value[6:8]),
            int(value[8:10]),
            tzinfo=timezone,
        )
    except ValueError:
        return None

    return local.astimezone(UTC)


def to_civil_hour(instant: datetime, timezone: ZoneInfo = PROVIDER_TIMEZONE) -> tuple[date, int]:
    """Return the civil (date, hour) an instant falls into."""
    local = instant.astimezone(timezone)
    return local.date(), local.hour


def civil_hour_start(
    civil_date: date, hour: int, timezone: ZoneInfo = PROVIDER_TIMEZONE
) -> datetime:
    """Return the UTC instant at which a civil hour begins."""
    local = datetime(civil_date.year, civil_date.month, civil_date.day, hour, tzinfo=timezone)
    return local.astimezone(UTC)


def next_civil_hour(civil_date: date, hour: int) -> tuple[date, int]:
    """Return the civil hour after the given one, rolling over midnight."""
    if hour >= 23:
        return civil_date + timedelta(days=1), 0
    return civil_date, hour + 1


def format_provider_date(civil_date: date) -> str:
    """Format a civil date as the provider's ``YYMMDD`` path segment."""
    return civil_date.strftime("%y%m%d")


def format_provider_hour(hour: int) -> str:
    """Format an hour as the provider's two-digit ``HH`` path segment."""
    return f"{hour:02d}"


def minutes_between(start: datetime, end: datetime) -> float:
    """Minutes from start to end, wrapping past midnight when negative."""
    diff = (end - start).total_seconds() / 60
    if diff < 0:
        diff += 24 * 60
    return diff


def truncate_to_hour(instant: datetime) -> datetime:
    """Drop minutes, seconds and microseconds from an instant."""
    return instant.replace(minute=0, second=0, microsecond=0)
