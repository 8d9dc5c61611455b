"""
Timezone utilities for converting between UTC and local times.

All database timestamps are stored in UTC (timezone-naive). These utilities
help convert them to the configured display timezone.
"""

from datetime import datetime

import pytz

UTC_TZ = pytz.UTC


def utc_now() -> datetime:
    """Get current time in UTC, timezone-naive for database storage."""
    return datetime.now(UTC_TZ).replace(tzinfo=None)


def from_utc(utc_dt: datetime, timezone: str = "UTC") -> datetime:
    """
    Convert a UTC datetime to local timezone.

    Args:
        utc_dt: Datetime in UTC (can be naive or aware)
        timezone: Target timezone name

    Returns:
        Timezone-aware datetime in local timezone
    """
    tz = pytz.timezone(timezone)

    if utc_dt.tzinfo is None:
        # Naive datetime - assume it's UTC
        utc_dt = UTC_TZ.localize(utc_dt)

    return utc_dt.astimezone(tz)


def format_local_time(
    utc_dt: datetime,
    timezone: str = "UTC",
    fmt: str = "%H:%M",
) -> str:
    """Format a UTC datetime as a local time string."""
    return from_utc(utc_dt, timezone).strftime(fmt)
