# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities.

All timestamps are stored and compared as timezone-aware UTC datetimes.
Local-time bucketing (hour of day, weekday) goes through to_local() with an
explicit zone so the analysis engine never depends on the host clock.

Usage:
    from emoreg.utils.datetime import utc_now, ensure_utc

    # For SQLAlchemy model defaults
    timestamp = mapped_column(DateTime(timezone=True), default=utc_now)

    # For Pydantic model defaults
    timestamp: datetime = Field(default_factory=utc_now)
"""

from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def days_ago(days: int, now: datetime | None = None) -> datetime:
    """Get a datetime N days before now (or before the given reference)."""
    return (now or utc_now()) - timedelta(days=days)


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve an IANA zone name, falling back to UTC.

    Args:
        name: Zone name such as "Europe/London". None or "UTC" gives UTC.

    Returns:
        A tzinfo instance.

    Raises:
        ValueError: If the name is not a known zone.
    """
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def to_local(dt: datetime, tz: tzinfo) -> datetime:
    """Convert a (possibly naive) datetime to the given zone."""
    return ensure_utc(dt).astimezone(tz)


def utc_date_key(dt: datetime) -> str:
    """Format the UTC calendar date of a datetime as YYYY-MM-DD."""
    return ensure_utc(dt).strftime("%Y-%m-%d")


def format_iso(dt: datetime | None) -> str | None:
    """Format a datetime as an ISO 8601 UTC string."""
    if dt is None:
        return None
    return ensure_utc(dt).isoformat()


def parse_iso(iso_string: str | None) -> datetime | None:
    """Parse an ISO 8601 datetime string (a trailing "Z" is accepted).

    Returns:
        Timezone-aware UTC datetime or None.
    """
    if iso_string is None:
        return None

    dt = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    return ensure_utc(dt)
