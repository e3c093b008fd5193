# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime helpers.

Every datetime handled by the decision core is timezone-aware UTC so that
turn timestamps and session start times from different sources compare
safely. Functions that depend on "now" accept it as a parameter and only
fall back to the wall clock when it is omitted.
"""

from datetime import datetime, timedelta, timezone
from typing import Literal

TimeOfDay = Literal["morning", "afternoon", "evening"]


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Naive datetimes are assumed to already be in UTC.

    Example:
        >>> ensure_utc(datetime(2025, 1, 1, 9, 0)).tzinfo
        datetime.timezone.utc
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def days_before(days: int, now: datetime | None = None) -> datetime:
    """The instant ``days`` days before ``now`` (default: current time)."""
    reference = ensure_utc(now) if now is not None else utc_now()
    return reference - timedelta(days=days)


def millis_between(start: datetime, end: datetime) -> float:
    """Milliseconds from ``start`` to ``end`` (negative if end is earlier)."""
    return (end - start).total_seconds() * 1000.0


def time_of_day(dt: datetime | None = None) -> TimeOfDay:
    """Bucket an hour into morning (<12), afternoon (<18) or evening."""
    hour = (dt or utc_now()).hour
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    return "evening"
