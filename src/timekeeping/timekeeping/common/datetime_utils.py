from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Tuple

import pytz

from ..core.exceptions import BadRequestError


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.UTC)


def ensure_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=pytz.UTC)
    return value.astimezone(pytz.UTC)


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetime -> naive UTC, the form stored in DATETIME columns."""
    return ensure_utc(value).replace(tzinfo=None)


def local_date(value: datetime, timezone_str: str) -> date:
    """Calendar date of an instant in the given timezone."""
    tz = pytz.timezone(timezone_str)
    return ensure_utc(value).astimezone(tz).date()


def day_bounds(day: date, timezone_str: str) -> Tuple[datetime, datetime]:
    """[start_of_day, start_of_next_day) of a local calendar date, in UTC."""
    tz = pytz.timezone(timezone_str)
    start = tz.localize(datetime.combine(day, time.min))
    end = tz.localize(datetime.combine(day + timedelta(days=1), time.min))
    return start.astimezone(pytz.UTC), end.astimezone(pytz.UTC)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, truncated."""
    return int((end - start).total_seconds() // 60)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise BadRequestError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 instant into aware UTC (a trailing 'Z' is accepted)."""
    raw = str(value or "").strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(raw))
    except ValueError:
        raise BadRequestError(f"Invalid timestamp (expected ISO-8601): {value!r}")


def week_range(week_start: date) -> Tuple[date, date]:
    return week_start, week_start + timedelta(days=6)


def month_range(year: int, month: int) -> Tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise BadRequestError(f"Invalid month: {month}")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)
