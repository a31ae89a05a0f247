from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import BadRequestError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise BadRequestError(f"{field_name} must not be empty")
    return value.strip()


def require_date_range(start: date, end: date, *, max_days: int) -> None:
    if start > end:
        raise BadRequestError("Start date must not be after end date")
    if (end - start).days + 1 > max_days:
        raise BadRequestError(f"Date range must not exceed {max_days} days")


def require_instant_range(start: datetime, end: datetime) -> None:
    if start >= end:
        raise BadRequestError("Range start must be before range end")
