"""Regulatory check for a single working day.

Everything here is pure: intervals and a target go in, a ComplianceResult comes
out. Intervals must be closed; open ones are filtered out by the caller.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_between
from ..time_entries.intervals import Interval
from .model import ComplianceResult
from .rules import ComplianceRules


def _overlap_minutes(brk: Interval, clock: Interval) -> int:
    start = max(brk[0], clock[0])
    end = min(brk[1], clock[1])
    if end <= start:
        return 0
    return minutes_between(start, end)


def _fmt_hours(minutes: int) -> str:
    hours, rest = divmod(int(minutes), 60)
    return f"{hours} hours" if not rest else f"{hours}h{rest:02d}"


def required_break_minutes(work_minutes: int, rules: ComplianceRules = ComplianceRules()) -> int:
    if work_minutes > rules.extended_break_threshold_minutes:
        return rules.extended_required_break_minutes
    if work_minutes > rules.break_threshold_minutes:
        return rules.required_break_minutes
    return 0


def evaluate_day(
    clock_intervals: Sequence[Interval],
    break_intervals: Sequence[Interval],
    daily_target_minutes: int,
    rules: ComplianceRules = ComplianceRules(),
) -> ComplianceResult:
    gross_minutes = sum(max(0, minutes_between(start, end)) for start, end in clock_intervals)

    break_minutes = 0
    qualifying_minutes = 0
    for brk in break_intervals:
        # only the part of a break that lies inside a worked interval counts
        inside = sum(_overlap_minutes(brk, clock) for clock in clock_intervals)
        break_minutes += inside
        if inside >= rules.min_qualifying_break_minutes:
            qualifying_minutes += inside

    work_minutes = gross_minutes - break_minutes
    notes: list[str] = []
    warnings: list[str] = []

    if work_minutes > rules.max_daily_work_minutes:
        notes.append(
            f"§3 ArbZG: Maximum work time of {_fmt_hours(rules.max_daily_work_minutes)} exceeded "
            f"(worked {work_minutes} min)"
        )
    elif work_minutes > rules.regular_daily_work_minutes:
        warnings.append(
            f"§3 ArbZG: Regular {_fmt_hours(rules.regular_daily_work_minutes)} limit exceeded "
            f"(worked {work_minutes} min); ensure 6-month average compliance"
        )

    required = required_break_minutes(work_minutes, rules)
    if required > 0 and qualifying_minutes < required:
        notes.append(
            f"§4 ArbZG: Insufficient break time ({qualifying_minutes} min taken, "
            f"{required} min required for {work_minutes} min of work)"
        )

    return ComplianceResult(
        total_work_minutes=work_minutes,
        total_break_minutes=break_minutes,
        overtime_minutes=work_minutes - int(daily_target_minutes),
        qualifying_break_minutes=qualifying_minutes,
        notes=notes,
        warnings=warnings,
    )


def check_rest_period(
    previous_end: Optional[datetime],
    next_start: Optional[datetime],
    rules: ComplianceRules = ComplianceRules(),
) -> bool:
    """§5 ArbZG: minimum uninterrupted rest between two working days."""
    if previous_end is None or next_start is None:
        return True
    return minutes_between(previous_end, next_start) >= rules.min_rest_minutes
