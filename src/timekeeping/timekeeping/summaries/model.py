from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Sequence

from ..time_entries.model import TimeEntry


@dataclass(frozen=True)
class DailySummary:
    """Read-model: derived totals of one user's calendar day.

    Always reconstructable from that day's time entries; never edited by hand.
    """

    user_id: int
    work_date: date
    total_work_minutes: int = 0
    total_break_minutes: int = 0
    overtime_minutes: int = 0
    is_compliant: bool = True
    compliance_notes: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "total_work_minutes": self.total_work_minutes,
            "total_break_minutes": self.total_break_minutes,
            "overtime_minutes": self.overtime_minutes,
            "is_compliant": self.is_compliant,
            "compliance_notes": list(self.compliance_notes),
        }


@dataclass(frozen=True)
class TimeSheet:
    user_id: int
    start_date: date
    end_date: date
    daily_summaries: Sequence[DailySummary]
    entries: Sequence[TimeEntry]
    rest_period_violations: Sequence[date] = ()

    @property
    def total_work_minutes(self) -> int:
        return sum(s.total_work_minutes for s in self.daily_summaries)

    @property
    def total_break_minutes(self) -> int:
        return sum(s.total_break_minutes for s in self.daily_summaries)

    @property
    def total_overtime_minutes(self) -> int:
        return sum(s.overtime_minutes for s in self.daily_summaries)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "daily_summaries": [s.to_dict() for s in self.daily_summaries],
            "total_work_minutes": self.total_work_minutes,
            "total_break_minutes": self.total_break_minutes,
            "total_overtime_minutes": self.total_overtime_minutes,
            "rest_period_violations": [d.isoformat() for d in self.rest_period_violations],
            "entries": [e.to_dict() for e in self.entries],
        }
