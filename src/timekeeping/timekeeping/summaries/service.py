from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

import structlog

from ..common.datetime_utils import day_bounds, local_date
from ..common.validators import require_date_range
from ..compliance.engine import check_rest_period, evaluate_day
from ..compliance.rules import ComplianceRules
from ..core.constants import MAX_TIMESHEET_DAYS
from ..core.exceptions import RecalculationError, ResourceNotFoundError
from ..employee_config.service import EmployeeConfigService
from ..time_entries.intervals import Interval, pair_intervals
from ..time_entries.model import TimeEntry
from ..time_entries.repository import TimeEntryRepository
from ..users.repository import DirectoryRepository
from .model import DailySummary, TimeSheet
from .repository import DailySummaryRepository

logger = structlog.get_logger(__name__)


class DailySummaryService:
    """Rebuilds and serves the per-day read-model.

    Every mutation of a user's timeline ends in `recalculate` for the affected
    date(s); nothing else writes summaries.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        summaries: DailySummaryRepository,
        directory: DirectoryRepository,
        configs: EmployeeConfigService,
        *,
        rules: Optional[ComplianceRules] = None,
    ):
        self._entries = entries
        self._summaries = summaries
        self._directory = directory
        self._configs = configs
        self._rules = rules or ComplianceRules()

    @property
    def rules(self) -> ComplianceRules:
        return self._rules

    def _require_user(self, user_id: int) -> None:
        if not self._directory.find_user(int(user_id)):
            raise ResourceNotFoundError(f"User not found: {user_id}")

    def work_date_of(self, user_id: int, timestamp: datetime) -> date:
        """Calendar date of an instant in the user's reference timezone."""
        return local_date(timestamp, self._configs.timezone_for(user_id))

    def recalculate(self, user_id: int, work_date: date) -> DailySummary:
        self._require_user(user_id)

        start, end = day_bounds(work_date, self._configs.timezone_for(user_id))
        intervals = pair_intervals(self._entries.in_range(int(user_id), start, end))
        target = self._configs.daily_target_minutes(user_id)

        result = evaluate_day(intervals.clock_intervals, intervals.break_intervals, target, self._rules)
        summary = DailySummary(
            user_id=int(user_id),
            work_date=work_date,
            total_work_minutes=result.total_work_minutes,
            total_break_minutes=result.total_break_minutes,
            overtime_minutes=result.overtime_minutes,
            is_compliant=result.is_compliant,
            compliance_notes=list(result.notes),
        )
        saved = self._summaries.upsert(summary)

        logger.info(
            "summary_recalculated",
            user_id=int(user_id),
            work_date=work_date.isoformat(),
            work_minutes=summary.total_work_minutes,
            break_minutes=summary.total_break_minutes,
            overtime_minutes=summary.overtime_minutes,
            compliant=summary.is_compliant,
        )
        for warning in result.warnings:
            logger.warning("compliance_warning", user_id=int(user_id), work_date=work_date.isoformat(), warning=warning)
        return saved

    def recalculate_after_write(self, user_id: int, work_dates: Iterable[date], *, entry: Any = None) -> None:
        """Rebuild the given dates after a timeline write.

        The write is already persisted; a failure here is reported as
        RecalculationError and never undoes it.
        """
        for work_date in sorted(set(work_dates)):
            try:
                self.recalculate(user_id, work_date)
            except Exception as e:
                logger.error(
                    "recalculation_failed",
                    user_id=int(user_id),
                    work_date=work_date.isoformat(),
                    error=str(e),
                )
                raise RecalculationError(
                    f"Time entry saved but the daily summary for {work_date.isoformat()} could not be rebuilt",
                    entry=entry,
                ) from e

    def get_daily_summary(self, user_id: int, work_date: date) -> DailySummary:
        summary = self._summaries.find(int(user_id), work_date)
        if summary is None:
            return self.recalculate(user_id, work_date)
        return summary

    def get_time_sheet(self, user_id: int, start_date: date, end_date: date) -> TimeSheet:
        require_date_range(start_date, end_date, max_days=MAX_TIMESHEET_DAYS)
        self._require_user(user_id)

        tz_name = self._configs.timezone_for(user_id)
        range_start, _ = day_bounds(start_date, tz_name)
        _, range_end = day_bounds(end_date, tz_name)

        summaries = self._summaries.list_between(int(user_id), start_date, end_date)
        entries = self._entries.in_range(int(user_id), range_start, range_end)

        return TimeSheet(
            user_id=int(user_id),
            start_date=start_date,
            end_date=end_date,
            daily_summaries=list(summaries),
            entries=list(entries),
            rest_period_violations=self._rest_period_violations(entries, tz_name),
        )

    def _rest_period_violations(self, entries: Sequence[TimeEntry], tz_name: str) -> List[date]:
        # closed sessions only, each belongs to the local day it started on
        sessions_by_day: Dict[date, List[Interval]] = {}
        for start, end in pair_intervals(entries).clock_intervals:
            sessions_by_day.setdefault(local_date(start, tz_name), []).append((start, end))

        violations: List[date] = []
        days = sorted(sessions_by_day)
        for previous, current in zip(days, days[1:]):
            previous_end = max(end for _, end in sessions_by_day[previous])
            current_start = min(start for start, _ in sessions_by_day[current])
            if not check_rest_period(previous_end, current_start, self._rules):
                violations.append(current)
        return violations
