from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..common.datetime_utils import day_bounds, ensure_utc, local_date, minutes_between, utc_now
from ..compliance.engine import evaluate_day
from ..core.constants import RECENT_ENTRIES_LIMIT
from ..core.enums import ClockState, EntryKind
from ..core.exceptions import ResourceNotFoundError
from ..employee_config.service import EmployeeConfigService
from ..time_entries.intervals import Interval, pair_intervals
from ..time_entries.repository import TimeEntryRepository
from ..users.repository import DirectoryRepository
from .model import TrackingStatus

_STATE_BY_LAST_KIND = {
    None: ClockState.CLOCKED_OUT,
    EntryKind.CLOCK_OUT: ClockState.CLOCKED_OUT,
    EntryKind.CLOCK_IN: ClockState.CLOCKED_IN,
    EntryKind.BREAK_END: ClockState.CLOCKED_IN,
    EntryKind.BREAK_START: ClockState.ON_BREAK,
}


def resolve_state(last_kind: Optional[EntryKind]) -> ClockState:
    """Clock state implied by the kind of the most recent entry."""
    return _STATE_BY_LAST_KIND[last_kind]


def _clip(intervals: Iterable[Interval], day_start: datetime) -> List[Interval]:
    """Drop what lies before day_start; trim intervals that straddle it."""
    return [(max(start, day_start), end) for start, end in intervals if end > day_start]


class StatusResolver:
    """Live clock status of a user, computed from raw entries (never the cache)."""

    def __init__(self, entries: TimeEntryRepository, directory: DirectoryRepository, configs: EmployeeConfigService):
        self._entries = entries
        self._directory = directory
        self._configs = configs

    def _open_clock_in(self, user_id: int) -> Optional[datetime]:
        for entry in self._entries.recent_for_user(int(user_id), RECENT_ENTRIES_LIMIT):
            if entry.kind == EntryKind.CLOCK_OUT:
                return None
            if entry.kind == EntryKind.CLOCK_IN:
                return entry.timestamp
        return None

    def get_status(self, user_id: int, *, now: Optional[datetime] = None) -> TrackingStatus:
        if not self._directory.find_user(int(user_id)):
            raise ResourceNotFoundError(f"User not found: {user_id}")

        now = ensure_utc(now) if now else utc_now()
        last = self._entries.most_recent_for_user(int(user_id))
        state = resolve_state(last.kind if last else None)

        clocked_in_since = self._open_clock_in(user_id) if state != ClockState.CLOCKED_OUT else None
        break_started_at = last.timestamp if state == ClockState.ON_BREAK else None

        elapsed_work = 0
        if state == ClockState.CLOCKED_IN and clocked_in_since is not None:
            elapsed_work = max(0, minutes_between(clocked_in_since, now))
        elapsed_break = 0
        if break_started_at is not None:
            elapsed_break = max(0, minutes_between(break_started_at, now))

        tz_name = self._configs.timezone_for(user_id)
        day_start, day_end = day_bounds(local_date(now, tz_name), tz_name)
        window_start = day_start
        if clocked_in_since is not None and clocked_in_since < day_start:
            # pair from the session start so breaks open at midnight carry over
            window_start = clocked_in_since
        intervals = pair_intervals(self._entries.in_range(int(user_id), window_start, day_end))

        clock = _clip(intervals.clock_intervals, day_start)
        breaks = _clip(intervals.break_intervals, day_start)
        if intervals.open_clock_in is not None:
            clock.append((max(intervals.open_clock_in, day_start), now))
            if intervals.open_break_start is not None:
                breaks.append((max(intervals.open_break_start, day_start), now))

        today = evaluate_day(clock, breaks, 0)
        return TrackingStatus(
            state=state,
            clocked_in_since=clocked_in_since,
            break_started_at=break_started_at,
            elapsed_work_minutes=elapsed_work,
            elapsed_break_minutes=elapsed_break,
            today_work_minutes=max(0, today.total_work_minutes),
            today_break_minutes=today.total_break_minutes,
        )

    def get_statuses(self, user_ids: Iterable[int], *, now: Optional[datetime] = None) -> Dict[int, TrackingStatus]:
        now = ensure_utc(now) if now else utc_now()
        return {int(uid): self.get_status(uid, now=now) for uid in user_ids}
