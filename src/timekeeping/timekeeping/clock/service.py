from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Tuple

import structlog

from ..audit.recorder import AuditRecorder
from ..common.datetime_utils import ensure_utc, utc_now
from ..core.enums import AuditAction, ClockState, EntryKind, EntrySource
from ..core.exceptions import ConflictError, ResourceNotFoundError
from ..status.service import resolve_state
from ..summaries.service import DailySummaryService
from ..time_entries.locks import InProcessUserLocks, UserLocks
from ..time_entries.model import TimeEntry
from ..time_entries.repository import TimeEntryRepository
from ..users.repository import DirectoryRepository

logger = structlog.get_logger(__name__)

# action -> (state it is valid from, error message for each invalid state)
TRANSITIONS: Dict[EntryKind, Tuple[ClockState, Dict[ClockState, str]]] = {
    EntryKind.CLOCK_IN: (
        ClockState.CLOCKED_OUT,
        {
            ClockState.ON_BREAK: "Cannot clock in while on break",
            ClockState.CLOCKED_IN: "Already clocked in",
        },
    ),
    EntryKind.CLOCK_OUT: (
        ClockState.CLOCKED_IN,
        {
            ClockState.ON_BREAK: "Cannot clock out while on break",
            ClockState.CLOCKED_OUT: "Not clocked in",
        },
    ),
    EntryKind.BREAK_START: (
        ClockState.CLOCKED_IN,
        {
            ClockState.ON_BREAK: "Must be clocked in to start a break (already on break)",
            ClockState.CLOCKED_OUT: "Must be clocked in to start a break",
        },
    ),
    EntryKind.BREAK_END: (
        ClockState.ON_BREAK,
        {
            ClockState.CLOCKED_IN: "Not on break",
            ClockState.CLOCKED_OUT: "Not on break",
        },
    ),
}


def check_transition(kind: EntryKind, current: ClockState) -> None:
    """Raise ConflictError unless `kind` may follow the current state."""
    valid_from, errors = TRANSITIONS[kind]
    if current != valid_from:
        raise ConflictError(errors.get(current, f"{kind.value} is not allowed while {current.value}"))


class ClockService:
    """Use case: self-service clock actions (clock in/out, breaks)."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        directory: DirectoryRepository,
        summaries: DailySummaryService,
        audit: AuditRecorder,
        *,
        locks: Optional[UserLocks] = None,
    ):
        self._entries = entries
        self._directory = directory
        self._summaries = summaries
        self._audit = audit
        self._locks = locks or InProcessUserLocks()

    def clock_in(
        self,
        user_id: int,
        source: EntrySource = EntrySource.WEB,
        *,
        terminal_id: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        return self._record(user_id, EntryKind.CLOCK_IN, source, terminal_id=terminal_id, notes=notes, now=now)

    def clock_out(
        self,
        user_id: int,
        source: EntrySource = EntrySource.WEB,
        *,
        terminal_id: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        return self._record(user_id, EntryKind.CLOCK_OUT, source, terminal_id=terminal_id, notes=notes, now=now)

    def start_break(
        self,
        user_id: int,
        source: EntrySource = EntrySource.WEB,
        *,
        terminal_id: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        return self._record(user_id, EntryKind.BREAK_START, source, terminal_id=terminal_id, notes=notes, now=now)

    def end_break(
        self,
        user_id: int,
        source: EntrySource = EntrySource.WEB,
        *,
        terminal_id: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        return self._record(user_id, EntryKind.BREAK_END, source, terminal_id=terminal_id, notes=notes, now=now)

    def _record(
        self,
        user_id: int,
        kind: EntryKind,
        source: EntrySource,
        *,
        terminal_id: Optional[str],
        notes: Optional[str],
        now: Optional[datetime],
    ) -> TimeEntry:
        if not self._directory.find_user(int(user_id)):
            raise ResourceNotFoundError(f"User not found: {user_id}")

        timestamp = ensure_utc(now) if now else utc_now()
        notes = (notes or "").strip() or None

        with self._locks.hold(int(user_id)):
            last = self._entries.most_recent_for_user(int(user_id))
            check_transition(kind, resolve_state(last.kind if last else None))
            if last is not None and timestamp < last.timestamp:
                raise ConflictError(
                    f"Timestamp lies before the most recent time entry ({last.kind.value} at {last.timestamp.isoformat()})"
                )

            saved = self._entries.append(
                user_id=int(user_id),
                kind=kind,
                timestamp=timestamp,
                source=source,
                terminal_id=terminal_id,
                notes=notes,
            )
            logger.info(
                kind.value.lower(),
                user_id=int(user_id),
                entry_id=saved.entry_id,
                source=source.value,
                terminal_id=terminal_id,
            )
            self._audit.record(
                actor_id=int(user_id),
                action=AuditAction(kind.value),
                entity_type="TimeEntry",
                entity_id=saved.entry_id,
                after=saved.to_dict(),
            )

            if kind == EntryKind.CLOCK_OUT:
                self._summaries.recalculate_after_write(
                    int(user_id),
                    [self._summaries.work_date_of(user_id, saved.timestamp)],
                    entry=saved,
                )
        return saved
