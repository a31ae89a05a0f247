from __future__ import annotations

from datetime import datetime
from typing import Optional

import structlog

from ..audit.recorder import AuditRecorder
from ..authorization.guards import require_can_manage
from ..common.datetime_utils import ensure_utc, utc_now
from ..common.validators import require_non_empty
from ..core.enums import AuditAction, EntryKind, EntrySource
from ..core.exceptions import BadRequestError, ResourceNotFoundError
from ..summaries.service import DailySummaryService
from ..time_entries.locks import InProcessUserLocks, UserLocks
from ..time_entries.model import TimeEntry
from ..time_entries.repository import TimeEntryRepository
from ..users.repository import DirectoryRepository

logger = structlog.get_logger(__name__)

ENTITY_TYPE = "TimeEntry"


class ManualCorrectionService:
    """Manager-initiated add/edit/delete of time entries.

    Manual entries bypass the clock state machine so broken sequences can be
    repaired; every change is audited with its reason and the affected days are
    recomputed.
    """

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

    def add_manual_entry(
        self,
        actor_id: int,
        target_user_id: int,
        kind: EntryKind,
        timestamp: datetime,
        reason: str,
        *,
        notes: Optional[str] = None,
    ) -> TimeEntry:
        reason = require_non_empty(reason, "reason")
        timestamp = _past_instant(timestamp)
        require_can_manage(self._directory, actor_id, target_user_id)

        with self._locks.hold(int(target_user_id)):
            saved = self._entries.append(
                user_id=int(target_user_id),
                kind=EntryKind(kind),
                timestamp=timestamp,
                source=EntrySource.MANUAL,
                notes=(notes or "").strip() or None,
                is_modified=True,
                modified_by=int(actor_id),
            )
            logger.info(
                "manual_entry_added",
                actor_id=int(actor_id),
                user_id=int(target_user_id),
                entry_id=saved.entry_id,
                kind=saved.kind.value,
            )
            self._audit.record(
                actor_id=actor_id,
                action=AuditAction.MANUAL_TIME_ENTRY,
                entity_type=ENTITY_TYPE,
                entity_id=saved.entry_id,
                after=saved.to_dict(),
                reason=reason,
            )
            self._summaries.recalculate_after_write(
                target_user_id,
                [self._summaries.work_date_of(target_user_id, saved.timestamp)],
                entry=saved,
            )
        return saved

    def edit_time_entry(
        self,
        actor_id: int,
        entry_id: int,
        *,
        timestamp: Optional[datetime] = None,
        notes: Optional[str] = None,
        reason: str,
    ) -> TimeEntry:
        reason = require_non_empty(reason, "reason")
        if timestamp is None and notes is None:
            raise BadRequestError("Nothing to change: provide a new timestamp or notes")
        if timestamp is not None:
            timestamp = _past_instant(timestamp)

        existing = self._require_entry(entry_id)
        require_can_manage(self._directory, actor_id, existing.user_id)

        with self._locks.hold(existing.user_id):
            # re-read under the lock, the entry may have changed meanwhile
            before = self._require_entry(entry_id)
            updated = self._entries.update(
                entry_id=before.entry_id,
                timestamp=timestamp if timestamp is not None else before.timestamp,
                notes=notes if notes is not None else before.notes,
                modified_by=int(actor_id),
            )
            if updated is None:
                raise ResourceNotFoundError(f"Time entry not found: {entry_id}")

            logger.info(
                "time_entry_edited",
                actor_id=int(actor_id),
                user_id=updated.user_id,
                entry_id=updated.entry_id,
                moved=updated.timestamp != before.timestamp,
            )
            self._audit.record(
                actor_id=actor_id,
                action=AuditAction.TIME_ENTRY_EDITED,
                entity_type=ENTITY_TYPE,
                entity_id=updated.entry_id,
                before=before.to_dict(),
                after=updated.to_dict(),
                reason=reason,
            )
            self._summaries.recalculate_after_write(
                updated.user_id,
                [
                    self._summaries.work_date_of(updated.user_id, before.timestamp),
                    self._summaries.work_date_of(updated.user_id, updated.timestamp),
                ],
                entry=updated,
            )
        return updated

    def delete_time_entry(self, actor_id: int, entry_id: int, reason: str) -> TimeEntry:
        reason = require_non_empty(reason, "reason")

        existing = self._require_entry(entry_id)
        require_can_manage(self._directory, actor_id, existing.user_id)

        with self._locks.hold(existing.user_id):
            before = self._require_entry(entry_id)
            if not self._entries.delete(before.entry_id):
                raise ResourceNotFoundError(f"Time entry not found: {entry_id}")

            logger.info("time_entry_deleted", actor_id=int(actor_id), user_id=before.user_id, entry_id=before.entry_id)
            self._audit.record(
                actor_id=actor_id,
                action=AuditAction.TIME_ENTRY_DELETED,
                entity_type=ENTITY_TYPE,
                entity_id=before.entry_id,
                before=before.to_dict(),
                reason=reason,
            )
            self._summaries.recalculate_after_write(
                before.user_id,
                [self._summaries.work_date_of(before.user_id, before.timestamp)],
                entry=before,
            )
        return before

    def _require_entry(self, entry_id: int) -> TimeEntry:
        entry = self._entries.get_by_id(int(entry_id))
        if entry is None:
            raise ResourceNotFoundError(f"Time entry not found: {entry_id}")
        return entry


def _past_instant(timestamp: datetime) -> datetime:
    timestamp = ensure_utc(timestamp)
    if timestamp > utc_now():
        raise BadRequestError("Time entries cannot lie in the future")
    return timestamp
