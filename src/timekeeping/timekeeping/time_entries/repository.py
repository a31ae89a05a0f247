from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EntryKind, EntrySource
from .model import TimeEntry


class TimeEntryRepository(Protocol):
    """Append-only event store for time entries.

    Ordering everywhere is (timestamp, entry_id) ascending unless stated otherwise.
    """

    def append(
        self,
        *,
        user_id: int,
        kind: EntryKind,
        timestamp: datetime,
        source: EntrySource,
        terminal_id: Optional[str] = None,
        notes: Optional[str] = None,
        is_modified: bool = False,
        modified_by: Optional[int] = None,
    ) -> TimeEntry:
        raise NotImplementedError

    def most_recent_for_user(self, user_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def recent_for_user(self, user_id: int, limit: int) -> Sequence[TimeEntry]:
        """Newest first."""

        raise NotImplementedError

    def in_range(self, user_id: int, start: datetime, end: datetime) -> Sequence[TimeEntry]:
        """Entries with start <= timestamp < end."""

        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def update(
        self,
        *,
        entry_id: int,
        timestamp: datetime,
        notes: Optional[str],
        modified_by: int,
    ) -> Optional[TimeEntry]:
        """Manual edit; marks the entry modified."""

        raise NotImplementedError

    def delete(self, entry_id: int) -> bool:
        raise NotImplementedError
