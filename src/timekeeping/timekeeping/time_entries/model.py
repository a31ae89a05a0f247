from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EntryKind, EntrySource


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one raw event in a user's timeline.

    `timestamp` is always an aware UTC datetime.
    """

    entry_id: int
    user_id: int
    kind: EntryKind
    timestamp: datetime
    source: EntrySource = EntrySource.WEB
    terminal_id: Optional[str] = None
    notes: Optional[str] = None
    is_modified: bool = False
    modified_by: Optional[int] = None
    created_at: Optional[datetime] = None

    def sort_key(self) -> tuple:
        return (self.timestamp, self.entry_id)

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "user_id": self.user_id,
            "entry_type": self.kind.value,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source.value,
            "terminal_id": self.terminal_id,
            "notes": self.notes,
            "is_modified": self.is_modified,
            "modified_by": self.modified_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
