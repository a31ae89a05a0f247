from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..common.validators import require_instant_range
from ..core.constants import RECENT_ENTRIES_LIMIT
from ..core.exceptions import ResourceNotFoundError
from ..users.repository import DirectoryRepository
from .model import TimeEntry
from .repository import TimeEntryRepository


class TimeEntryService:
    """Read side of a user's own timeline."""

    def __init__(self, entries: TimeEntryRepository, directory: DirectoryRepository):
        self._entries = entries
        self._directory = directory

    def get_entries_for_user(self, user_id: int, start: datetime, end: datetime) -> Sequence[TimeEntry]:
        require_instant_range(start, end)
        if not self._directory.find_user(int(user_id)):
            raise ResourceNotFoundError(f"User not found: {user_id}")
        return self._entries.in_range(int(user_id), start, end)

    def recent_entries(self, user_id: int, limit: int = RECENT_ENTRIES_LIMIT) -> Sequence[TimeEntry]:
        return self._entries.recent_for_user(int(user_id), max(1, min(int(limit), RECENT_ENTRIES_LIMIT)))
