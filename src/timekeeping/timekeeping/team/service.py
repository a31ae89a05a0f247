from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..authorization.guards import require_can_manage
from ..common.validators import require_instant_range
from ..core.exceptions import ResourceNotFoundError
from ..status.model import TrackingStatus
from ..status.service import StatusResolver
from ..time_entries.model import TimeEntry
from ..time_entries.repository import TimeEntryRepository
from ..users.repository import DirectoryRepository


class TeamStatusService:
    def __init__(self, directory: DirectoryRepository, entries: TimeEntryRepository, status: StatusResolver):
        self._directory = directory
        self._entries = entries
        self._status = status

    def resolve_team(self, actor_id: int) -> List[int]:
        """Direct subordinates plus subordinates of managers the actor substitutes for."""
        members = {u.user_id for u in self._directory.find_subordinates_of(int(actor_id))}
        for manager in self._directory.find_managers_delegating_to(int(actor_id)):
            members.update(u.user_id for u in self._directory.find_subordinates_of(manager.user_id))
        members.discard(int(actor_id))
        return sorted(members)

    def get_team_status(self, manager_id: int, *, now: Optional[datetime] = None) -> Dict[int, TrackingStatus]:
        if not self._directory.find_user(int(manager_id)):
            raise ResourceNotFoundError(f"User not found: {manager_id}")
        return self._status.get_statuses(self.resolve_team(manager_id), now=now)

    def get_team_member_entries(
        self,
        actor_id: int,
        target_user_id: int,
        start: datetime,
        end: datetime,
    ) -> Sequence[TimeEntry]:
        require_can_manage(self._directory, actor_id, target_user_id)
        require_instant_range(start, end)
        return self._entries.in_range(int(target_user_id), start, end)
