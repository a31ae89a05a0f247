from __future__ import annotations

from typing import Optional, Protocol


class EmployeeConfigRepository(Protocol):
    """Per-employee working-time configuration (read-only for this core)."""

    def get_daily_target_minutes(self, user_id: int) -> int:
        """Falls back to the system default when no config exists."""

        raise NotImplementedError

    def get_timezone(self, user_id: int) -> Optional[str]:
        """IANA timezone that defines the user's calendar days, if configured."""

        raise NotImplementedError
