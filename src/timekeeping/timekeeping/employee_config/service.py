from __future__ import annotations

import pytz

from ..core.constants import DEFAULT_TIMEZONE
from .repository import EmployeeConfigRepository


class EmployeeConfigService:
    """Resolves the daily target and reference timezone of an employee."""

    def __init__(self, configs: EmployeeConfigRepository, *, default_timezone: str = DEFAULT_TIMEZONE):
        pytz.timezone(default_timezone)  # fail fast on a bad setting
        self._configs = configs
        self._default_timezone = default_timezone

    def daily_target_minutes(self, user_id: int) -> int:
        return int(self._configs.get_daily_target_minutes(int(user_id)))

    def timezone_for(self, user_id: int) -> str:
        tz_name = self._configs.get_timezone(int(user_id))
        if not tz_name:
            return self._default_timezone
        try:
            pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            return self._default_timezone
        return tz_name
