from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_DAILY_TARGET_MINUTES
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import EmployeeConfigRepository


class MySQLEmployeeConfigRepository(EmployeeConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, default_daily_target_minutes: int = DEFAULT_DAILY_TARGET_MINUTES):
        self._conn_factory = conn_factory
        self._default_target = int(default_daily_target_minutes)

    def get_daily_target_minutes(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT daily_work_hours FROM employee_configs WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            if not row or row.get("daily_work_hours") is None:
                return self._default_target
            return int(Decimal(str(row["daily_work_hours"])) * 60)

    def get_timezone(self, user_id: int) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT timezone FROM employee_configs WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return (row or {}).get("timezone") or None
