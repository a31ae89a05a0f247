from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.constants import ADMIN_PERMISSION
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import DirectoryRepository


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        username=row["username"],
        manager_id=int(row["manager_id"]) if row.get("manager_id") is not None else None,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLDirectoryRepository(DirectoryRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, admin_permission: str = ADMIN_PERMISSION):
        self._conn_factory = conn_factory
        self._admin_permission = admin_permission

    def find_user(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, username, manager_id, is_active
                FROM users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def find_manager_of(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT m.user_id, m.full_name, m.username, m.manager_id, m.is_active
                FROM users u
                JOIN users m ON m.user_id = u.manager_id
                WHERE u.user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def find_subordinates_of(self, manager_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, username, manager_id, is_active
                FROM users
                WHERE manager_id=%s AND is_active=1
                ORDER BY user_id ASC
                """,
                (int(manager_id),),
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def find_substitute_delegates_of(self, manager_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.full_name, u.username, u.manager_id, u.is_active
                FROM manager_substitutes ms
                JOIN users u ON u.user_id = ms.substitute_id
                WHERE ms.manager_id=%s
                ORDER BY u.user_id ASC
                """,
                (int(manager_id),),
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def find_managers_delegating_to(self, substitute_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.full_name, u.username, u.manager_id, u.is_active
                FROM manager_substitutes ms
                JOIN users u ON u.user_id = ms.manager_id
                WHERE ms.substitute_id=%s
                ORDER BY u.user_id ASC
                """,
                (int(substitute_id),),
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def has_admin_permission(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS ok FROM user_permissions WHERE user_id=%s AND permission=%s",
                (int(user_id), self._admin_permission),
            )
            return fetchone(cur) is not None
