from __future__ import annotations

from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, json_to_db
from .repository import AuditSink


class MySQLAuditSink(AuditSink):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record(
        self,
        *,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: Any,
        before: Optional[dict] = None,
        after: Optional[dict] = None,
        reason: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(actor_id, action, entity_type, entity_id, old_value, new_value, reason)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(actor_id),
                    action,
                    entity_type,
                    str(entity_id) if entity_id is not None else None,
                    json_to_db(before),
                    json_to_db(after),
                    reason,
                ),
            )
