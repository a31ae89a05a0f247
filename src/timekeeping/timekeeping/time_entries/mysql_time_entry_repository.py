from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_naive_utc
from ..core.enums import EntryKind, EntrySource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, utc_from_db
from .model import TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = """
    entry_id, user_id, entry_type, timestamp, source, terminal_id, notes,
    is_modified, modified_by, created_at
"""


def _row_to_entry(r: Dict[str, Any]) -> TimeEntry:
    return TimeEntry(
        entry_id=int(r["entry_id"]),
        user_id=int(r["user_id"]),
        kind=EntryKind(r["entry_type"]),
        timestamp=utc_from_db(r["timestamp"]),
        source=EntrySource(r["source"]),
        terminal_id=r.get("terminal_id"),
        notes=r.get("notes"),
        is_modified=bool(r.get("is_modified")),
        modified_by=int(r["modified_by"]) if r.get("modified_by") is not None else None,
        created_at=utc_from_db(r.get("created_at")),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(user_id, entry_type, timestamp, source, terminal_id, notes, is_modified, modified_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    kind.value,
                    to_naive_utc(timestamp),
                    source.value,
                    terminal_id,
                    notes,
                    1 if is_modified else 0,
                    modified_by,
                ),
            )
            entry_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries WHERE entry_id=%s", (entry_id,))
            return _row_to_entry(fetchone(cur))

    def most_recent_for_user(self, user_id: int) -> Optional[TimeEntry]:
        rows = self.recent_for_user(user_id, 1)
        return rows[0] if rows else None

    def recent_for_user(self, user_id: int, limit: int) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE user_id=%s
                ORDER BY timestamp DESC, entry_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def in_range(self, user_id: int, start: datetime, end: datetime) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND timestamp >= %s AND timestamp < %s
                ORDER BY timestamp ASC, entry_id ASC
                """,
                (int(user_id), to_naive_utc(start), to_naive_utc(end)),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def update(
        self,
        *,
        entry_id: int,
        timestamp: datetime,
        notes: Optional[str],
        modified_by: int,
    ) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET timestamp=%s, notes=%s, is_modified=1, modified_by=%s
                WHERE entry_id=%s
                """,
                (to_naive_utc(timestamp), notes, int(modified_by), int(entry_id)),
            )
            # rowcount is 0 for an unchanged row, so re-read instead of trusting it
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def delete(self, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            return cur.rowcount > 0
