from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, json_from_db, json_to_db
from .model import DailySummary
from .repository import DailySummaryRepository

_COLUMNS = """
    user_id, work_date, total_work_minutes, total_break_minutes, overtime_minutes,
    is_compliant, compliance_notes
"""


def _row_to_summary(r: Dict[str, Any]) -> DailySummary:
    return DailySummary(
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        total_work_minutes=int(r["total_work_minutes"]),
        total_break_minutes=int(r["total_break_minutes"]),
        overtime_minutes=int(r["overtime_minutes"]),
        is_compliant=bool(r["is_compliant"]),
        compliance_notes=list(json_from_db(r.get("compliance_notes")) or []),
    )


class MySQLDailySummaryRepository(DailySummaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find(self, user_id: int, work_date: date) -> Optional[DailySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM daily_summaries WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_summary(r) if r else None

    def upsert(self, summary: DailySummary) -> DailySummary:
        # single statement: concurrent recomputations converge on the last write
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_summaries(
                    user_id, work_date, total_work_minutes, total_break_minutes,
                    overtime_minutes, is_compliant, compliance_notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    total_work_minutes=VALUES(total_work_minutes),
                    total_break_minutes=VALUES(total_break_minutes),
                    overtime_minutes=VALUES(overtime_minutes),
                    is_compliant=VALUES(is_compliant),
                    compliance_notes=VALUES(compliance_notes)
                """,
                (
                    int(summary.user_id),
                    summary.work_date,
                    int(summary.total_work_minutes),
                    int(summary.total_break_minutes),
                    int(summary.overtime_minutes),
                    1 if summary.is_compliant else 0,
                    json_to_db(list(summary.compliance_notes)),
                ),
            )
        return summary

    def list_between(self, user_id: int, start_date: date, end_date: date) -> Sequence[DailySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_summaries
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_row_to_summary(r) for r in fetchall(cur)]
