from __future__ import annotations

import csv
import io

from .model import TimeSheet

_FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r", "\n")

CSV_FIELDS = ["date", "work_minutes", "break_minutes", "overtime_minutes", "compliant", "notes"]


def _safe_cell(value: str) -> str:
    """Neutralise spreadsheet formula injection by prefixing a space."""
    if value and value.startswith(_FORMULA_PREFIXES):
        return f" {value}"
    return value


def timesheet_to_csv(sheet: TimeSheet) -> str:
    """One row per daily summary. Quoting follows RFC 4180 via the csv module."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for summary in sheet.daily_summaries:
        writer.writerow(
            {
                "date": summary.work_date.isoformat(),
                "work_minutes": summary.total_work_minutes,
                "break_minutes": summary.total_break_minutes,
                "overtime_minutes": summary.overtime_minutes,
                "compliant": "true" if summary.is_compliant else "false",
                "notes": _safe_cell("; ".join(summary.compliance_notes)),
            }
        )
    return out.getvalue()
