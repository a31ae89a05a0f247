from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailySummary


class DailySummaryRepository(Protocol):
    def find(self, user_id: int, work_date: date) -> Optional[DailySummary]:
        raise NotImplementedError

    def upsert(self, summary: DailySummary) -> DailySummary:
        """Create or fully overwrite the summary keyed by (user_id, work_date)."""

        raise NotImplementedError

    def list_between(self, user_id: int, start_date: date, end_date: date) -> Sequence[DailySummary]:
        """Inclusive on both ends, ordered by date."""

        raise NotImplementedError
