from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ClockState


@dataclass(frozen=True)
class TrackingStatus:
    state: ClockState
    clocked_in_since: Optional[datetime] = None
    break_started_at: Optional[datetime] = None
    elapsed_work_minutes: int = 0
    elapsed_break_minutes: int = 0
    today_work_minutes: int = 0
    today_break_minutes: int = 0

    def to_dict(self) -> dict:
        return {
            "status": self.state.value,
            "clocked_in_since": self.clocked_in_since.isoformat() if self.clocked_in_since else None,
            "break_started_at": self.break_started_at.isoformat() if self.break_started_at else None,
            "elapsed_work_minutes": self.elapsed_work_minutes,
            "elapsed_break_minutes": self.elapsed_break_minutes,
            "today_work_minutes": self.today_work_minutes,
            "today_break_minutes": self.today_break_minutes,
        }
