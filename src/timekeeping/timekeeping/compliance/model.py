from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ComplianceResult:
    """Totals and verdict for one calendar day.

    `notes` lists violated rules; `warnings` are advisory and never affect
    `is_compliant`.
    """

    total_work_minutes: int
    total_break_minutes: int
    overtime_minutes: int
    qualifying_break_minutes: int
    notes: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_compliant(self) -> bool:
        return not self.notes
