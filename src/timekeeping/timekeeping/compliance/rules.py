from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core import constants


@dataclass(frozen=True)
class ComplianceRules:
    """Working-time regulation thresholds, all in minutes.

    Defaults follow the German Working Hours Act (ArbZG §§3-5).
    """

    max_daily_work_minutes: int = constants.MAX_DAILY_WORK_MINUTES
    regular_daily_work_minutes: int = constants.REGULAR_DAILY_WORK_MINUTES
    break_threshold_minutes: int = constants.BREAK_THRESHOLD_MINUTES
    required_break_minutes: int = constants.REQUIRED_BREAK_MINUTES
    extended_break_threshold_minutes: int = constants.EXTENDED_BREAK_THRESHOLD_MINUTES
    extended_required_break_minutes: int = constants.EXTENDED_REQUIRED_BREAK_MINUTES
    min_qualifying_break_minutes: int = constants.MIN_QUALIFYING_BREAK_MINUTES
    min_rest_minutes: int = constants.MIN_REST_MINUTES

    @classmethod
    def from_settings(cls, settings: Any) -> "ComplianceRules":
        """Build rules from a settings module, falling back to the defaults."""
        defaults = cls()
        return cls(
            max_daily_work_minutes=int(getattr(settings, "MAX_DAILY_WORK_MINUTES", defaults.max_daily_work_minutes)),
            regular_daily_work_minutes=int(
                getattr(settings, "REGULAR_DAILY_WORK_MINUTES", defaults.regular_daily_work_minutes)
            ),
            break_threshold_minutes=int(getattr(settings, "BREAK_THRESHOLD_MINUTES", defaults.break_threshold_minutes)),
            required_break_minutes=int(getattr(settings, "REQUIRED_BREAK_MINUTES", defaults.required_break_minutes)),
            extended_break_threshold_minutes=int(
                getattr(settings, "EXTENDED_BREAK_THRESHOLD_MINUTES", defaults.extended_break_threshold_minutes)
            ),
            extended_required_break_minutes=int(
                getattr(settings, "EXTENDED_REQUIRED_BREAK_MINUTES", defaults.extended_required_break_minutes)
            ),
            min_qualifying_break_minutes=int(
                getattr(settings, "MIN_QUALIFYING_BREAK_MINUTES", defaults.min_qualifying_break_minutes)
            ),
            min_rest_minutes=int(getattr(settings, "MIN_REST_MINUTES", defaults.min_rest_minutes)),
        )
