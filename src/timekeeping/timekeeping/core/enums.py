from __future__ import annotations

from enum import Enum


class EntryKind(str, Enum):
    """Kind of a raw time entry in a user's timeline."""

    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"


class EntrySource(str, Enum):
    """Where a time entry was recorded."""

    WEB = "WEB"
    TERMINAL = "TERMINAL"
    MOBILE = "MOBILE"
    MANUAL = "MANUAL"


class ClockState(str, Enum):
    """Live clock state derived from the most recent entry."""

    CLOCKED_OUT = "CLOCKED_OUT"
    CLOCKED_IN = "CLOCKED_IN"
    ON_BREAK = "ON_BREAK"


class AuditAction(str, Enum):
    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"
    MANUAL_TIME_ENTRY = "MANUAL_TIME_ENTRY"
    TIME_ENTRY_EDITED = "TIME_ENTRY_EDITED"
    TIME_ENTRY_DELETED = "TIME_ENTRY_DELETED"
