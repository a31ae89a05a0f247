from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from ..core.enums import EntryKind
from .model import TimeEntry

Interval = Tuple[datetime, datetime]


@dataclass(frozen=True)
class DayIntervals:
    """Closed clock/break intervals of a day plus whatever is still open."""

    clock_intervals: List[Interval] = field(default_factory=list)
    break_intervals: List[Interval] = field(default_factory=list)
    open_clock_in: Optional[datetime] = None
    open_break_start: Optional[datetime] = None


def pair_intervals(entries: Iterable[TimeEntry]) -> DayIntervals:
    """Pair entries into CLOCK_IN->CLOCK_OUT and BREAK_START->BREAK_END intervals.

    Entries are sorted chronologically first. A repeated start keeps the first
    one; an end without a start is ignored. Manual corrections can produce such
    sequences, so pairing never raises.
    """
    clock: List[Interval] = []
    breaks: List[Interval] = []
    clock_in: Optional[datetime] = None
    break_start: Optional[datetime] = None

    for entry in sorted(entries, key=lambda e: e.sort_key()):
        if entry.kind == EntryKind.CLOCK_IN:
            if clock_in is None:
                clock_in = entry.timestamp
        elif entry.kind == EntryKind.CLOCK_OUT:
            if clock_in is not None:
                clock.append((clock_in, entry.timestamp))
                clock_in = None
            # a CLOCK_OUT also ends a break nobody closed
            if break_start is not None:
                breaks.append((break_start, entry.timestamp))
                break_start = None
        elif entry.kind == EntryKind.BREAK_START:
            if break_start is None:
                break_start = entry.timestamp
        elif entry.kind == EntryKind.BREAK_END:
            if break_start is not None:
                breaks.append((break_start, entry.timestamp))
                break_start = None

    return DayIntervals(
        clock_intervals=clock,
        break_intervals=breaks,
        open_clock_in=clock_in,
        open_break_start=break_start,
    )
