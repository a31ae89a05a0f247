from __future__ import annotations

from datetime import date

import pytest

from src.timekeeping.timekeeping.core.enums import EntryKind
from src.timekeeping.timekeeping.core.exceptions import BadRequestError, ResourceNotFoundError
from src.timekeeping.timekeeping.summaries.model import DailySummary
from tests.fakes import utc
from tests.world import ALICE, BOB, build_world

DAY = date(2024, 1, 2)


def _seed(world, user_id, *events):
    for kind, ts in events:
        world.entries.append(user_id=user_id, kind=kind, timestamp=ts)


def _regular_day(world, user_id=ALICE, day=2, start=8, end=(16, 15)):
    _seed(
        world,
        user_id,
        (EntryKind.CLOCK_IN, utc(2024, 1, day, start)),
        (EntryKind.BREAK_START, utc(2024, 1, day, 10)),
        (EntryKind.BREAK_END, utc(2024, 1, day, 10, 15)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, day, *end)),
    )


def test_recalculate_builds_and_stores_summary(world):
    _regular_day(world)

    summary = world.summaries.recalculate(ALICE, DAY)

    assert summary.total_work_minutes == 480
    assert summary.total_break_minutes == 15
    assert summary.overtime_minutes == 0
    assert summary.is_compliant is False
    assert world.summaries_repo.find(ALICE, DAY) == summary


def test_recalculate_is_idempotent(world):
    _regular_day(world)

    first = world.summaries.recalculate(ALICE, DAY)
    second = world.summaries.recalculate(ALICE, DAY)

    assert first == second
    assert len(world.summaries_repo.rows) == 1


def test_recalculate_unknown_user(world):
    with pytest.raises(ResourceNotFoundError):
        world.summaries.recalculate(999, DAY)


def test_open_session_is_not_counted(world):
    _seed(world, ALICE, (EntryKind.CLOCK_IN, utc(2024, 1, 2, 8)))

    summary = world.summaries.recalculate(ALICE, DAY)

    assert summary.total_work_minutes == 0
    assert summary.overtime_minutes == -480


def test_overtime_uses_employee_target():
    world = build_world(targets={ALICE: 420})
    _seed(
        world,
        ALICE,
        (EntryKind.CLOCK_IN, utc(2024, 1, 2, 8)),
        (EntryKind.BREAK_START, utc(2024, 1, 2, 12)),
        (EntryKind.BREAK_END, utc(2024, 1, 2, 12, 45)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 2, 18, 45)),
    )

    summary = world.summaries.recalculate(ALICE, DAY)

    assert summary.total_work_minutes == 600
    assert summary.overtime_minutes == 180
    assert summary.is_compliant


def test_day_boundaries_follow_employee_timezone():
    world = build_world(timezones={BOB: "Europe/Berlin"})
    # 00:30 to 08:30 local time on Jan 3rd
    _seed(
        world,
        BOB,
        (EntryKind.CLOCK_IN, utc(2024, 1, 2, 23, 30)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 3, 7, 30)),
    )

    assert world.summaries.recalculate(BOB, date(2024, 1, 2)).total_work_minutes == 0
    assert world.summaries.recalculate(BOB, date(2024, 1, 3)).total_work_minutes == 480
    assert world.summaries.work_date_of(BOB, utc(2024, 1, 2, 23, 30)) == date(2024, 1, 3)


def test_get_daily_summary_serves_cache(world):
    cached = DailySummary(user_id=ALICE, work_date=DAY, total_work_minutes=1)
    world.summaries_repo.rows[(ALICE, DAY)] = cached

    assert world.summaries.get_daily_summary(ALICE, DAY) is cached
    assert world.summaries_repo.upserts == 0


def test_get_daily_summary_computes_missing(world):
    _regular_day(world)

    summary = world.summaries.get_daily_summary(ALICE, DAY)

    assert summary.total_work_minutes == 480
    assert world.summaries_repo.upserts == 1


def test_time_sheet_rejects_inverted_range(world):
    with pytest.raises(BadRequestError):
        world.summaries.get_time_sheet(ALICE, date(2024, 1, 5), date(2024, 1, 1))


def test_time_sheet_rejects_ranges_longer_than_a_year(world):
    with pytest.raises(BadRequestError):
        world.summaries.get_time_sheet(ALICE, date(2024, 1, 1), date(2025, 1, 1))


def test_time_sheet_totals_and_entries(world):
    _regular_day(world, day=2)
    _regular_day(world, day=3, end=(17, 15))
    world.summaries.recalculate(ALICE, date(2024, 1, 2))
    world.summaries.recalculate(ALICE, date(2024, 1, 3))

    sheet = world.summaries.get_time_sheet(ALICE, date(2024, 1, 1), date(2024, 1, 7))

    assert [s.work_date for s in sheet.daily_summaries] == [date(2024, 1, 2), date(2024, 1, 3)]
    assert sheet.total_work_minutes == 480 + 540
    assert sheet.total_overtime_minutes == 60
    assert len(sheet.entries) == 8
    assert sheet.rest_period_violations == []
    assert sheet.to_dict()["total_break_minutes"] == 30


def test_time_sheet_reports_short_rest_period(world):
    _seed(
        world,
        ALICE,
        (EntryKind.CLOCK_IN, utc(2024, 1, 2, 12)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 2, 22)),
        (EntryKind.CLOCK_IN, utc(2024, 1, 3, 6)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 3, 12)),
    )

    sheet = world.summaries.get_time_sheet(ALICE, date(2024, 1, 2), date(2024, 1, 3))

    assert sheet.rest_period_violations == [date(2024, 1, 3)]


def test_overnight_shift_is_not_a_rest_violation(world):
    _seed(
        world,
        ALICE,
        (EntryKind.CLOCK_IN, utc(2024, 1, 2, 22)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 3, 2)),
    )

    sheet = world.summaries.get_time_sheet(ALICE, date(2024, 1, 2), date(2024, 1, 3))

    assert sheet.rest_period_violations == []


def test_rest_after_overnight_shift_counts_from_its_end(world):
    _seed(
        world,
        ALICE,
        (EntryKind.CLOCK_IN, utc(2024, 1, 2, 22)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 3, 2)),
        (EntryKind.CLOCK_IN, utc(2024, 1, 3, 10)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 3, 14)),
    )

    sheet = world.summaries.get_time_sheet(ALICE, date(2024, 1, 2), date(2024, 1, 3))

    assert sheet.rest_period_violations == [date(2024, 1, 3)]


def test_session_open_across_the_range_start_is_skipped(world):
    _seed(
        world,
        ALICE,
        (EntryKind.CLOCK_IN, utc(2024, 1, 1, 20)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 2, 1)),
        (EntryKind.CLOCK_IN, utc(2024, 1, 2, 8)),
        (EntryKind.CLOCK_OUT, utc(2024, 1, 2, 12)),
    )

    sheet = world.summaries.get_time_sheet(ALICE, date(2024, 1, 2), date(2024, 1, 3))

    assert sheet.rest_period_violations == []


def test_recalculate_on_spring_forward_day():
    world = build_world(timezones={BOB: "Europe/Berlin"})
    # 00:30 CET to 09:30 CEST on 2024-03-31, eight real hours
    _seed(
        world,
        BOB,
        (EntryKind.CLOCK_IN, utc(2024, 3, 30, 23, 30)),
        (EntryKind.BREAK_START, utc(2024, 3, 31, 3)),
        (EntryKind.BREAK_END, utc(2024, 3, 31, 3, 30)),
        (EntryKind.CLOCK_OUT, utc(2024, 3, 31, 8)),
    )

    assert world.summaries.recalculate(BOB, date(2024, 3, 30)).total_work_minutes == 0
    summary = world.summaries.recalculate(BOB, date(2024, 3, 31))
    assert summary.total_work_minutes == 480
    assert summary.total_break_minutes == 30


def test_recalculate_on_fall_back_day():
    world = build_world(timezones={BOB: "Europe/Berlin"})
    # 00:30 CEST on 2024-10-27 until 23:45 CET the same local day
    _seed(
        world,
        BOB,
        (EntryKind.CLOCK_IN, utc(2024, 10, 26, 22, 30)),
        (EntryKind.CLOCK_OUT, utc(2024, 10, 26, 23, 30)),
        (EntryKind.CLOCK_IN, utc(2024, 10, 27, 22)),
        (EntryKind.CLOCK_OUT, utc(2024, 10, 27, 22, 45)),
    )

    assert world.summaries.recalculate(BOB, date(2024, 10, 26)).total_work_minutes == 0
    assert world.summaries.recalculate(BOB, date(2024, 10, 27)).total_work_minutes == 105
    assert world.summaries.recalculate(BOB, date(2024, 10, 28)).total_work_minutes == 0
