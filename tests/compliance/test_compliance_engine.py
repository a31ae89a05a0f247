from __future__ import annotations

import pytest

from src.timekeeping.timekeeping.compliance.engine import check_rest_period, evaluate_day, required_break_minutes
from src.timekeeping.timekeeping.compliance.rules import ComplianceRules
from tests.fakes import utc


def _at(hour, minute=0, second=0, day=2):
    return utc(2024, 1, day, hour, minute, second)


def test_short_break_is_subtracted_but_does_not_satisfy_required_break():
    result = evaluate_day(
        clock_intervals=[(_at(8), _at(16, 15))],
        break_intervals=[(_at(10), _at(10, 15))],
        daily_target_minutes=480,
    )

    assert result.total_work_minutes == 480
    assert result.total_break_minutes == 15
    assert result.overtime_minutes == 0
    assert result.qualifying_break_minutes == 15
    assert not result.is_compliant
    assert len(result.notes) == 1
    assert "Insufficient break" in result.notes[0]
    assert "30 min required" in result.notes[0]


def test_ten_hours_with_long_break_is_compliant_with_signed_overtime_and_warning():
    result = evaluate_day(
        clock_intervals=[(_at(8), _at(18, 45))],
        break_intervals=[(_at(12), _at(12, 45))],
        daily_target_minutes=480,
    )

    assert result.total_work_minutes == 600
    assert result.overtime_minutes == 120
    assert result.is_compliant
    assert result.notes == []
    assert len(result.warnings) == 1
    assert "Regular 8 hours limit exceeded" in result.warnings[0]


def test_maximum_daily_work_exceeded_is_a_violation():
    result = evaluate_day(
        clock_intervals=[(_at(7), _at(18, 30))],
        break_intervals=[(_at(12), _at(12, 45))],
        daily_target_minutes=480,
    )

    assert result.total_work_minutes == 645
    assert not result.is_compliant
    assert any("Maximum work time of 10 hours exceeded" in n for n in result.notes)
    assert result.warnings == []


def test_breaks_below_fifteen_minutes_do_not_qualify():
    result = evaluate_day(
        clock_intervals=[(_at(8), _at(15, 20))],
        break_intervals=[(_at(10), _at(10, 10)), (_at(12), _at(12, 10))],
        daily_target_minutes=480,
    )

    assert result.total_break_minutes == 20
    assert result.total_work_minutes == 420
    assert result.qualifying_break_minutes == 0
    assert result.notes == [
        "§4 ArbZG: Insufficient break time (0 min taken, 30 min required for 420 min of work)"
    ]


def test_short_day_without_break_has_negative_overtime():
    result = evaluate_day([(_at(8), _at(13))], [], daily_target_minutes=480)

    assert result.total_work_minutes == 300
    assert result.overtime_minutes == -180
    assert result.is_compliant


def test_break_outside_worked_interval_is_ignored():
    result = evaluate_day(
        clock_intervals=[(_at(8), _at(12))],
        break_intervals=[(_at(12, 30), _at(13)), (_at(11, 50), _at(12, 20))],
        daily_target_minutes=240,
    )

    assert result.total_break_minutes == 10
    assert result.total_work_minutes == 230


def test_minutes_are_truncated_per_interval():
    result = evaluate_day(
        clock_intervals=[(_at(8, 0, 0), _at(8, 10, 59)), (_at(9, 0, 0), _at(9, 0, 59))],
        break_intervals=[],
        daily_target_minutes=0,
    )

    assert result.total_work_minutes == 10


def test_empty_day():
    result = evaluate_day([], [], daily_target_minutes=480)

    assert result.total_work_minutes == 0
    assert result.total_break_minutes == 0
    assert result.overtime_minutes == -480
    assert result.is_compliant


@pytest.mark.parametrize(
    "work, expected",
    [(0, 0), (360, 0), (361, 30), (540, 30), (541, 45), (700, 45)],
)
def test_required_break_thresholds(work, expected):
    assert required_break_minutes(work) == expected


def test_custom_rules_are_honoured():
    rules = ComplianceRules(max_daily_work_minutes=480, regular_daily_work_minutes=420)
    result = evaluate_day([(_at(8), _at(17))], [(_at(12), _at(12, 30))], 480, rules)

    assert result.total_work_minutes == 510
    assert any("Maximum work time of 8 hours exceeded" in n for n in result.notes)


def test_rest_period():
    assert check_rest_period(None, _at(8)) is True
    assert check_rest_period(_at(22, day=1), None) is True
    assert check_rest_period(_at(21, day=1), _at(8)) is True
    assert check_rest_period(_at(22, day=1), _at(8)) is False
