from __future__ import annotations

from types import SimpleNamespace

import pytest
import pytz

from src.timekeeping.timekeeping.compliance.rules import ComplianceRules
from src.timekeeping.timekeeping.employee_config.service import EmployeeConfigService
from tests.fakes import FakeEmployeeConfigRepo


def test_timezone_falls_back_to_default_for_missing_or_unknown():
    service = EmployeeConfigService(
        FakeEmployeeConfigRepo(timezones={4: "Europe/Berlin", 5: "Mars/Olympus"}),
        default_timezone="Europe/Vienna",
    )

    assert service.timezone_for(4) == "Europe/Berlin"
    assert service.timezone_for(5) == "Europe/Vienna"
    assert service.timezone_for(6) == "Europe/Vienna"


def test_bad_default_timezone_fails_fast():
    with pytest.raises(pytz.UnknownTimeZoneError):
        EmployeeConfigService(FakeEmployeeConfigRepo(), default_timezone="Nowhere/Land")


def test_daily_target_from_repository():
    service = EmployeeConfigService(FakeEmployeeConfigRepo(targets={4: 360}, default_target=480))

    assert service.daily_target_minutes(4) == 360
    assert service.daily_target_minutes(5) == 480


def test_rules_from_settings_override_only_given_values():
    rules = ComplianceRules.from_settings(SimpleNamespace(MAX_DAILY_WORK_MINUTES=540, MIN_REST_MINUTES="600"))

    assert rules.max_daily_work_minutes == 540
    assert rules.min_rest_minutes == 600
    assert rules.required_break_minutes == ComplianceRules().required_break_minutes
    assert ComplianceRules.from_settings(None) == ComplianceRules()
