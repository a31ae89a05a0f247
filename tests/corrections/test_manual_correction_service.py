from __future__ import annotations

from datetime import date

import pytest

from src.timekeeping.timekeeping.core.enums import EntryKind, EntrySource
from src.timekeeping.timekeeping.core.exceptions import BadRequestError, ForbiddenError, ResourceNotFoundError
from tests.fakes import utc
from tests.world import ADMIN, ALICE, BOB, CAROL, MANAGER, OUTSIDER, SUBSTITUTE, build_world


def test_manager_adds_manual_clock_in(world):
    entry = world.corrections.add_manual_entry(
        MANAGER, ALICE, EntryKind.CLOCK_IN, utc(2024, 1, 2, 8), "Forgot to clock in"
    )

    assert entry.source == EntrySource.MANUAL
    assert entry.is_modified is True
    assert entry.modified_by == MANAGER
    assert world.summaries_repo.find(ALICE, date(2024, 1, 2)) is not None

    [record] = world.audit_sink.records
    assert record["action"] == "MANUAL_TIME_ENTRY"
    assert record["actor_id"] == MANAGER
    assert record["entity_id"] == entry.entry_id
    assert record["reason"] == "Forgot to clock in"
    assert record["after"]["entry_type"] == "CLOCK_IN"


def test_manual_entries_complete_a_day(world):
    world.clock.clock_in(ALICE, now=utc(2024, 1, 2, 8))
    world.corrections.add_manual_entry(MANAGER, ALICE, EntryKind.CLOCK_OUT, utc(2024, 1, 2, 12), "Left early")

    assert world.summaries_repo.find(ALICE, date(2024, 1, 2)).total_work_minutes == 240


def test_manual_entries_skip_the_state_machine(world):
    world.corrections.add_manual_entry(ADMIN, ALICE, EntryKind.CLOCK_OUT, utc(2024, 1, 2, 17), "repair")
    world.corrections.add_manual_entry(ADMIN, ALICE, EntryKind.CLOCK_OUT, utc(2024, 1, 2, 18), "repair")

    assert len(world.entries.rows) == 2


def test_substitute_may_correct_delegated_team(world):
    entry = world.corrections.add_manual_entry(SUBSTITUTE, ALICE, EntryKind.CLOCK_IN, utc(2024, 1, 2, 8), "sub")

    assert entry.modified_by == SUBSTITUTE


def test_unrelated_actor_is_forbidden_and_nothing_is_written(world):
    with pytest.raises(ForbiddenError):
        world.corrections.add_manual_entry(OUTSIDER, ALICE, EntryKind.CLOCK_IN, utc(2024, 1, 2, 8), "nope")
    with pytest.raises(ForbiddenError):
        world.corrections.add_manual_entry(MANAGER, CAROL, EntryKind.CLOCK_IN, utc(2024, 1, 2, 8), "nope")

    assert world.entries.rows == {}
    assert world.audit_sink.records == []


@pytest.mark.parametrize("reason", ["", "   "])
def test_reason_is_required(world, reason):
    with pytest.raises(BadRequestError):
        world.corrections.add_manual_entry(MANAGER, ALICE, EntryKind.CLOCK_IN, utc(2024, 1, 2, 8), reason)


def test_missing_target_user(world):
    with pytest.raises(ResourceNotFoundError):
        world.corrections.add_manual_entry(MANAGER, 999, EntryKind.CLOCK_IN, utc(2024, 1, 2, 8), "x")


def test_edit_moves_entry_and_recomputes_both_days(world):
    world.clock.clock_in(ALICE, now=utc(2024, 1, 2, 8))
    out = world.clock.clock_out(ALICE, now=utc(2024, 1, 2, 16))
    world.clock.clock_in(ALICE, now=utc(2024, 1, 3, 8))
    assert world.summaries_repo.find(ALICE, date(2024, 1, 2)).total_work_minutes == 480

    # the evening clock-out really belonged to the next morning
    edited = world.corrections.edit_time_entry(
        MANAGER, out.entry_id, timestamp=utc(2024, 1, 3, 12), reason="Wrong day"
    )

    assert edited.is_modified and edited.modified_by == MANAGER
    assert world.summaries_repo.find(ALICE, date(2024, 1, 2)).total_work_minutes == 0
    assert world.summaries_repo.find(ALICE, date(2024, 1, 3)).total_work_minutes == 240

    record = world.audit_sink.records[-1]
    assert record["action"] == "TIME_ENTRY_EDITED"
    assert record["before"]["timestamp"] == utc(2024, 1, 2, 16).isoformat()
    assert record["after"]["timestamp"] == utc(2024, 1, 3, 12).isoformat()
    assert record["reason"] == "Wrong day"


def test_edit_notes_only_keeps_timestamp(world):
    entry = world.clock.clock_in(ALICE, now=utc(2024, 1, 2, 8))

    edited = world.corrections.edit_time_entry(MANAGER, entry.entry_id, notes="via terminal", reason="clarify")

    assert edited.timestamp == entry.timestamp
    assert edited.notes == "via terminal"


def test_edit_without_changes_is_a_bad_request(world):
    entry = world.clock.clock_in(ALICE, now=utc(2024, 1, 2, 8))

    with pytest.raises(BadRequestError):
        world.corrections.edit_time_entry(MANAGER, entry.entry_id, reason="nothing")


def test_edit_unknown_entry(world):
    with pytest.raises(ResourceNotFoundError):
        world.corrections.edit_time_entry(MANAGER, 12345, notes="x", reason="x")


def test_delete_removes_entry_audits_and_recomputes(world):
    world.clock.clock_in(ALICE, now=utc(2024, 1, 2, 8))
    out = world.clock.clock_out(ALICE, now=utc(2024, 1, 2, 16))

    deleted = world.corrections.delete_time_entry(ADMIN, out.entry_id, "Duplicate")

    assert deleted.entry_id == out.entry_id
    assert world.entries.get_by_id(out.entry_id) is None
    assert world.summaries_repo.find(ALICE, date(2024, 1, 2)).total_work_minutes == 0
    record = world.audit_sink.records[-1]
    assert record["action"] == "TIME_ENTRY_DELETED"
    assert record["before"]["id"] == out.entry_id
    assert record["after"] is None


def test_delete_by_unrelated_actor_is_forbidden(world):
    entry = world.clock.clock_in(ALICE, now=utc(2024, 1, 2, 8))

    with pytest.raises(ForbiddenError):
        world.corrections.delete_time_entry(OUTSIDER, entry.entry_id, "nope")

    assert world.entries.get_by_id(entry.entry_id) is not None


def test_edit_across_the_fall_back_night_recomputes_local_days():
    world = build_world(timezones={BOB: "Europe/Berlin"})
    # 21:30 to 23:30 CEST on 2024-10-26
    clock_in = world.corrections.add_manual_entry(
        MANAGER, BOB, EntryKind.CLOCK_IN, utc(2024, 10, 26, 19, 30), "paper log"
    )
    clock_out = world.corrections.add_manual_entry(
        MANAGER, BOB, EntryKind.CLOCK_OUT, utc(2024, 10, 26, 21, 30), "paper log"
    )
    assert world.summaries_repo.find(BOB, date(2024, 10, 26)).total_work_minutes == 120

    # clock-out moves to 02:30 CET on the 27th
    world.corrections.edit_time_entry(
        MANAGER, clock_out.entry_id, timestamp=utc(2024, 10, 27, 1, 30), reason="shift ran late"
    )

    assert world.summaries_repo.find(BOB, date(2024, 10, 26)).total_work_minutes == 0
    assert world.summaries_repo.find(BOB, date(2024, 10, 27)).total_work_minutes == 0

    # clock-in moves to 00:30 CEST on the 27th; 02:00-03:00 local is lived twice
    world.corrections.edit_time_entry(
        MANAGER, clock_in.entry_id, timestamp=utc(2024, 10, 26, 22, 30), reason="shift started late"
    )

    assert world.summaries_repo.find(BOB, date(2024, 10, 26)).total_work_minutes == 0
    assert world.summaries_repo.find(BOB, date(2024, 10, 27)).total_work_minutes == 180


def test_future_manual_entry_is_rejected(world):
    with pytest.raises(BadRequestError, match="future"):
        world.corrections.add_manual_entry(MANAGER, ALICE, EntryKind.CLOCK_OUT, utc(2999, 1, 1, 8), "typo")

    assert world.entries.rows == {}
    assert world.audit_sink.records == []


def test_edit_into_the_future_is_rejected(world):
    entry = world.clock.clock_in(ALICE, now=utc(2024, 1, 2, 8))

    with pytest.raises(BadRequestError, match="future"):
        world.corrections.edit_time_entry(MANAGER, entry.entry_id, timestamp=utc(2999, 1, 2, 8), reason="typo")

    assert world.entries.get_by_id(entry.entry_id).timestamp == utc(2024, 1, 2, 8)
