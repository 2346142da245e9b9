"""Tests for repository classes."""

import pytest

from shiftmaker.domain.models import Assignment, MonthSettings, Requirement, ShiftSlot, StaffRequest
from shiftmaker.domain.repositories import (
    AssignmentRepository,
    RequestRepository,
    SettingsRepository,
    StaffRepository,
    generate_id,
    parse_weekly_limit,
)


def test_generate_id_shape():
    first = generate_id("asgn")
    second = generate_id("asgn")
    assert first.startswith("asgn-")
    assert len(first.split("-")) == 3
    assert first != second


def test_parse_weekly_limit():
    assert parse_weekly_limit(None) is None
    assert parse_weekly_limit("") is None
    assert parse_weekly_limit(0) is None
    assert parse_weekly_limit("3") == 3
    with pytest.raises(ValueError):
        parse_weekly_limit(-1)


def test_staff_create_and_roster_order(db_session):
    a = StaffRepository.create(db_session, "Anna", "Hall", 3, weekly_limit=2, staff_id="a")
    b = StaffRepository.create(db_session, "Ben", "leader", "5", staff_id="b")

    assert a.role == "hall"
    assert a.weekly_limit == 2
    assert b.priority == 5
    assert b.weekly_limit is None
    assert [s.id for s in StaffRepository.get_all(db_session)] == ["a", "b"]
    assert [s.id for s in StaffRepository.get_by_role(db_session, "leader")] == ["b"]


@pytest.mark.parametrize(
    "name, role, priority, weekly_limit",
    [
        ("", "hall", 3, None),
        ("Anna", "manager", 3, None),
        ("Anna", "hall", 0, None),
        ("Anna", "hall", 6, None),
        ("Anna", "hall", None, None),
        ("Anna", "hall", 3, -2),
    ],
)
def test_staff_create_rejects_bad_input(db_session, name, role, priority, weekly_limit):
    with pytest.raises(ValueError):
        StaffRepository.create(db_session, name, role, priority, weekly_limit=weekly_limit)
    assert StaffRepository.get_all(db_session) == []


def test_staff_update_is_partial(db_session):
    StaffRepository.create(db_session, "Anna", "hall", 3, weekly_limit=2, staff_id="a")

    updated = StaffRepository.update(db_session, "a", priority=4)
    assert updated.priority == 4
    assert updated.weekly_limit == 2

    cleared = StaffRepository.update(db_session, "a", weekly_limit="")
    assert cleared.weekly_limit is None

    with pytest.raises(LookupError):
        StaffRepository.update(db_session, "missing", name="X")


def test_staff_delete_cascades(db_session):
    StaffRepository.create(db_session, "Anna", "hall", 3, staff_id="a")
    SettingsRepository.save(
        db_session,
        MonthSettings(year=2026, month=2, slots=[ShiftSlot(id="slot-1", label="Day", order=1)]),
    )
    RequestRepository.save_month(db_session, "a", 2026, 2, [{"date": "2026-02-03", "available": False}])
    AssignmentRepository.save(
        db_session,
        Assignment(id="x1", date="2026-02-02", slot_id="slot-1", staff_id="a", year=2026, month=2),
    )

    assert StaffRepository.delete(db_session, "a")
    assert RequestRepository.get_all(db_session) == []
    assert AssignmentRepository.get_all(db_session) == []
    assert not StaffRepository.delete(db_session, "a")


def test_settings_get_save_and_default(db_session):
    assert SettingsRepository.get(db_session, 2026, 2) is None
    default = SettingsRepository.get_or_default(db_session, 2026, 2)
    assert [s.id for s in default.slots] == ["slot-1", "slot-2", "slot-3"]

    saved = SettingsRepository.save(
        db_session,
        MonthSettings(
            year=2026,
            month=2,
            slots=[ShiftSlot(id="late", label="Late", order=2), ShiftSlot(id="early", label="Early", order=1)],
            requirements=[Requirement(id="r1", day_type="weekday", slot_id="early", role="hall", count=2)],
        ),
    )
    assert [s.id for s in saved.sorted_slots()] == ["early", "late"]
    assert saved.requirements[0].count == 2

    with pytest.raises(ValueError):
        SettingsRepository.save(
            db_session,
            MonthSettings(
                year=2026,
                month=2,
                slots=[ShiftSlot(id="early", label="Early", order=1)],
                requirements=[Requirement(id="r1", day_type="weekday", slot_id="nope", role="hall", count=1)],
            ),
        )


def test_request_save_month_replaces_only_that_month(db_session):
    StaffRepository.create(db_session, "Anna", "hall", 3, staff_id="a")
    RequestRepository.bulk_create(
        db_session,
        [StaffRequest(id="keep", staff_id="a", date="2026-03-01", available=False, available_slots=[])],
    )
    RequestRepository.save_month(db_session, "a", 2026, 2, [{"date": "2026-02-03", "available": False}])

    saved = RequestRepository.save_month(
        db_session,
        "a",
        2026,
        2,
        [
            {"date": "2026-02-04", "available": True, "available_slots": ["slot-2"]},
            {"date": "2026-02-05", "available": False},
        ],
    )

    assert len(saved) == 2
    february = RequestRepository.get_for_month(db_session, 2026, 2)
    assert [r.date for r in february] == ["2026-02-04", "2026-02-05"]
    assert february[0].available_slots == ["slot-2"]
    assert february[1].available_slots == []
    assert [r.id for r in RequestRepository.get_for_month(db_session, 2026, 3)] == ["keep"]


def test_assignment_replace_and_add_missing(db_session):
    StaffRepository.create(db_session, "Anna", "hall", 3, staff_id="a")
    SettingsRepository.save(
        db_session,
        MonthSettings(year=2026, month=2, slots=[ShiftSlot(id="slot-1", label="Day", order=1)]),
    )

    def make(aid, date):
        return Assignment(id=aid, date=date, slot_id="slot-1", staff_id="a", year=2026, month=2)

    assert AssignmentRepository.replace_month(db_session, 2026, 2, [make("x1", "2026-02-02")]) == 0
    assert AssignmentRepository.replace_month(
        db_session, 2026, 2, [make("x2", "2026-02-03"), make("x3", "2026-02-04")]
    ) == 1
    assert [a.id for a in AssignmentRepository.get_by_month(db_session, 2026, 2)] == ["x2", "x3"]

    added = AssignmentRepository.add_missing(db_session, [make("x3", "2026-02-04"), make("x4", "2026-02-05")])
    assert added == 1
    assert [a.id for a in AssignmentRepository.get_by_month(db_session, 2026, 2)] == ["x2", "x3", "x4"]

    assert AssignmentRepository.delete(db_session, "x2")
    assert AssignmentRepository.get_by_id(db_session, "x2") is None
    assert not AssignmentRepository.delete(db_session, "x2")
