"""Tests for the orchestrator and its persistence paths."""

import pytest

from shiftmaker.config import RequirementConfig, SchedulerConfig
from shiftmaker.domain.repositories import (
    AssignmentRepository,
    RequestRepository,
    SettingsRepository,
    StaffRepository,
)
from shiftmaker.domain.warnings import WarningType
from shiftmaker.engine.orchestrator import (
    Orchestrator,
    apply_manual_edit,
    audit_stored_month,
    build_month_schedule,
    remove_assignment,
)
from shiftmaker.io.seed import seed_database


@pytest.fixture
def small_setup(db_session):
    StaffRepository.create(db_session, "Lena", "leader", 5, staff_id="lead")
    StaffRepository.create(db_session, "Hugo", "hall", 3, weekly_limit=1, staff_id="hall")
    cfg = SchedulerConfig(
        requirements=[
            RequirementConfig("weekday", "slot-1", "leader", 1),
            RequirementConfig("weekday", "slot-1", "hall", 1),
        ]
    ).validate()
    SettingsRepository.save(db_session, cfg.to_month_settings(2026, 2))
    return db_session


def test_build_requires_settings(db_session):
    StaffRepository.create(db_session, "Lena", "leader", 5, staff_id="lead")
    with pytest.raises(ValueError, match="No shift settings"):
        build_month_schedule(db_session, 2026, 2)


def test_build_requires_staff(db_session):
    SettingsRepository.save(db_session, SchedulerConfig().to_month_settings(2026, 2))
    with pytest.raises(ValueError, match="No staff"):
        build_month_schedule(db_session, 2026, 2)


def test_build_rejects_bad_month(small_setup):
    with pytest.raises(ValueError):
        Orchestrator().build_schedule(small_setup, 2026, 13)


def test_build_without_persist_stores_nothing(small_setup):
    result = build_month_schedule(small_setup, 2026, 2, persist=False)
    assert result.assignments
    assert AssignmentRepository.get_by_month(small_setup, 2026, 2) == []


def test_build_persists_and_overwrites(small_setup):
    first = build_month_schedule(small_setup, 2026, 2)
    first_ids = sorted(first.assignment_ids())
    stored = AssignmentRepository.get_by_month(small_setup, 2026, 2)
    assert sorted(a.id for a in stored) == first_ids

    apply_manual_edit(small_setup, "2026-02-07", "slot-1", "hall")
    assert len(AssignmentRepository.get_by_month(small_setup, 2026, 2)) == len(first_ids) + 1

    build_month_schedule(small_setup, 2026, 2)
    again = AssignmentRepository.get_by_month(small_setup, 2026, 2)
    assert sorted(a.id for a in again) == first_ids
    assert not any(a.is_manual for a in again)


def test_build_keep_existing_adds_only_new(small_setup):
    apply_manual_edit(small_setup, "2026-02-07", "slot-1", "hall")
    build_month_schedule(small_setup, 2026, 2)
    build_month_schedule(small_setup, 2026, 2, persist=True, overwrite=False)

    stored = AssignmentRepository.get_by_month(small_setup, 2026, 2)
    ids = [a.id for a in stored]
    assert len(ids) == len(set(ids))

    build_month_schedule(small_setup, 2026, 2, overwrite=False)
    assert len(AssignmentRepository.get_by_month(small_setup, 2026, 2)) == len(stored)


def test_build_uses_month_requests(small_setup):
    RequestRepository.save_month(small_setup, "lead", 2026, 2, [{"date": "2026-02-03", "available": False}])

    result = build_month_schedule(small_setup, 2026, 2, persist=False)

    assert "lead" not in {a.staff_id for a in result.assignments if a.date == "2026-02-03"}
    shortages = [w for w in result.warnings_of(WarningType.ROLE_SHORTAGE) if w.date == "2026-02-03"]
    assert {w.role for w in shortages} == {"leader", "hall"}


def test_manual_edit_creates_assignment(small_setup):
    assignment, warnings = apply_manual_edit(small_setup, "2026-02-03", "slot-1", "hall")

    assert assignment.id.startswith("asgn-")
    assert assignment.is_manual
    assert (assignment.year, assignment.month) == (2026, 2)
    assert warnings == []
    assert AssignmentRepository.get_by_id(small_setup, assignment.id) is not None


def test_manual_edit_reports_but_stores_violations(small_setup):
    build_month_schedule(small_setup, 2026, 2)
    RequestRepository.save_month(small_setup, "hall", 2026, 2, [{"date": "2026-02-03", "available": False}])

    # Hall already works Monday 2026-02-02 and has a weekly limit of 1
    assignment, warnings = apply_manual_edit(small_setup, "2026-02-03", "slot-1", "hall")

    assert [w.type for w in warnings] == [WarningType.NO_STAFF, WarningType.WEEKLY_LIMIT]
    assert AssignmentRepository.get_by_id(small_setup, assignment.id) is not None


def test_manual_edit_repoints_existing(small_setup):
    build_month_schedule(small_setup, 2026, 2)
    StaffRepository.create(small_setup, "Ida", "hall", 2, staff_id="ida")

    target_id = "2026-02-02-slot-1-hall"
    assignment, warnings = apply_manual_edit(small_setup, "2026-02-02", "slot-1", "ida", assignment_id=target_id)

    assert assignment.id == target_id
    assert assignment.staff_id == "ida"
    assert assignment.is_manual
    assert warnings == []


def test_manual_edit_unknown_ids(small_setup):
    with pytest.raises(LookupError):
        apply_manual_edit(small_setup, "2026-02-03", "slot-1", "ghost")
    with pytest.raises(LookupError):
        apply_manual_edit(small_setup, "2026-02-03", "slot-1", "hall", assignment_id="nope")
    with pytest.raises(ValueError):
        apply_manual_edit(small_setup, "2026-02-30", "slot-1", "hall")


def test_manual_edit_rejects_unknown_slot(small_setup):
    with pytest.raises(LookupError, match="slot-99"):
        apply_manual_edit(small_setup, "2026-02-03", "slot-99", "lead")
    assert AssignmentRepository.get_by_month(small_setup, 2026, 2) == []


def test_manual_edit_requires_stored_slots(db_session):
    StaffRepository.create(db_session, "Lena", "leader", 5, staff_id="lead")
    with pytest.raises(LookupError):
        apply_manual_edit(db_session, "2026-02-03", "slot-1", "lead")


def test_remove_and_audit_stored_month(small_setup):
    build_month_schedule(small_setup, 2026, 2)
    assert audit_stored_month(small_setup, 2026, 2, SchedulerConfig(consecutive_days_threshold=6)) == []

    apply_manual_edit(small_setup, "2026-02-04", "slot-1", "hall")
    warnings = audit_stored_month(small_setup, 2026, 2)
    assert [w.type for w in warnings if w.staff_id == "hall"] == [WarningType.WEEKLY_LIMIT]

    assert remove_assignment(small_setup, "2026-02-02-slot-1-hall")
    assert not remove_assignment(small_setup, "2026-02-02-slot-1-hall")


@pytest.mark.integration
def test_seeded_month_generates(db_session):
    seed_database(db_session)

    result = build_month_schedule(db_session, 2026, 2)

    stored = AssignmentRepository.get_by_month(db_session, 2026, 2)
    assert len(stored) == len(result.assignments) > 0
    assert not any(a.staff_id == "staff-01" and a.date in ("2026-02-01", "2026-02-02") for a in stored)
    staff_03 = {(a.date, a.slot_id) for a in stored if a.staff_id == "staff-03"}
    assert not {d for d, s in staff_03 if d in ("2026-02-10", "2026-02-11") and s != "slot-3"}
