"""Orchestrator - loads inputs, runs the month scheduler and persists its output."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Tuple

from sqlalchemy.orm import Session

from shiftmaker.config import SchedulerConfig
from shiftmaker.domain.models import Assignment, utcnow
from shiftmaker.domain.repositories import (
    AssignmentRepository,
    RequestRepository,
    SettingsRepository,
    StaffRepository,
    generate_id,
)
from shiftmaker.domain.warnings import ScheduleWarning
from shiftmaker.services.audit import audit_month
from shiftmaker.services.violations import check_violations

from .base import BaseScheduler, ScheduleResult
from .greedy import GreedyScheduler

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Coordinates repositories and a scheduler for one month.

    The scheduler itself stays pure; everything that touches the session
    lives here.
    """

    def __init__(self, scheduler: BaseScheduler | None = None):
        self.scheduler = scheduler or GreedyScheduler()

    def build_schedule(self, session: Session, year: int, month: int) -> ScheduleResult:
        """
        Build the schedule for a month from stored staff, settings and requests.

        Raises:
            ValueError: If the month is invalid, no settings are stored or the
                roster is empty
        """
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month {month}")

        settings = SettingsRepository.get(session, year, month)
        if settings is None:
            raise ValueError("No shift settings found; save settings before generating")
        staff = StaffRepository.get_all(session)
        if not staff:
            raise ValueError("No staff registered")
        requests = RequestRepository.get_for_month(session, year, month)

        logger.info(
            "Building %04d-%02d with %s scheduler: %d staff, %d slots, %d requests",
            year,
            month,
            self.scheduler.name,
            len(staff),
            len(settings.slots),
            len(requests),
        )
        return self.scheduler.generate(year, month, staff, settings, requests)


def build_month_schedule(
    session: Session,
    year: int,
    month: int,
    cfg: SchedulerConfig | None = None,
    persist: bool = True,
    overwrite: bool = True,
) -> ScheduleResult:
    """
    Generate a month and optionally store it.

    Args:
        session: Database session
        year: Calendar year
        month: Calendar month, 1-12
        cfg: SchedulerConfig (defaults when omitted)
        persist: If True, save assignments to the database
        overwrite: Replace the stored month when True; otherwise keep it and
            add only generated assignments whose id is not stored yet

    Returns:
        ScheduleResult of the generation run
    """
    cfg = cfg or SchedulerConfig()
    scheduler = GreedyScheduler(consecutive_threshold=cfg.consecutive_days_threshold)
    result = Orchestrator(scheduler).build_schedule(session, year, month)

    if persist:
        if overwrite:
            deleted = AssignmentRepository.replace_month(session, year, month, result.assignments)
            if deleted > 0:
                logger.info("Deleted %d existing assignments for %04d-%02d", deleted, year, month)
            logger.info("Persisted %d assignments", len(result.assignments))
        else:
            added = AssignmentRepository.add_missing(session, result.assignments)
            logger.info("Persisted %d new assignments (%d already stored)", added, len(result.assignments) - added)

    return result


def apply_manual_edit(
    session: Session,
    date_str: str,
    slot_id: str,
    staff_id: str,
    assignment_id: str | None = None,
) -> Tuple[Assignment, List[ScheduleWarning]]:
    """
    Store a hand-made assignment and report what it violates.

    With ``assignment_id`` the existing assignment is re-pointed at
    ``staff_id``; without it a new manual assignment is created. The write
    always happens; the returned warnings are advisory.

    Raises:
        LookupError: If ``assignment_id``, ``staff_id`` or ``slot_id`` is unknown
        ValueError: If ``date_str`` is not a valid YYYY-MM-DD date
    """
    if StaffRepository.get_by_id(session, staff_id) is None:
        raise LookupError(f"Staff {staff_id} not found")

    if assignment_id:
        target = AssignmentRepository.get_by_id(session, assignment_id)
        if target is None:
            raise LookupError(f"Assignment {assignment_id} not found")
        target.staff_id = staff_id
        target.is_manual = True
        session.commit()
    else:
        day = date.fromisoformat(date_str)
        settings = SettingsRepository.get(session, day.year, day.month)
        if settings is None or settings.slot_by_id(slot_id) is None:
            raise LookupError(f"Slot {slot_id} not found")
        target = AssignmentRepository.save(
            session,
            Assignment(
                id=generate_id("asgn"),
                date=day.isoformat(),
                slot_id=slot_id,
                staff_id=staff_id,
                year=day.year,
                month=day.month,
                is_manual=True,
                created_at=utcnow(),
            ),
        )

    warnings = check_violations(
        target,
        AssignmentRepository.get_all(session),
        StaffRepository.get_all(session),
        RequestRepository.get_all(session),
    )
    for warning in warnings:
        logger.warning("Manual edit %s: %s", target.id, warning.message)
    return target, warnings


def remove_assignment(session: Session, assignment_id: str) -> bool:
    removed = AssignmentRepository.delete(session, assignment_id)
    if removed:
        logger.info("Deleted assignment %s", assignment_id)
    return removed


def audit_stored_month(
    session: Session, year: int, month: int, cfg: SchedulerConfig | None = None
) -> List[ScheduleWarning]:
    """Re-run the month audits over what is stored, including manual edits."""
    cfg = cfg or SchedulerConfig()
    return audit_month(
        year,
        month,
        StaffRepository.get_all(session),
        AssignmentRepository.get_by_month(session, year, month),
        cfg.consecutive_days_threshold,
    )
