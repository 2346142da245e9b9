"""Single-pass greedy month scheduler."""

from __future__ import annotations

import logging
from collections import deque
from typing import List

from shiftmaker.domain.models import (
    Assignment,
    MonthSettings,
    Role,
    ShiftSlot,
    Staff,
    StaffRequest,
    utcnow,
)
from shiftmaker.domain.warnings import ScheduleWarning, WarningType
from shiftmaker.services.audit import DEFAULT_CONSECUTIVE_THRESHOLD, audit_month
from shiftmaker.services.eligibility import eligible_candidates
from shiftmaker.services.requirements import build_requirements_for_slot
from shiftmaker.services.weeks import month_dates

from .base import BaseScheduler, ScheduleResult

logger = logging.getLogger(__name__)


def assignment_id(date_str: str, slot_id: str, staff_id: str) -> str:
    """Deterministic id, so identical runs produce identical ids."""
    return f"{date_str}-{slot_id}-{staff_id}"


def shortage_warning(
    date_str: str, slot: ShiftSlot, role: Role, needed: int, filled: int
) -> ScheduleWarning:
    return ScheduleWarning(
        type=WarningType.ROLE_SHORTAGE,
        date=date_str,
        slot_id=slot.id,
        role=role.value,
        message=(
            f"{date_str} [{slot.label}]: {role.label} needs {needed} "
            f"but only {filled} could be assigned"
        ),
    )


class GreedyScheduler(BaseScheduler):
    """
    Fill every (day, slot, role) cell in turn with the best eligible staff.

    Days run in calendar order, slots by their configured order and roles as
    leader, hall, kitchen. Decisions are never revisited: a cell that runs out
    of candidates gets a role_shortage warning and is left short. The month
    audits run once at the end over the full result.
    """

    name = "greedy"

    def __init__(self, consecutive_threshold: int = DEFAULT_CONSECUTIVE_THRESHOLD):
        self.consecutive_threshold = consecutive_threshold

    def generate(
        self,
        year: int,
        month: int,
        staff: List[Staff],
        settings: MonthSettings,
        requests: List[StaffRequest],
    ) -> ScheduleResult:
        staff = list(staff)
        requests = list(requests)
        result = ScheduleResult()
        created_at = utcnow()
        slots = settings.sorted_slots()

        for date_str in month_dates(year, month):
            for slot in slots:
                for role, needed in build_requirements_for_slot(date_str, slot.id, settings).items():
                    queue = deque(
                        eligible_candidates(
                            staff, role, date_str, slot.id, result.assignments, requests
                        )
                    )
                    filled = 0
                    while filled < needed and queue:
                        chosen = queue.popleft()
                        result.assignments.append(
                            Assignment(
                                id=assignment_id(date_str, slot.id, chosen.id),
                                date=date_str,
                                slot_id=slot.id,
                                staff_id=chosen.id,
                                year=year,
                                month=month,
                                is_manual=False,
                                created_at=created_at,
                            )
                        )
                        filled += 1

                    if filled < needed:
                        logger.debug(
                            "Short on %s %s %s: %d of %d", date_str, slot.id, role.value, filled, needed
                        )
                        result.warnings.append(shortage_warning(date_str, slot, role, needed, filled))

        result.warnings.extend(
            audit_month(year, month, staff, result.assignments, self.consecutive_threshold)
        )
        logger.info(
            "Generated %d assignments for %04d-%02d with %d warnings",
            len(result.assignments),
            year,
            month,
            len(result.warnings),
        )
        return result


def generate_schedule(
    year: int,
    month: int,
    staff: List[Staff],
    settings: MonthSettings,
    requests: List[StaffRequest],
    consecutive_threshold: int = DEFAULT_CONSECUTIVE_THRESHOLD,
) -> ScheduleResult:
    """Convenience wrapper around GreedyScheduler.generate."""
    scheduler = GreedyScheduler(consecutive_threshold=consecutive_threshold)
    return scheduler.generate(year, month, staff, settings, requests)
