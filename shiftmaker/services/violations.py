"""Advisory checks for a single hand-edited assignment."""

from __future__ import annotations

from typing import Iterable, List

from shiftmaker.domain.models import Assignment, Staff, StaffRequest
from shiftmaker.domain.warnings import ScheduleWarning, WarningType

from .constraints import count_in_week, find_request, has_weekly_limit, is_booked_on


def check_violations(
    assignment: Assignment,
    all_assignments: Iterable[Assignment],
    staff: Iterable[Staff],
    requests: Iterable[StaffRequest],
) -> List[ScheduleWarning]:
    """
    Re-check one proposed assignment against availability, double-booking
    and the weekly limit.

    Every applicable warning is returned; nothing is blocked. The assignment's
    own id is excluded from the double-booking and weekly counts so that
    re-saving an edit does not conflict with itself. An unknown staff id
    yields no warnings.
    """
    member = next((s for s in staff if s.id == assignment.staff_id), None)
    if member is None:
        return []

    all_assignments = list(all_assignments)
    warnings: List[ScheduleWarning] = []

    req = find_request(requests, member.id, assignment.date)
    if req is not None and not req.available:
        warnings.append(
            ScheduleWarning(
                type=WarningType.NO_STAFF,
                date=assignment.date,
                staff_id=member.id,
                message=f"{member.name} asked not to work on {assignment.date}",
            )
        )

    if is_booked_on(member.id, assignment.date, all_assignments, exclude_id=assignment.id):
        warnings.append(
            ScheduleWarning(
                type=WarningType.NO_STAFF,
                date=assignment.date,
                staff_id=member.id,
                message=f"{member.name} is already assigned to another slot on {assignment.date}",
            )
        )

    if has_weekly_limit(member):
        held = count_in_week(member.id, assignment.date, all_assignments, exclude_id=assignment.id)
        if held >= member.weekly_limit:
            warnings.append(
                ScheduleWarning(
                    type=WarningType.WEEKLY_LIMIT,
                    date=assignment.date,
                    staff_id=member.id,
                    message=f"{member.name} has reached the weekly limit of {member.weekly_limit}",
                )
            )

    return warnings
