"""Constraint predicates shared by the generator and the manual-edit validator."""

from __future__ import annotations

from typing import Iterable, Optional

from shiftmaker.domain.models import Assignment, Role, Staff, StaffRequest

from .weeks import week_end, week_start


def _role_value(role) -> str:
    if isinstance(role, Role):
        return role.value
    return str(role).strip().lower()


def is_role_eligible(staff_role, required_role) -> bool:
    """Roles are categorical: a staff member only ever fills their own role."""
    if not staff_role or not required_role:
        return False
    return _role_value(staff_role) == _role_value(required_role)


def find_request(
    requests: Iterable[StaffRequest], staff_id: str, date_str: str
) -> Optional[StaffRequest]:
    """First request for (staff, date), or None when none was submitted."""
    for req in requests:
        if req.staff_id == staff_id and req.date == date_str:
            return req
    return None


def is_available(request: Optional[StaffRequest], slot_id: str) -> bool:
    """
    Check availability for a slot given the day's request.

    No request means available for every slot. ``available=False`` excludes the
    day. A non-empty ``available_slots`` list restricts the day to those slots.
    """
    if request is None:
        return True
    if not request.available:
        return False
    allowed = request.available_slots or []
    if allowed and slot_id not in allowed:
        return False
    return True


def has_weekly_limit(staff: Staff) -> bool:
    """A limit of None or 0 counts as unset."""
    return bool(staff.weekly_limit)


def is_booked_on(
    staff_id: str,
    date_str: str,
    assignments: Iterable[Assignment],
    exclude_id: str | None = None,
) -> bool:
    """True when the staff member already holds any slot on the date."""
    return any(
        a.staff_id == staff_id and a.date == date_str and a.id != exclude_id
        for a in assignments
    )


def count_in_week(
    staff_id: str,
    date_str: str,
    assignments: Iterable[Assignment],
    exclude_id: str | None = None,
) -> int:
    """Assignments held in the Monday-Sunday week containing ``date_str``."""
    start = week_start(date_str)
    end = week_end(date_str)
    return sum(
        1
        for a in assignments
        if a.staff_id == staff_id and start <= a.date <= end and a.id != exclude_id
    )


def under_weekly_limit(
    staff: Staff, date_str: str, assignments: Iterable[Assignment]
) -> bool:
    if not has_weekly_limit(staff):
        return True
    return count_in_week(staff.id, date_str, assignments) < staff.weekly_limit


def can_assign_staff(
    staff: Staff,
    role: str,
    date_str: str,
    slot_id: str,
    assignments: Iterable[Assignment],
    requests: Iterable[StaffRequest],
) -> bool:
    """
    Check if a staff member can be assigned to a slot based on hard constraints.

    Args:
        staff: Staff member to check
        role: Role to fill (must match staff.role)
        date_str: Date of the slot (YYYY-MM-DD)
        slot_id: Slot to fill
        assignments: Assignments already decided
        requests: Availability requests

    Returns:
        True if the staff member can be assigned, False otherwise
    """
    assignments = list(assignments)

    # 1. Role eligibility
    if not is_role_eligible(staff.role, role):
        return False

    # 2. Availability request for the day
    if not is_available(find_request(requests, staff.id, date_str), slot_id):
        return False

    # 3. Not already assigned today
    if is_booked_on(staff.id, date_str, assignments):
        return False

    # 4. Weekly cap
    return under_weekly_limit(staff, date_str, assignments)
