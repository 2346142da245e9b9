"""Candidate selection for a single (date, slot, role) cell."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from shiftmaker.domain.models import Assignment, Staff, StaffRequest

from .constraints import can_assign_staff


def rank_candidates(candidates: Iterable[Staff], assignments: Iterable[Assignment]) -> List[Staff]:
    """
    Order candidates by priority (5 first), then by how few assignments they
    already hold. The sort is stable, so exact ties keep roster order.
    """
    held = Counter(a.staff_id for a in assignments)
    return sorted(candidates, key=lambda s: (-(s.priority or 0), held[s.id]))


def eligible_candidates(
    staff: Iterable[Staff],
    role: str,
    date_str: str,
    slot_id: str,
    existing_assignments: Iterable[Assignment],
    requests: Iterable[StaffRequest],
) -> List[Staff]:
    """
    Staff who may legally fill ``role`` in ``slot_id`` on ``date_str``, best first.

    Filters: matching role, not marked unavailable, slot allowed by the day's
    request, not already booked that day, and under any weekly limit.
    """
    existing = list(existing_assignments)
    requests = list(requests)
    pool = [
        s for s in staff
        if can_assign_staff(s, role, date_str, slot_id, existing, requests)
    ]
    return rank_candidates(pool, existing)
