"""Month-level checks run after generation. They only ever add warnings."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from shiftmaker.domain.models import Assignment, Staff
from shiftmaker.domain.warnings import ScheduleWarning, WarningType

from .constraints import has_weekly_limit
from .weeks import day_gap, weeks_in_month

logger = logging.getLogger(__name__)

DEFAULT_CONSECUTIVE_THRESHOLD = 3


def audit_weekly_limits(
    year: int,
    month: int,
    staff: Iterable[Staff],
    assignments: Iterable[Assignment],
) -> List[ScheduleWarning]:
    """
    Flag staff whose assignments inside any week window of the month exceed
    their weekly limit.

    Windows are labelled by their month-clamped start; counting covers the
    natural week intersected with the month.
    """
    assignments = list(assignments)
    windows = weeks_in_month(year, month)
    warnings: List[ScheduleWarning] = []

    for member in staff:
        if not has_weekly_limit(member):
            continue
        dates = [a.date for a in assignments if a.staff_id == member.id]
        for window in windows:
            count = sum(1 for d in dates if window.contains(d))
            if count > member.weekly_limit:
                warnings.append(
                    ScheduleWarning(
                        type=WarningType.WEEKLY_LIMIT,
                        staff_id=member.id,
                        date=window.label_start,
                        message=(
                            f"{member.name}: week {window.label_start} to {window.label_end} "
                            f"exceeds the weekly limit of {member.weekly_limit} ({count} assignments)"
                        ),
                    )
                )
    return warnings


def audit_consecutive_days(
    staff: Iterable[Staff],
    assignments: Iterable[Assignment],
    threshold: int = DEFAULT_CONSECUTIVE_THRESHOLD,
) -> List[ScheduleWarning]:
    """
    Flag unbroken runs of working days.

    A warning is emitted for every day on which a run is at least
    ``threshold`` days long, so a 5-day run with the default threshold yields
    warnings on its 3rd, 4th and 5th day.
    """
    dates_by_staff: Dict[str, set] = defaultdict(set)
    for a in assignments:
        dates_by_staff[a.staff_id].add(a.date)

    warnings: List[ScheduleWarning] = []
    for member in staff:
        dates = sorted(dates_by_staff.get(member.id, ()))
        streak = 1
        for prev, curr in zip(dates, dates[1:]):
            if day_gap(prev, curr) == 1:
                streak += 1
                if streak >= threshold:
                    warnings.append(
                        ScheduleWarning(
                            type=WarningType.CONSECUTIVE,
                            staff_id=member.id,
                            date=curr,
                            message=f"{member.name}: {streak} consecutive working days through {curr}",
                        )
                    )
            else:
                streak = 1
    return warnings


def audit_month(
    year: int,
    month: int,
    staff: Iterable[Staff],
    assignments: Iterable[Assignment],
    consecutive_threshold: int = DEFAULT_CONSECUTIVE_THRESHOLD,
) -> List[ScheduleWarning]:
    """Weekly-limit audit followed by the consecutive-day audit."""
    staff = list(staff)
    assignments = list(assignments)
    warnings = audit_weekly_limits(year, month, staff, assignments)
    warnings.extend(audit_consecutive_days(staff, assignments, consecutive_threshold))
    logger.debug("Audit %04d-%02d produced %d warnings", year, month, len(warnings))
    return warnings
