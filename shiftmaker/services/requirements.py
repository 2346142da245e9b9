"""Day-type classification and slot requirements."""

from __future__ import annotations

from typing import Dict

import pandas as pd

from shiftmaker.domain.models import ROLE_ORDER, DayType, MonthSettings, Role

WEEKEND_DAYS = ("Saturday", "Sunday")


def day_type_for(date_str: str) -> DayType:
    """Saturday and Sunday are weekend days; no holiday calendar is consulted."""
    if pd.Timestamp(date_str).day_name() in WEEKEND_DAYS:
        return DayType.WEEKEND
    return DayType.WEEKDAY


def required_count(settings: MonthSettings, day_type: DayType, slot_id: str, role: Role) -> int:
    """
    Headcount for a (day type, slot, role) triple.

    The first matching requirement wins; no match means nobody is needed.
    """
    for req in settings.requirements:
        if req.slot_id == slot_id and req.day_type == day_type.value and req.role == role.value:
            return int(req.count or 0)
    return 0


def build_requirements_for_slot(date_str: str, slot_id: str, settings: MonthSettings) -> Dict[Role, int]:
    """
    Build role requirements for one slot on a specific day.

    Args:
        date_str: Date string in YYYY-MM-DD format
        slot_id: Slot to look up
        settings: MonthSettings with the configured requirements

    Returns:
        Dict of role -> count required, in leader, hall, kitchen order. Roles
        with no headcount are left out.
    """
    day_type = day_type_for(date_str)
    req: Dict[Role, int] = {}
    for role in ROLE_ORDER:
        count = required_count(settings, day_type, slot_id, role)
        if count > 0:
            req[role] = count
    return req
