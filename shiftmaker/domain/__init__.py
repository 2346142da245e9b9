"""Domain models and data access layer."""

from .models import (
    ROLE_ORDER,
    Assignment,
    Base,
    DayType,
    MonthSettings,
    Requirement,
    Role,
    ShiftSlot,
    Staff,
    StaffRequest,
    default_month_settings,
)
from .repositories import AssignmentRepository, RequestRepository, SettingsRepository, StaffRepository
from .warnings import ScheduleWarning, WarningType

__all__ = [
    "ROLE_ORDER",
    "Assignment",
    "Base",
    "DayType",
    "MonthSettings",
    "Requirement",
    "Role",
    "ShiftSlot",
    "Staff",
    "StaffRequest",
    "default_month_settings",
    "AssignmentRepository",
    "RequestRepository",
    "SettingsRepository",
    "StaffRepository",
    "ScheduleWarning",
    "WarningType",
]
