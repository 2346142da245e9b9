"""Services for scheduling logic."""

from .audit import audit_consecutive_days, audit_month, audit_weekly_limits
from .constraints import can_assign_staff, is_role_eligible
from .eligibility import eligible_candidates, rank_candidates
from .requirements import build_requirements_for_slot, day_type_for
from .summary import summarize_schedule
from .violations import check_violations
from .weeks import week_end, week_start, weeks_in_month

__all__ = [
    "audit_consecutive_days",
    "audit_month",
    "audit_weekly_limits",
    "can_assign_staff",
    "is_role_eligible",
    "eligible_candidates",
    "rank_candidates",
    "build_requirements_for_slot",
    "day_type_for",
    "summarize_schedule",
    "check_violations",
    "week_end",
    "week_start",
    "weeks_in_month",
]
