"""Scheduling engine: month schedulers and the orchestrator around them."""

from .base import BaseScheduler, ScheduleResult
from .greedy import GreedyScheduler, generate_schedule
from .orchestrator import (
    Orchestrator,
    apply_manual_edit,
    audit_stored_month,
    build_month_schedule,
    remove_assignment,
)

__all__ = [
    "BaseScheduler",
    "ScheduleResult",
    "GreedyScheduler",
    "generate_schedule",
    "Orchestrator",
    "apply_manual_edit",
    "audit_stored_month",
    "build_month_schedule",
    "remove_assignment",
]
