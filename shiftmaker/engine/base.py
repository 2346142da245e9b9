"""Base scheduler interface that all month schedulers must implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from shiftmaker.domain.models import Assignment, MonthSettings, Staff, StaffRequest
from shiftmaker.domain.warnings import ScheduleWarning, WarningType


@dataclass
class ScheduleResult:
    """Assignments produced for a month plus the warnings raised on the way."""

    assignments: List[Assignment] = field(default_factory=list)
    warnings: List[ScheduleWarning] = field(default_factory=list)

    def warnings_of(self, warning_type: WarningType) -> List[ScheduleWarning]:
        return [w for w in self.warnings if w.type == warning_type]

    def assignment_ids(self) -> List[str]:
        return [a.id for a in self.assignments]


class BaseScheduler(ABC):
    """
    Abstract base class for month schedulers.

    A scheduler is a pure function of its inputs: it never touches the
    database and keeps no state between calls.
    """

    name: str = "base"

    @abstractmethod
    def generate(
        self,
        year: int,
        month: int,
        staff: List[Staff],
        settings: MonthSettings,
        requests: List[StaffRequest],
    ) -> ScheduleResult:
        """
        Generate assignments for every day of the month.

        Args:
            year: Calendar year
            month: Calendar month, 1-12
            staff: Roster, in roster order
            settings: Slots and requirements
            requests: Availability requests; a superset of the month is fine

        Returns:
            ScheduleResult with transient Assignment objects (not yet persisted)
            and the warnings for the month
        """
        pass
