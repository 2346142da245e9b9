"""Non-blocking schedule warnings."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class WarningType(str, Enum):
    ROLE_SHORTAGE = "role_shortage"
    WEEKLY_LIMIT = "weekly_limit"
    CONSECUTIVE = "consecutive"
    NO_STAFF = "no_staff"


@dataclass(frozen=True)
class ScheduleWarning:
    """
    Informational observation emitted alongside assignments.

    Which references are filled depends on the type:
    - ROLE_SHORTAGE: date, slot_id, role
    - WEEKLY_LIMIT: staff_id, date (week start or edited date)
    - CONSECUTIVE: staff_id, date (day the streak reached)
    - NO_STAFF: staff_id, date
    """

    type: WarningType
    message: str
    date: Optional[str] = None
    slot_id: Optional[str] = None
    staff_id: Optional[str] = None
    role: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in asdict(self).items() if v is not None}
        data["type"] = self.type.value
        return data

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.message}"
