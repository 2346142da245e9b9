"""Text summaries of a month's schedule."""

from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from shiftmaker.domain.models import Assignment, ShiftSlot, Staff
from shiftmaker.domain.warnings import ScheduleWarning


def assignments_frame(assignments: Iterable[Assignment]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "id": a.id,
                "date": a.date,
                "slot_id": a.slot_id,
                "staff_id": a.staff_id,
                "is_manual": bool(a.is_manual),
            }
            for a in assignments
        ],
        columns=["id", "date", "slot_id", "staff_id", "is_manual"],
    )


def summarize_schedule(
    assignments: Iterable[Assignment],
    staff: Iterable[Staff],
    slots: Iterable[ShiftSlot],
) -> str:
    df = assignments_frame(assignments)
    if df.empty:
        return "No assignments."

    slot_labels = {s.id: s.label for s in sorted(slots, key=lambda s: s.order)}
    names = {s.id: s.name for s in staff}
    df["slot"] = df["slot_id"].map(lambda sid: slot_labels.get(sid, sid))
    df["name"] = df["staff_id"].map(lambda sid: names.get(sid, sid))

    coverage = df.groupby(["date", "slot"]).size().unstack(fill_value=0)
    ordered = [label for label in slot_labels.values() if label in coverage.columns]
    coverage = coverage[ordered + [c for c in coverage.columns if c not in ordered]]
    per_staff = df.groupby("name").size().sort_values(ascending=False)

    lines = ["Headcount per day per slot:"]
    lines.append(coverage.to_string())
    lines.append("")
    lines.append(f"Manual assignments: {int(df['is_manual'].sum())}")
    lines.append("")
    lines.append("Assignments per staff member (month):")
    lines.append(per_staff.to_string())
    return "\n".join(lines)


def format_warnings(warnings: Iterable[ScheduleWarning]) -> List[str]:
    return [str(w) for w in warnings]
