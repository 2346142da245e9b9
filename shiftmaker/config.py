"""Configuration loading (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from shiftmaker.domain.db import DEFAULT_DB_URL
from shiftmaker.domain.models import DEFAULT_SLOTS, DayType, MonthSettings, Requirement, Role, ShiftSlot


@dataclass
class SlotConfig:
    id: str
    label: str
    order: int = 0


@dataclass
class RequirementConfig:
    day_type: str
    slot_id: str
    role: str
    count: int


def _default_slots() -> List[SlotConfig]:
    return [SlotConfig(id=sid, label=label, order=order) for sid, label, order in DEFAULT_SLOTS]


@dataclass
class SchedulerConfig:
    db_url: str = DEFAULT_DB_URL
    consecutive_days_threshold: int = 3
    slots: List[SlotConfig] = field(default_factory=_default_slots)
    requirements: List[RequirementConfig] = field(default_factory=list)

    def validate(self) -> "SchedulerConfig":
        """
        Raises:
            ValueError: On an unknown role or day type, a negative count, a
                duplicate slot id, or a requirement for a slot that is not defined.
        """
        if self.consecutive_days_threshold < 2:
            raise ValueError("consecutive_days_threshold must be at least 2")

        slot_ids = set()
        for slot in self.slots:
            if slot.id in slot_ids:
                raise ValueError(f"Duplicate slot id {slot.id!r}")
            slot_ids.add(slot.id)

        roles = {r.value for r in Role}
        day_types = {d.value for d in DayType}
        for req in self.requirements:
            if req.role not in roles:
                raise ValueError(f"Unknown role {req.role!r} in requirements")
            if req.day_type not in day_types:
                raise ValueError(f"Unknown day_type {req.day_type!r} in requirements")
            if req.count < 0:
                raise ValueError(f"Negative headcount for {req.slot_id}/{req.role}")
            if req.slot_id not in slot_ids:
                raise ValueError(f"Requirement references undefined slot {req.slot_id!r}")
        return self

    def to_month_settings(self, year: int, month: int) -> MonthSettings:
        """Transient settings objects built from this configuration."""
        slots = [ShiftSlot(id=s.id, label=s.label, order=s.order) for s in self.slots]
        requirements = [
            Requirement(
                id=f"req-{idx}",
                day_type=r.day_type,
                slot_id=r.slot_id,
                role=r.role,
                count=r.count,
            )
            for idx, r in enumerate(self.requirements, start=1)
        ]
        return MonthSettings(year=year, month=month, slots=slots, requirements=requirements)


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text) or {}
    return yaml.safe_load(text) or {}


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """Load config from a YAML or JSON file; no path gives the defaults."""
    if path is None:
        return SchedulerConfig().validate()

    raw = _read_raw(Path(path))
    cfg = SchedulerConfig()
    if "db_url" in raw:
        cfg.db_url = str(raw["db_url"])
    if "consecutive_days_threshold" in raw:
        cfg.consecutive_days_threshold = int(raw["consecutive_days_threshold"])
    if raw.get("slots"):
        cfg.slots = [
            SlotConfig(id=str(s["id"]), label=str(s.get("label", s["id"])), order=int(s.get("order", idx)))
            for idx, s in enumerate(raw["slots"], start=1)
        ]
    cfg.requirements = [
        RequirementConfig(
            day_type=str(r["day_type"]).lower(),
            slot_id=str(r["slot_id"]),
            role=str(r["role"]).lower(),
            count=int(r["count"]),
        )
        for r in raw.get("requirements") or []
    ]
    return cfg.validate()
