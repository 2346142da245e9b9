"""Repository classes for data access."""

from __future__ import annotations

import secrets
import time
from datetime import date
from typing import Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from .models import (
    Assignment,
    DayType,
    MonthSettings,
    Requirement,
    Role,
    ShiftSlot,
    Staff,
    StaffRequest,
    default_month_settings,
    utcnow,
)

UNSET = object()


def generate_id(prefix: str) -> str:
    """Opaque id in the form ``<prefix>-<epoch millis>-<random>``."""
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


def month_prefix(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}-"


def parse_role(value) -> Role:
    """Normalize a role string; raises ValueError for anything outside the three roles."""
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown role {value!r}; expected one of leader, hall, kitchen") from None


def parse_weekly_limit(value) -> Optional[int]:
    """Empty, None and 0 all mean "no weekly limit"."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    limit = int(value)
    if limit < 0:
        raise ValueError(f"Weekly limit must not be negative: {limit}")
    return limit or None


def parse_priority(value) -> int:
    priority = int(value)
    if not 1 <= priority <= 5:
        raise ValueError(f"Priority must be between 1 and 5, got {priority}")
    return priority


class StaffRepository:
    """Repository for roster data access."""

    @staticmethod
    def get_all(session: Session) -> List[Staff]:
        """Get all staff in roster order (creation time, then id)."""
        return session.query(Staff).order_by(Staff.created_at, Staff.id).all()

    @staticmethod
    def get_by_id(session: Session, staff_id: str) -> Optional[Staff]:
        return session.get(Staff, staff_id)

    @staticmethod
    def get_by_role(session: Session, role: str) -> List[Staff]:
        role = parse_role(role)
        return (
            session.query(Staff)
            .filter(Staff.role == role.value)
            .order_by(Staff.created_at, Staff.id)
            .all()
        )

    @staticmethod
    def create(
        session: Session,
        name: str,
        role: str,
        priority,
        weekly_limit=None,
        staff_id: str | None = None,
    ) -> Staff:
        """
        Create a staff member.

        Raises:
            ValueError: If name is blank, the role is unknown, priority is outside
                1-5 or the weekly limit is negative.
        """
        if not name or not str(name).strip():
            raise ValueError("Staff name is required")
        if priority is None:
            raise ValueError("Staff priority is required")
        staff = Staff(
            id=staff_id or generate_id("staff"),
            name=str(name).strip(),
            role=parse_role(role).value,
            priority=parse_priority(priority),
            weekly_limit=parse_weekly_limit(weekly_limit),
            created_at=utcnow(),
        )
        session.add(staff)
        session.commit()
        session.refresh(staff)
        return staff

    @staticmethod
    def update(
        session: Session,
        staff_id: str,
        name=None,
        role=None,
        priority=None,
        weekly_limit=UNSET,
    ) -> Staff:
        """
        Partially update a staff member. Passing ``weekly_limit=None`` or ``""``
        clears the limit; leaving it out keeps the current one.
        """
        staff = session.get(Staff, staff_id)
        if staff is None:
            raise LookupError(f"Staff {staff_id} not found")
        if name is not None:
            staff.name = str(name).strip()
        if role is not None:
            staff.role = parse_role(role).value
        if priority is not None:
            staff.priority = parse_priority(priority)
        if weekly_limit is not UNSET:
            staff.weekly_limit = parse_weekly_limit(weekly_limit)
        session.commit()
        return staff

    @staticmethod
    def delete(session: Session, staff_id: str) -> bool:
        """Delete a staff member with their requests and assignments."""
        staff = session.get(Staff, staff_id)
        if staff is None:
            return False
        session.delete(staff)
        session.commit()
        return True

    @staticmethod
    def bulk_create(session: Session, staff: List[Staff]) -> None:
        session.add_all(staff)
        session.commit()


class SettingsRepository:
    """Repository for slot and requirement configuration."""

    @staticmethod
    def get(session: Session, year: int, month: int) -> Optional[MonthSettings]:
        """Settings for a month, or None if no slot has been configured yet."""
        slots = session.query(ShiftSlot).order_by(ShiftSlot.order, ShiftSlot.id).all()
        if not slots:
            return None
        requirements = session.query(Requirement).order_by(Requirement.id).all()
        return MonthSettings(year=year, month=month, slots=slots, requirements=requirements)

    @staticmethod
    def get_or_default(session: Session, year: int, month: int) -> MonthSettings:
        return SettingsRepository.get(session, year, month) or default_month_settings(year, month)

    @staticmethod
    def save(session: Session, settings: MonthSettings) -> MonthSettings:
        """Replace all slots and requirements with the given ones."""
        if not settings.slots:
            raise ValueError("Settings need at least one slot")
        for existing in session.query(Requirement).all():
            session.delete(existing)
        for existing in session.query(ShiftSlot).all():
            session.delete(existing)
        session.flush()

        slot_ids = set()
        for slot in settings.slots:
            slot_ids.add(slot.id)
            session.add(ShiftSlot(id=slot.id, label=slot.label, order=slot.order))
        for idx, req in enumerate(settings.requirements, start=1):
            if req.slot_id not in slot_ids:
                raise ValueError(f"Requirement references unknown slot {req.slot_id!r}")
            session.add(
                Requirement(
                    id=req.id or f"req-{idx}",
                    day_type=DayType(req.day_type).value,
                    slot_id=req.slot_id,
                    role=parse_role(req.role).value,
                    count=int(req.count),
                )
            )
        session.commit()
        return SettingsRepository.get(session, settings.year, settings.month)


class RequestRepository:
    """Repository for staff availability requests."""

    @staticmethod
    def get_all(session: Session) -> List[StaffRequest]:
        return session.query(StaffRequest).order_by(StaffRequest.date, StaffRequest.staff_id).all()

    @staticmethod
    def get_for_month(
        session: Session, year: int, month: int, staff_id: str | None = None
    ) -> List[StaffRequest]:
        query = session.query(StaffRequest).filter(
            StaffRequest.date.like(f"{month_prefix(year, month)}%")
        )
        if staff_id is not None:
            query = query.filter(StaffRequest.staff_id == staff_id)
        return query.order_by(StaffRequest.date, StaffRequest.staff_id).all()

    @staticmethod
    def save_month(
        session: Session,
        staff_id: str,
        year: int,
        month: int,
        entries: Iterable[Mapping],
    ) -> List[StaffRequest]:
        """
        Replace one staff member's requests for a month.

        Each entry needs ``date`` and ``available``; ``available_slots`` defaults
        to an empty list (any slot).
        """
        for existing in RequestRepository.get_for_month(session, year, month, staff_id):
            session.delete(existing)
        session.flush()

        now = utcnow()
        records = []
        for entry in entries:
            day = date.fromisoformat(str(entry["date"])).isoformat()
            records.append(
                StaffRequest(
                    id=generate_id("req"),
                    staff_id=staff_id,
                    date=day,
                    available=bool(entry["available"]),
                    available_slots=list(entry.get("available_slots") or []),
                    updated_at=now,
                )
            )
        session.add_all(records)
        session.commit()
        return records

    @staticmethod
    def bulk_create(session: Session, requests: List[StaffRequest]) -> None:
        session.add_all(requests)
        session.commit()


class AssignmentRepository:
    """Repository for assignment data access."""

    @staticmethod
    def get_all(session: Session) -> List[Assignment]:
        return session.query(Assignment).order_by(Assignment.date, Assignment.slot_id).all()

    @staticmethod
    def get_by_month(session: Session, year: int, month: int) -> List[Assignment]:
        """Get all assignments for a specific month."""
        return (
            session.query(Assignment)
            .filter(Assignment.year == year, Assignment.month == month)
            .order_by(Assignment.date, Assignment.slot_id, Assignment.staff_id)
            .all()
        )

    @staticmethod
    def get_by_id(session: Session, assignment_id: str) -> Optional[Assignment]:
        return session.get(Assignment, assignment_id)

    @staticmethod
    def save(session: Session, assignment: Assignment) -> Assignment:
        assignment = session.merge(assignment)
        session.commit()
        return assignment

    @staticmethod
    def replace_month(
        session: Session, year: int, month: int, assignments: List[Assignment]
    ) -> int:
        """Delete the month's assignments and store the new ones. Returns number deleted."""
        existing = AssignmentRepository.get_by_month(session, year, month)
        for assignment in existing:
            session.delete(assignment)
        session.flush()
        session.add_all(assignments)
        session.commit()
        return len(existing)

    @staticmethod
    def add_missing(session: Session, assignments: List[Assignment]) -> int:
        """Store only assignments whose id is not stored yet. Returns number added."""
        ids = [a.id for a in assignments]
        stored = {
            row[0]
            for row in session.query(Assignment.id).filter(Assignment.id.in_(ids)).all()
        } if ids else set()
        fresh = [a for a in assignments if a.id not in stored]
        session.add_all(fresh)
        session.commit()
        return len(fresh)

    @staticmethod
    def delete(session: Session, assignment_id: str) -> bool:
        assignment = session.get(Assignment, assignment_id)
        if assignment is None:
            return False
        session.delete(assignment)
        session.commit()
        return True
