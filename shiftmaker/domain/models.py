"""SQLAlchemy models for restaurant shift scheduling."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, relationship


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    """Categorical staffing capability. Roles are mutually exclusive, not ranked."""

    LEADER = "leader"
    HALL = "hall"
    KITCHEN = "kitchen"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Leader coverage is filled first within every slot
ROLE_ORDER = (Role.LEADER, Role.HALL, Role.KITCHEN)


class DayType(str, Enum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Staff(Base):
    """Roster member with a single role and a scheduling priority."""

    __tablename__ = "staff"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False)  # leader, hall, kitchen
    priority = Column(Integer, nullable=False, default=3)  # 1-5, 5 = preferred
    weekly_limit = Column(Integer, nullable=True)  # max assignments per Mon-Sun week
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    assignments = relationship("Assignment", back_populates="staff", cascade="all, delete-orphan")
    requests = relationship("StaffRequest", back_populates="staff", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Staff(id={self.id!r}, name={self.name!r}, role={self.role!r}, priority={self.priority})>"


class ShiftSlot(Base):
    """Named time window within a day, shared by every month."""

    __tablename__ = "shift_slots"

    id = Column(String(64), primary_key=True)
    label = Column(String(50), nullable=False)  # e.g. "08:00-17:00"
    order = Column("display_order", Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<ShiftSlot(id={self.id!r}, label={self.label!r}, order={self.order})>"


class Requirement(Base):
    """Headcount needed for a (day type, slot, role) triple."""

    __tablename__ = "requirements"

    id = Column(String(64), primary_key=True)
    day_type = Column(String(20), nullable=False)  # weekday, weekend
    slot_id = Column(String(64), ForeignKey("shift_slots.id"), nullable=False)
    role = Column(String(20), nullable=False)
    count = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<Requirement(day_type={self.day_type!r}, slot={self.slot_id!r}, "
            f"role={self.role!r}, count={self.count})>"
        )


class StaffRequest(Base):
    """
    Availability for one staff member on one date.

    ``available=False`` excludes the whole day. ``available=True`` with a
    non-empty ``available_slots`` restricts the day to those slot ids; an empty
    list accepts any slot. No request at all means available everywhere.
    """

    __tablename__ = "staff_requests"

    id = Column(String(64), primary_key=True)
    staff_id = Column(String(64), ForeignKey("staff.id"), nullable=False)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    available = Column(Boolean, nullable=False, default=True)
    available_slots = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    staff = relationship("Staff", back_populates="requests")

    def __repr__(self) -> str:
        return (
            f"<StaffRequest(staff={self.staff_id!r}, date={self.date!r}, "
            f"available={self.available}, slots={self.available_slots!r})>"
        )


class Assignment(Base):
    """A staff member placed in a slot on a date."""

    __tablename__ = "assignments"

    id = Column(String(200), primary_key=True)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    slot_id = Column(String(64), ForeignKey("shift_slots.id"), nullable=False)
    staff_id = Column(String(64), ForeignKey("staff.id"), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    is_manual = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    staff = relationship("Staff", back_populates="assignments")

    def __repr__(self) -> str:
        return (
            f"<Assignment(id={self.id!r}, date={self.date!r}, slot={self.slot_id!r}, "
            f"staff={self.staff_id!r}, manual={self.is_manual})>"
        )


@dataclass
class MonthSettings:
    """Slots and requirements in effect for a month."""

    year: int
    month: int
    slots: List[ShiftSlot] = field(default_factory=list)
    requirements: List[Requirement] = field(default_factory=list)

    def sorted_slots(self) -> List[ShiftSlot]:
        return sorted(self.slots, key=lambda s: s.order)

    def slot_by_id(self, slot_id: str) -> ShiftSlot | None:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None


DEFAULT_SLOTS = (
    ("slot-1", "08:00-17:00", 1),
    ("slot-2", "11:00-L", 2),
    ("slot-3", "17:00-22:00", 3),
)


def default_month_settings(year: int, month: int) -> MonthSettings:
    """Settings used before any slot has been configured."""
    slots = [ShiftSlot(id=sid, label=label, order=order) for sid, label, order in DEFAULT_SLOTS]
    return MonthSettings(year=year, month=month, slots=slots, requirements=[])
