"""Sample roster, settings and requests for February 2026."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from shiftmaker.config import RequirementConfig, SchedulerConfig
from shiftmaker.domain.models import Staff, StaffRequest
from shiftmaker.domain.repositories import (
    RequestRepository,
    SettingsRepository,
    StaffRepository,
)

logger = logging.getLogger(__name__)

SEED_YEAR = 2026
SEED_MONTH = 2

SEED_CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)
SEED_UPDATED = datetime(2026, 1, 20, tzinfo=timezone.utc)

# (id, name, role, priority, weekly_limit)
SEED_STAFF = [
    ("staff-01", "Hana Yamada", "leader", 5, 5),
    ("staff-02", "Taro Suzuki", "leader", 4, 4),
    ("staff-03", "Ichiro Tanaka", "hall", 4, 5),
    ("staff-04", "Misaki Sato", "hall", 3, 4),
    ("staff-05", "Kenji Ito", "hall", 3, None),
    ("staff-06", "Yumi Watanabe", "hall", 2, 3),
    ("staff-07", "Koji Nakamura", "kitchen", 5, 5),
    ("staff-08", "Keiko Kobayashi", "kitchen", 4, 4),
    ("staff-09", "Daisuke Kato", "kitchen", 3, None),
    ("staff-10", "Sakura Matsumoto", "kitchen", 2, 3),
]

# (day_type, slot_id, role, count); slots are the default three
SEED_REQUIREMENTS = [
    ("weekday", "slot-1", "leader", 1),
    ("weekday", "slot-1", "hall", 1),
    ("weekday", "slot-1", "kitchen", 1),
    ("weekday", "slot-2", "leader", 1),
    ("weekday", "slot-2", "hall", 2),
    ("weekday", "slot-2", "kitchen", 1),
    ("weekday", "slot-3", "leader", 1),
    ("weekday", "slot-3", "hall", 2),
    ("weekday", "slot-3", "kitchen", 1),
    ("weekend", "slot-1", "leader", 1),
    ("weekend", "slot-1", "hall", 2),
    ("weekend", "slot-1", "kitchen", 1),
    ("weekend", "slot-2", "leader", 1),
    ("weekend", "slot-2", "hall", 3),
    ("weekend", "slot-2", "kitchen", 2),
    ("weekend", "slot-3", "leader", 1),
    ("weekend", "slot-3", "hall", 3),
    ("weekend", "slot-3", "kitchen", 2),
]

# (id, staff_id, date, available, available_slots)
SEED_REQUESTS = [
    ("req-s1-1", "staff-01", "2026-02-01", False, []),
    ("req-s1-2", "staff-01", "2026-02-02", False, []),
    ("req-s2-1", "staff-02", "2026-02-14", False, []),
    ("req-s2-2", "staff-02", "2026-02-15", False, []),
    ("req-s3-1", "staff-03", "2026-02-10", True, ["slot-3"]),
    ("req-s3-2", "staff-03", "2026-02-11", True, ["slot-3"]),
    ("req-s6-1", "staff-06", "2026-02-20", False, []),
]


def seed_database(session: Session) -> None:
    """Replace roster, settings and requests. Existing staff take their assignments with them."""
    for member in StaffRepository.get_all(session):
        session.delete(member)
    for req in RequestRepository.get_all(session):
        session.delete(req)
    session.flush()

    StaffRepository.bulk_create(
        session,
        [
            Staff(id=sid, name=name, role=role, priority=priority, weekly_limit=limit, created_at=SEED_CREATED)
            for sid, name, role, priority, limit in SEED_STAFF
        ],
    )

    cfg = SchedulerConfig(
        requirements=[RequirementConfig(day_type, slot_id, role, count) for day_type, slot_id, role, count in SEED_REQUIREMENTS]
    ).validate()
    SettingsRepository.save(session, cfg.to_month_settings(SEED_YEAR, SEED_MONTH))

    RequestRepository.bulk_create(
        session,
        [
            StaffRequest(
                id=rid,
                staff_id=staff_id,
                date=day,
                available=available,
                available_slots=slots,
                updated_at=SEED_UPDATED,
            )
            for rid, staff_id, day, available, slots in SEED_REQUESTS
        ],
    )
    logger.info(
        "Seeded %d staff and %d requests for %04d-%02d",
        len(SEED_STAFF),
        len(SEED_REQUESTS),
        SEED_YEAR,
        SEED_MONTH,
    )
