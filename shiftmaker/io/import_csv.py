"""CSV import utilities to load roster and availability data into the database."""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from shiftmaker.domain.models import Staff, StaffRequest, utcnow
from shiftmaker.domain.repositories import (
    generate_id,
    parse_priority,
    parse_role,
    parse_weekly_limit,
)

logger = logging.getLogger(__name__)

TRUTHY = {"TRUE", "T", "1", "YES", "Y"}


def _cell(row: pd.Series, column: str):
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return value


def import_staff_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import staff from CSV into database.

    Columns: id (optional), name, role, priority, weekly_limit (optional).

    Args:
        session: Database session
        csv_path: Path to staff CSV

    Returns:
        Number of staff imported
    """
    df = pd.read_csv(csv_path, dtype=str)

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()

    # Rows keep file order in the roster, which sorts by created_at
    now = utcnow()
    staff = []
    for idx, row in df.iterrows():
        name = _cell(row, "name")
        if not name or not str(name).strip():
            raise ValueError(f"Row {idx + 2}: staff name is required")
        staff.append(
            Staff(
                id=str(_cell(row, "id") or generate_id("staff")).strip(),
                name=str(name).strip(),
                role=parse_role(_cell(row, "role")).value,
                priority=parse_priority(_cell(row, "priority") or 3),
                weekly_limit=parse_weekly_limit(_cell(row, "weekly_limit")),
                created_at=now + timedelta(microseconds=len(staff)),
            )
        )

    # Bulk insert
    session.add_all(staff)
    session.commit()

    logger.info("Imported %d staff from %s", len(staff), csv_path)
    return len(staff)


def import_requests_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import availability requests from CSV into database.

    Columns: id (optional), staff_id, date, available, available_slots
    (semicolon-separated slot ids; blank accepts any slot). A later row for
    the same (staff_id, date) replaces an earlier one.

    Returns:
        Number of requests imported
    """
    df = pd.read_csv(csv_path, dtype=str)

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    df["date"] = pd.to_datetime(df["date"]).dt.strftime("%Y-%m-%d")
    df = df.drop_duplicates(subset=["staff_id", "date"], keep="last")

    now = utcnow()
    requests = []
    for _, row in df.iterrows():
        slots_raw = _cell(row, "available_slots")
        slots = [s.strip() for s in str(slots_raw).split(";") if s.strip()] if slots_raw else []
        requests.append(
            StaffRequest(
                id=str(_cell(row, "id") or generate_id("req")).strip(),
                staff_id=str(row["staff_id"]).strip(),
                date=row["date"],
                available=str(_cell(row, "available") or "TRUE").strip().upper() in TRUTHY,
                available_slots=slots,
                updated_at=now,
            )
        )

    # Bulk insert
    session.add_all(requests)
    session.commit()

    logger.info("Imported %d requests from %s", len(requests), csv_path)
    return len(requests)
