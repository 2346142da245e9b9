"""Pytest configuration and shared fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shiftmaker.domain.models import Base, MonthSettings, Requirement, ShiftSlot


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def three_slots():
    return [
        ShiftSlot(id="slot-1", label="08:00-17:00", order=1),
        ShiftSlot(id="slot-2", label="11:00-L", order=2),
        ShiftSlot(id="slot-3", label="17:00-22:00", order=3),
    ]


@pytest.fixture
def settings_factory(three_slots):
    """Build MonthSettings from (day_type, slot_id, role, count) tuples."""

    def _build(year, month, rows, slots=None):
        requirements = [
            Requirement(id=f"req-{idx}", day_type=day_type, slot_id=slot_id, role=role, count=count)
            for idx, (day_type, slot_id, role, count) in enumerate(rows, start=1)
        ]
        return MonthSettings(year=year, month=month, slots=slots or three_slots, requirements=requirements)

    return _build
